"""Voice Interface - spoken inventory commands.

Components:
    models.py: Data models (tokens, parse outcomes, command results)
    config_models.py: Vocabulary and code mode settings (args/voice.yaml)
    parser/: Number decoding, tokenizing, normalizing, command routing
    recognition/: Speech recognition provider interface

Usage:
    from spis.voice.parser.command_router import CommandRouter

    router = CommandRouter()
    routed = router.route("kabel trzy na dwa i pol ilosc piec metrow")
"""

from spis import ARGS_DIR

CONFIG_PATH = ARGS_DIR / "voice.yaml"

__all__ = [
    "CONFIG_PATH",
]
