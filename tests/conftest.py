"""Shared test fixtures for Spis tests.

Provides:
- Isolation of the cached voice config between tests
- Temporary config files
- Ready-made parser/router instances built from explicit settings
"""

import logging
from collections.abc import Generator
from pathlib import Path

import pytest
import structlog

from spis.voice.config_models import (
    DEFAULT_FUZZY_PREFIXES,
    DEFAULT_KNOWN_WORDS,
    reset_voice_config,
)


# ─────────────────────────────────────────────────────────────────────────────
# Path Constants
# ─────────────────────────────────────────────────────────────────────────────

PROJECT_ROOT = Path(__file__).parent.parent
VOICE_YAML = PROJECT_ROOT / "args" / "voice.yaml"


# ─────────────────────────────────────────────────────────────────────────────
# Config Fixtures
# ─────────────────────────────────────────────────────────────────────────────


@pytest.fixture(autouse=True)
def fresh_voice_config() -> Generator[None, None, None]:
    """Make every test load the voice config from scratch."""
    reset_voice_config()
    yield
    reset_voice_config()


@pytest.fixture
def shipped_voice_yaml() -> Path:
    """The voice.yaml checked into args/."""
    return VOICE_YAML


@pytest.fixture
def voice_yaml(tmp_path: Path):
    """Write a voice.yaml into a temp dir.

    Returns:
        Callable taking YAML text and returning the file path
    """
    def _write(content: str) -> Path:
        path = tmp_path / "voice.yaml"
        path.write_text(content, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def restore_logging() -> Generator[None, None, None]:
    """Put root logging and structlog back the way the test found them."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
    structlog.reset_defaults()


# ─────────────────────────────────────────────────────────────────────────────
# Parser Fixtures
# ─────────────────────────────────────────────────────────────────────────────


@pytest.fixture
def token_provider():
    from spis.voice.parser.tokenizer import DictionaryTokenProvider
    return DictionaryTokenProvider(known_words=DEFAULT_KNOWN_WORDS)


@pytest.fixture
def tokenizer(token_provider):
    from spis.voice.parser.tokenizer import Tokenizer
    return Tokenizer(token_provider)


@pytest.fixture
def inventory_parser(tokenizer):
    from spis.voice.parser.normalizer import InventoryParser
    return InventoryParser(tokenizer=tokenizer)


@pytest.fixture
def voice_parser():
    from spis.voice.parser.command_parser import VoiceCommandParser
    return VoiceCommandParser(max_marker_tokens=6)


@pytest.fixture
def code_normalizer():
    from spis.voice.parser.code_mode import CodeModeNormalizer
    return CodeModeNormalizer(fuzzy_prefixes=DEFAULT_FUZZY_PREFIXES)


@pytest.fixture
def router(voice_parser, code_normalizer):
    from spis.voice.parser.command_router import CommandRouter
    return CommandRouter(
        voice_parser=voice_parser,
        code_normalizer=code_normalizer,
        trigger_aliases=["kod", "kot", "kat", "kąt"],
        trigger_search_tokens=3,
    )
