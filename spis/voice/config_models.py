from __future__ import annotations

import logging

import yaml
from pydantic import BaseModel, ConfigDict, Field

from spis.voice import CONFIG_PATH

logger = logging.getLogger(__name__)


DEFAULT_KNOWN_WORDS: list[str] = [
    "kabel",
    "przewod",
    "hager",
    "bax",
    "rura",
    "peszel",
    "puszka",
    "gniazdo",
    "wylacznik",
    "rozdzielnica",
    "listwa",
    "korytko",
    "zlaczka",
    "opaska",
    "tasma",
    "bezpiecznik",
    "oprawa",
    "zarowka",
]

DEFAULT_FUZZY_PREFIXES: dict[str, str] = {
    "mysl": "-",
    "minu": "-",
    "fles": "/",
    "slas": "/",
    "sles": "/",
    "ukos": "/",
    "fau": "V",
    "fal": "V",
    "wal": "V",
    "kup": "Q",
    "kol": "Q",
    "kuu": "Q",
}


# =============================================================================
# VoiceConfig (args/voice.yaml)
# =============================================================================

class VocabularyConfig(BaseModel):
    model_config = ConfigDict(extra="allow")
    known_words: list[str] = Field(default_factory=lambda: list(DEFAULT_KNOWN_WORDS))


class MarkersConfig(BaseModel):
    model_config = ConfigDict(extra="allow")
    max_prefix_tokens: int = Field(default=6, ge=1)


class CodeModeConfig(BaseModel):
    model_config = ConfigDict(extra="allow")
    fuzzy_prefixes: dict[str, str] = Field(default_factory=lambda: dict(DEFAULT_FUZZY_PREFIXES))
    trigger_aliases: list[str] = Field(default_factory=lambda: ["kod", "kot", "kat", "kąt"])
    trigger_search_tokens: int = Field(default=3, ge=1)


class VoiceConfig(BaseModel):
    model_config = ConfigDict(extra="allow")
    vocabulary: VocabularyConfig = Field(default_factory=VocabularyConfig)
    markers: MarkersConfig = Field(default_factory=MarkersConfig)
    code_mode: CodeModeConfig = Field(default_factory=CodeModeConfig)


# =============================================================================
# load_and_validate
# =============================================================================

def load_and_validate(path=None) -> VoiceConfig:
    """Read voice settings from YAML, falling back to defaults on any problem."""
    yaml_path = path or CONFIG_PATH

    try:
        if yaml_path.exists():
            with open(yaml_path, encoding="utf-8") as f:
                raw = yaml.safe_load(f) or {}
        else:
            raw = {}

        return VoiceConfig.model_validate(raw)
    except Exception as e:
        logger.warning(f"Config validation failed for {yaml_path}: {e}, using defaults")
        return VoiceConfig()


_voice_config: VoiceConfig | None = None


def get_voice_config() -> VoiceConfig:
    """Get the process-wide voice config, loading it on first use."""
    global _voice_config
    if _voice_config is None:
        _voice_config = load_and_validate()
    return _voice_config


def reset_voice_config() -> None:
    """Forget the cached config so the next call reloads it."""
    global _voice_config
    _voice_config = None
