"""Transcript parsing: numbers, tokens, item text, commands, routing."""

from spis.voice.parser.code_mode import CodeModeNormalizer
from spis.voice.parser.command_parser import VoiceCommandParser
from spis.voice.parser.command_router import CommandRouter, route_transcription
from spis.voice.parser.normalizer import InventoryParser, Normalizer
from spis.voice.parser.tokenizer import DictionaryTokenProvider, TokenProvider, Tokenizer

__all__ = [
    "CodeModeNormalizer",
    "CommandRouter",
    "DictionaryTokenProvider",
    "InventoryParser",
    "Normalizer",
    "TokenProvider",
    "Tokenizer",
    "VoiceCommandParser",
    "route_transcription",
]
