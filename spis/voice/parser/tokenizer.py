"""Transcript tokenization.

Splits raw transcript text into typed tokens. Word classification is
delegated to a TokenProvider so the vocabulary can be swapped or extended
without touching the splitting rules.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import replace
from typing import Iterable

from spis.voice.models import Token, TokenizationResult, TokenKind
from spis.voice.parser.numbers import (
    HUNDREDS_WORDS,
    ONES_WORDS,
    TENS_WORDS,
    is_digit_token,
    normalize_polish,
)
from spis.voice.parser.vocabulary import (
    CONNECTOR_WORDS,
    FRACTION_WORDS,
    LETTER_NAMES,
    SINGLE_WORD_UNITS,
    SYMBOL_WORDS,
)

logger = logging.getLogger(__name__)

_TRIM_CHARS = ",.;:"


class TokenProvider(ABC):
    """Maps a cleaned word to a pre-classified token."""

    @abstractmethod
    def token_for(self, word: str) -> Token | None:
        """Return a token for a lowercase, punctuation-trimmed word, or None."""


class DictionaryTokenProvider(TokenProvider):
    """Default provider built from the fixed Polish vocabulary.

    Lookup order: connectors, fractions, symbols, units, number words,
    letter names, single letters, then configured known words.
    """

    def __init__(self, known_words: Iterable[str] | None = None):
        if known_words is None:
            from spis.voice.config_models import get_voice_config
            known_words = get_voice_config().vocabulary.known_words

        table: dict[str, Token] = {}
        for word in known_words:
            key = normalize_polish(word.strip().lower())
            if key:
                table[key] = Token(value=key.upper(), kind=TokenKind.WORD)
        for word, letter in LETTER_NAMES.items():
            table[word] = Token(value=letter, kind=TokenKind.LETTER)
        for numbers in (ONES_WORDS, TENS_WORDS, HUNDREDS_WORDS):
            for word, value in numbers.items():
                table[word] = Token(value=str(value), kind=TokenKind.NUMBER, number_value=value)
        for word, unit in SINGLE_WORD_UNITS.items():
            table[word] = Token(value=unit.label, kind=TokenKind.UNIT, unit=unit)
        for word, symbol in SYMBOL_WORDS.items():
            table[word] = Token(value=symbol, kind=TokenKind.SYMBOL)
        for word, fraction in FRACTION_WORDS.items():
            table[word] = Token(value=fraction, kind=TokenKind.FRACTION)
        for word in CONNECTOR_WORDS:
            table[word] = Token(value=word, kind=TokenKind.CONNECTOR)
        self._table = table

    def token_for(self, word: str) -> Token | None:
        key = normalize_polish(word)
        token = self._table.get(key)
        if token is not None:
            return token
        if len(key) == 1 and key.isascii() and key.isalpha():
            return Token(value=key.upper(), kind=TokenKind.LETTER)
        return None


class Tokenizer:
    """Splits text on whitespace and classifies each word."""

    def __init__(self, provider: TokenProvider | None = None):
        self.provider = provider or DictionaryTokenProvider()

    def tokenize(self, text: str) -> TokenizationResult:
        tokens: list[Token] = []
        unknown: list[str] = []

        for raw_word in text.split():
            cleaned = raw_word.lower().strip(_TRIM_CHARS)

            provided = self.provider.token_for(cleaned)
            if provided is not None:
                # Known words are spelled as spoken, like unknown ones.
                value = raw_word.upper() if provided.kind == TokenKind.WORD else provided.value
                tokens.append(replace(
                    provided,
                    value=value,
                    from_dictionary=True,
                    source_text=raw_word,
                ))
                continue

            if is_digit_token(cleaned):
                tokens.append(Token(
                    value=cleaned,
                    kind=TokenKind.NUMBER,
                    number_value=int(cleaned),
                    source_text=raw_word,
                ))
                continue

            if cleaned.isalpha() and cleaned not in unknown:
                unknown.append(cleaned)

            tokens.append(Token(
                value=raw_word.upper(),
                kind=TokenKind.WORD,
                source_text=raw_word,
            ))

        if unknown:
            logger.debug(f"Unknown words: {', '.join(unknown)}")

        return TokenizationResult(tokens=tuple(tokens), unknown_words=tuple(unknown))
