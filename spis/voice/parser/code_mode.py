"""Code mode: decode a spelled-out identifier into a compact code.

"igrek de igrek trzy na jeden i pół" -> "YDY3x1,5"
"a kropka 0204 zet 2035"            -> "A.0204Z2035"

Letters are spoken by name, digits and numbers by word, punctuation by
word. Number words accumulate into segments ("sto czterdziesci dwa" is
one segment, "jeden dwa trzy" is three) and each closed segment is written
out as digits.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from fractions import Fraction
from typing import Mapping, Sequence

from spis.voice.parser.numbers import (
    HUNDREDS_WORDS,
    ONES_WORDS,
    TENS_WORDS,
    ParsedNumber,
    is_digit_token,
    normalize_polish,
    parse_spoken_number,
)
from spis.voice.parser.vocabulary import LETTER_NAMES, MULTIPLY, SYMBOL_WORDS

logger = logging.getLogger(__name__)

ALLOWED_CHARS = frozenset("ABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789.,/+-x")

CODE_ALIASES: dict[str, str] = {
    **LETTER_NAMES,
    **{word: (MULTIPLY if symbol == "x" else symbol) for word, symbol in SYMBOL_WORDS.items()},
    "przez": MULTIPLY,
}

ORDINAL_DENOMINATORS: dict[str, int] = {
    "druga": 2,
    "drugie": 2,
    "drugich": 2,
    "trzecia": 3,
    "trzecie": 3,
    "trzecich": 3,
    "czwarta": 4,
    "czwarte": 4,
    "czwartych": 4,
    "piata": 5,
    "piate": 5,
    "piatych": 5,
    "szosta": 6,
    "szoste": 6,
    "osma": 8,
    "osme": 8,
    "osmych": 8,
}

_GLUE_WINDOWS = (3, 2, 1)


@dataclass(frozen=True)
class CodeModeResult:
    normalized: str
    tokens: tuple[str, ...] = ()


@dataclass
class _Segment:
    """Open run of number words that still form one value."""

    value: int | None = None
    has_hundreds: bool = False
    has_tens: bool = False
    has_teens: bool = False

    @property
    def is_open(self) -> bool:
        return self.value is not None


@dataclass
class _ScanState:
    out: list[str] = field(default_factory=list)
    segment: _Segment = field(default_factory=_Segment)

    def flush(self) -> None:
        if self.segment.is_open:
            self.out.append(str(self.segment.value))
        self.segment = _Segment()

    def emit(self, text: str) -> None:
        self.flush()
        self.out.append(text)


def tokenize_code(text: str) -> list[str]:
    words = (normalize_polish(w.strip(",.;:").lower()) for w in text.split())
    return [w for w in words if w]


def finalize(text: str) -> str:
    """Uppercase, restore the lowercase multiplication marker, drop stray chars."""
    upper = text.upper().replace(MULTIPLY, "x")
    return "".join(ch for ch in upper if ch in ALLOWED_CHARS)


def _leading_number(tokens: Sequence[str], index: int) -> tuple[str, int] | None:
    """Digits as written, or a spoken number, starting at index."""
    if index >= len(tokens):
        return None
    if is_digit_token(tokens[index]):
        return tokens[index], 1
    parsed: ParsedNumber | None = parse_spoken_number(tokens, index)
    if parsed is None:
        return None
    return str(parsed.value), parsed.consumed


def _ordinal_fraction(tokens: Sequence[str], index: int) -> tuple[Fraction, int] | None:
    """Decode "jedna druga" / "trzy czwarte" style fractions at index."""
    numerator = parse_spoken_number(tokens, index)
    if numerator is None:
        return None
    den_index = index + numerator.consumed
    if den_index >= len(tokens):
        return None
    denominator = ORDINAL_DENOMINATORS.get(tokens[den_index])
    if denominator is None:
        return None
    return Fraction(numerator.value, denominator), numerator.consumed + 1


def rewrite_fractions(tokens: Sequence[str]) -> list[str]:
    """Collapse spoken fractions into literal tokens ("2,5", "3/4", "1,5")."""
    out: list[str] = []
    index = 0
    while index < len(tokens):
        token = tokens[index]
        if token == "poltora":
            out.append("1,5")
            index += 1
            continue

        number = _leading_number(tokens, index)
        if number is not None:
            text, consumed = number
            after = index + consumed
            following = tokens[after] if after < len(tokens) else None

            if following == "i" and after + 1 < len(tokens):
                if tokens[after + 1] == "pol":
                    out.append(f"{text},5")
                    index = after + 2
                    continue
                fraction = _ordinal_fraction(tokens, after + 1)
                if fraction is not None:
                    value, used = fraction
                    suffix = {Fraction(1, 2): "5", Fraction(3, 4): "75"}.get(value)
                    if suffix is not None:
                        out.append(f"{text},{suffix}")
                        index = after + 1 + used
                        continue

            if following == "lamane":
                den_index = after + 1
                if den_index < len(tokens) and tokens[den_index] == "przez":
                    den_index += 1
                denominator = _leading_number(tokens, den_index)
                if denominator is not None:
                    out.append(f"{text}/{denominator[0]}")
                    index = den_index + denominator[1]
                    continue

        out.append(token)
        index += 1
    return out


def _looks_like_y(token: str) -> bool:
    """Common mis-transcriptions of the letter name "igrek"."""
    return token.startswith(("igr", "grek", "grec")) or token == "gry"


def _is_literal(token: str) -> bool:
    if "," in token or "/" in token or is_digit_token(token):
        return True
    head, sep, tail = token.partition("-")
    return bool(sep and head and tail)


class CodeModeNormalizer:
    """Decodes spelled identifiers; see module docstring."""

    def __init__(self, fuzzy_prefixes: Mapping[str, str] | None = None):
        if fuzzy_prefixes is None:
            from spis.voice.config_models import get_voice_config
            fuzzy_prefixes = get_voice_config().code_mode.fuzzy_prefixes
        self.fuzzy_prefixes = sorted(
            ((normalize_polish(p.lower()), s) for p, s in fuzzy_prefixes.items()),
            key=lambda item: len(item[0]),
            reverse=True,
        )

    def normalize(self, raw_text: str, enable_fuzzy: bool = False) -> CodeModeResult:
        trimmed = raw_text.strip()
        if not trimmed:
            return CodeModeResult("")

        # Already a code; only the case pass and the alphabet filter apply.
        if not any(ch.isspace() for ch in trimmed) and any(ch.isdigit() for ch in trimmed):
            return CodeModeResult(self._passthrough(trimmed), (trimmed,))

        tokens = rewrite_fractions(tokenize_code(trimmed))
        state = _ScanState()
        index = 0
        while index < len(tokens):
            index += self._scan(tokens, index, state, enable_fuzzy)
        state.flush()

        normalized = finalize("".join(state.out))
        logger.debug(f"Code mode {trimmed!r} -> {normalized!r} tokens={tokens}")
        return CodeModeResult(normalized, tuple(tokens))

    @staticmethod
    def _passthrough(code: str) -> str:
        return "".join(
            ch if ch == "x" else ch.upper()
            for ch in code
            if ch == "x" or ch.upper() in ALLOWED_CHARS
        )

    def _scan(self, tokens: Sequence[str], index: int, state: _ScanState, enable_fuzzy: bool) -> int:
        """Consume tokens at index; returns how many were used."""
        glued = self._glued_alias(tokens, index)
        if glued is not None:
            mapped, size = glued
            state.emit(mapped)
            return size

        token = tokens[index]
        segment = state.segment

        if _is_literal(token):
            state.emit(token)
        elif token == "zero":
            state.emit("0")
        elif token in HUNDREDS_WORDS:
            if segment.has_hundreds or segment.has_tens or segment.has_teens:
                state.flush()
            self._add(state, HUNDREDS_WORDS[token], "has_hundreds")
        elif token in TENS_WORDS:
            if segment.has_tens or segment.has_teens:
                state.flush()
            self._add(state, TENS_WORDS[token], "has_tens")
        elif token in ONES_WORDS and ONES_WORDS[token] >= 10:
            if segment.has_tens or segment.has_teens:
                state.flush()
            self._add(state, ONES_WORDS[token], "has_teens")
        elif token in ONES_WORDS:
            # Ones only extend a hundreds or tens segment; teens are atomic.
            if segment.is_open and not (segment.has_hundreds or segment.has_tens):
                state.flush()
            self._add(state, ONES_WORDS[token], None)
        elif len(token) == 1 and token.isalpha():
            state.emit(token.upper())
        else:
            symbol = self._fuzzy_symbol(token) if enable_fuzzy else None
            if symbol is None and _looks_like_y(token):
                symbol = "Y"
            if symbol is not None:
                state.emit(symbol)
            else:
                logger.debug(f"Code mode skipped token {token!r}")
        return 1

    @staticmethod
    def _add(state: _ScanState, value: int, flag: str | None) -> None:
        segment = state.segment
        segment.value = (segment.value or 0) + value
        if flag is not None:
            setattr(segment, flag, True)

    @staticmethod
    def _glued_alias(tokens: Sequence[str], index: int) -> tuple[str, int] | None:
        """Letter or symbol name, possibly split across up to three tokens."""
        for size in _GLUE_WINDOWS:
            window = tokens[index:index + size]
            if len(window) < size:
                continue
            mapped = CODE_ALIASES.get("".join(window))
            if mapped is not None:
                return mapped, size
        return None

    def _fuzzy_symbol(self, token: str) -> str | None:
        for prefix, symbol in self.fuzzy_prefixes:
            if token.startswith(prefix):
                return symbol
        return None
