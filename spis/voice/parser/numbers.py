"""Polish spoken number decoding.

Decodes number words ("sto czterdziesci dwa") into integers 0-999 and
folds Polish diacritics to ASCII so transcripts with and without
diacritics share one vocabulary.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Sequence

POLISH_CHAR_MAP: dict[str, str] = {
    "ą": "a",
    "ć": "c",
    "ę": "e",
    "ł": "l",
    "ń": "n",
    "ó": "o",
    "ś": "s",
    "ż": "z",
    "ź": "z",
}

_FOLD_TABLE = str.maketrans(POLISH_CHAR_MAP)

_DIGITS_RE = re.compile(r"[0-9]+")

# Ones and teens share one table: both may follow a bare hundreds word.
ONES_WORDS: dict[str, int] = {
    "zero": 0,
    "jeden": 1,
    "jedna": 1,
    "jedno": 1,
    "dwa": 2,
    "dwie": 2,
    "trzy": 3,
    "cztery": 4,
    "piec": 5,
    "szesc": 6,
    "siedem": 7,
    "osiem": 8,
    "dziewiec": 9,
    "dziesiec": 10,
    "jedenascie": 11,
    "dwanascie": 12,
    "trzynascie": 13,
    "czternascie": 14,
    "pietnascie": 15,
    "szesnascie": 16,
    "siedemnascie": 17,
    "osiemnascie": 18,
    "dziewietnascie": 19,
}

TENS_WORDS: dict[str, int] = {
    "dwadziescia": 20,
    "trzydziesci": 30,
    "czterdziesci": 40,
    "piecdziesiat": 50,
    "szescdziesiat": 60,
    "siedemdziesiat": 70,
    "osiemdziesiat": 80,
    "dziewiecdziesiat": 90,
}

HUNDREDS_WORDS: dict[str, int] = {
    "sto": 100,
    "dwiescie": 200,
    "trzysta": 300,
    "czterysta": 400,
    "piecset": 500,
    "szescset": 600,
    "siedemset": 700,
    "osiemset": 800,
    "dziewiecset": 900,
}


@dataclass(frozen=True)
class ParsedNumber:
    """A decoded number and the token span it came from."""

    value: int
    consumed: int
    start_index: int


def normalize_polish(text: str) -> str:
    """Fold Polish diacritics to their ASCII base letters."""
    return text.translate(_FOLD_TABLE)


def is_digit_token(token: str) -> bool:
    return bool(_DIGITS_RE.fullmatch(token))


def parse_number(tokens: Sequence[str], start_index: int) -> ParsedNumber | None:
    """Decode a literal 0-999 digit token or a spoken number at start_index."""
    if not 0 <= start_index < len(tokens):
        return None
    token = tokens[start_index]
    if is_digit_token(token) and int(token) <= 999:
        return ParsedNumber(int(token), 1, start_index)
    return parse_spoken_number(tokens, start_index)


def parse_spoken_number(tokens: Sequence[str], start_index: int) -> ParsedNumber | None:
    """Greedily decode number words starting at start_index.

    Accepted shapes: hundreds [tens [ones]], hundreds [ones/teens],
    tens [ones], ones/teens. Tokens are expected lowercase and folded.
    """
    if not 0 <= start_index < len(tokens):
        return None

    def lookup(table: dict[str, int], index: int) -> int | None:
        if index < len(tokens):
            return table.get(tokens[index])
        return None

    first = tokens[start_index]
    index = start_index

    hundreds = HUNDREDS_WORDS.get(first)
    if hundreds is not None:
        value = hundreds
        index += 1
        tens = lookup(TENS_WORDS, index)
        if tens is not None:
            value += tens
            index += 1
            ones = lookup(ONES_WORDS, index)
            if ones is not None and 1 <= ones <= 9:
                value += ones
                index += 1
            return ParsedNumber(value, index - start_index, start_index)

        ones = lookup(ONES_WORDS, index)
        if ones is not None and ones >= 1:
            value += ones
            index += 1
        return ParsedNumber(value, index - start_index, start_index)

    tens = TENS_WORDS.get(first)
    if tens is not None:
        value = tens
        index += 1
        ones = lookup(ONES_WORDS, index)
        if ones is not None and 1 <= ones <= 9:
            value += ones
            index += 1
        return ParsedNumber(value, index - start_index, start_index)

    ones = ONES_WORDS.get(first)
    if ones is not None:
        return ParsedNumber(ones, 1, start_index)

    return None
