"""Voice command parsing: marker commands and quantity-trigger commands.

Uses ordered trigger tables; the first matching marker phrase wins and the
unit alias table is scanned longest alias first. Anything unrecognized
falls back to a plain item named by the transcript itself.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Sequence

from spis.voice.models import AddMarker, Ignored, Item, ParseStatus, UnitType, VoiceCommandResult
from spis.voice.parser.numbers import (
    ParsedNumber,
    is_digit_token,
    normalize_polish,
    parse_spoken_number,
)
from spis.voice.parser.vocabulary import SORTED_UNIT_ALIASES

logger = logging.getLogger(__name__)

QUANTITY_TRIGGER_RE = re.compile(r"\b(ilość|ilosc|ilości|ilosci)\b", re.IGNORECASE)

NO_MARKER_TEXT = "no marker text"


@dataclass(frozen=True)
class MarkerAlias:
    prefix: str
    tokens: tuple[str, ...]


# Checked in order; phonetic near-misses come from real transcripts.
MARKER_ALIASES: tuple[MarkerAlias, ...] = (
    MarkerAlias("dodaj marker", ("dodaj", "marker")),
    MarkerAlias("dodaj markier", ("dodaj", "markier")),
    MarkerAlias("dodac marker", ("dodac", "marker")),
    MarkerAlias("dodac markier", ("dodac", "markier")),
    MarkerAlias("duda i marker", ("duda", "i", "marker")),
    MarkerAlias("duda i markier", ("duda", "i", "markier")),
)


@dataclass(frozen=True)
class QuantityParse:
    """Quantity and unit decoded from the text after a trigger word."""

    quantity: int | None
    unit: UnitType | None
    status: ParseStatus
    debug: tuple[str, ...] = ()


def split_words(text: str, strip_chars: str = ",.;:") -> list[str]:
    """Lowercase whitespace-separated words with surrounding punctuation removed."""
    words = (w.strip(strip_chars).lower() for w in text.split())
    return [w for w in words if w]


def find_unit(words: Sequence[str]) -> UnitType | None:
    """Sliding-window unit alias match; multi-word aliases win at each position."""
    folded = [normalize_polish(w) for w in words]
    for index in range(len(folded)):
        for alias in SORTED_UNIT_ALIASES:
            end = index + len(alias.tokens)
            if end <= len(folded) and tuple(folded[index:end]) == alias.tokens:
                return alias.unit
    return None


def find_quantity(words: Sequence[str]) -> ParsedNumber | None:
    """First literal 0-999 digit word, else the first decodable spoken number."""
    tokens = [normalize_polish(w) for w in words]

    for index, token in enumerate(tokens):
        if is_digit_token(token) and int(token) <= 999:
            return ParsedNumber(int(token), 1, index)

    for index in range(len(tokens)):
        parsed = parse_spoken_number(tokens, index)
        if parsed is not None:
            return parsed

    return None


def parse_quantity_and_unit(tail: str) -> QuantityParse:
    """Decode "<number> [unit]" from the text following a quantity trigger."""
    words = split_words(tail)
    parsed = find_quantity(words)
    if parsed is None:
        return QuantityParse(
            quantity=None,
            unit=None,
            status=ParseStatus.WARNING,
            debug=("VoiceCommand: quantity trigger without numeric value",),
        )

    consumed = range(parsed.start_index, parsed.start_index + parsed.consumed)
    remaining = [w for i, w in enumerate(words) if i not in consumed]
    unit = find_unit(remaining)

    debug = [f"VoiceCommand: parsed quantity={parsed.value} unit={unit.label if unit else 'none'}"]
    if unit is None:
        debug.append("VoiceCommand: no unit alias found")

    return QuantityParse(
        quantity=parsed.value,
        unit=unit,
        status=ParseStatus.OK,
        debug=tuple(debug),
    )


class VoiceCommandParser:
    """Detects marker and quantity commands in a transcript."""

    def __init__(self, max_marker_tokens: int | None = None):
        if max_marker_tokens is None:
            from spis.voice.config_models import get_voice_config
            max_marker_tokens = get_voice_config().markers.max_prefix_tokens
        self.max_marker_tokens = max_marker_tokens

    def parse(self, raw_text: str) -> VoiceCommandResult:
        trimmed = raw_text.strip()
        if not trimmed:
            logger.info("VoiceCommand: empty input")
            return Item(name="", status=ParseStatus.FAIL, debug=("VoiceCommand: empty input",))

        marker = self.parse_marker_command(trimmed)
        if marker is not None:
            return marker

        quantity = self.parse_quantity_command(trimmed)
        if quantity is not None:
            return quantity

        debug = "VoiceCommand: no quantity trigger"
        logger.info(debug)
        return Item(name=trimmed, status=ParseStatus.OK, debug=(debug,))

    def parse_marker_command(self, raw_text: str) -> AddMarker | Ignored | None:
        """Match a leading "dodaj marker" style phrase.

        Returns None when no trigger phrase leads the text.
        """
        trimmed = raw_text.strip()
        spans = [
            (m.start(), normalize_polish(m.group().strip(",.:").lower()))
            for m in re.finditer(r"\S+", trimmed)
        ]
        spans = [(start, word) for start, word in spans if word]
        if not spans:
            return None

        candidates = tuple(word for _, word in spans[: self.max_marker_tokens])
        for alias in MARKER_ALIASES:
            size = len(alias.tokens)
            if size <= len(candidates) and candidates[:size] == alias.tokens:
                if size < len(spans):
                    marker_text = trimmed[spans[size][0]:].lstrip(" :,.").strip()
                else:
                    marker_text = ""

                if not marker_text:
                    debug = "VoiceCommand: ADD_MARKER ignored (empty marker text)"
                    logger.info(debug)
                    return Ignored(reason=NO_MARKER_TEXT, debug=(debug,))

                debug = f"VoiceCommand: ADD_MARKER (alias='{alias.prefix}') -> \"{marker_text}\""
                logger.info(debug)
                return AddMarker(name=marker_text, alias=alias.prefix, debug=(debug,))
        return None

    def parse_quantity_command(self, raw_text: str) -> Item | None:
        """Split "<name> ilosc <number> [unit]" into an item.

        Returns None when no quantity trigger word is present.
        """
        trimmed = raw_text.strip()
        match = QUANTITY_TRIGGER_RE.search(trimmed)
        if match is None:
            return None

        name = trimmed[: match.start()].strip()
        tail = trimmed[match.end():].strip()
        parsed = parse_quantity_and_unit(tail)

        if parsed.quantity is None:
            logger.info(parsed.debug[0])
            return Item(name=trimmed, status=ParseStatus.WARNING, debug=parsed.debug)

        status = parsed.status
        debug = list(parsed.debug)
        if not name:
            status = ParseStatus.FAIL
            debug.append("VoiceCommand: quantity without item name")

        logger.info(debug[0])
        return Item(
            name=name,
            quantity=parsed.quantity,
            unit=parsed.unit,
            status=status,
            debug=tuple(debug),
        )
