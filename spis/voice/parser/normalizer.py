"""Item text normalization.

Turns a token stream into canonical item text ("YDY 3x2,5", "HAGER B16")
and pulls out a trailing quantity + unit pair when one is spoken.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence

from spis.voice.models import ParseOutcome, ParseStatus, Token, TokenKind, UnitType
from spis.voice.parser.tokenizer import Tokenizer

logger = logging.getLogger(__name__)

_TENS_VALUES = frozenset({10, 20, 30, 40, 50, 60, 70, 80, 90})


@dataclass(frozen=True)
class QuantityExtraction:
    quantity: int | None
    unit: UnitType | None
    remaining: tuple[Token, ...]
    debug: tuple[str, ...] = ()


def extract_quantity(tokens: Sequence[Token]) -> QuantityExtraction:
    """Remove the leftmost adjacent (Number, Unit) pair from the stream."""
    for index in range(len(tokens) - 1):
        current, following = tokens[index], tokens[index + 1]
        if (
            current.kind == TokenKind.NUMBER
            and current.number_value is not None
            and following.kind == TokenKind.UNIT
        ):
            remaining = (*tokens[:index], *tokens[index + 2:])
            label = following.unit.label if following.unit else ""
            return QuantityExtraction(
                quantity=current.number_value,
                unit=following.unit,
                remaining=tuple(remaining),
                debug=(f"Wykryto ilość: {current.number_value} {label}",),
            )
    return QuantityExtraction(quantity=None, unit=None, remaining=tuple(tokens))


def merge_decimals(tokens: Sequence[Token]) -> list[Token]:
    """Collapse Number, Connector, Fraction into one comma-decimal Number."""
    result: list[Token] = []
    index = 0
    while index < len(tokens):
        current = tokens[index]
        if (
            current.kind == TokenKind.NUMBER
            and index + 2 < len(tokens)
            and tokens[index + 1].kind == TokenKind.CONNECTOR
            and tokens[index + 2].kind == TokenKind.FRACTION
        ):
            fraction = tokens[index + 2].value
            _, sep, decimals = fraction.partition(",")
            decimal_part = decimals if sep else fraction
            result.append(Token(
                value=f"{current.value},{decimal_part}",
                kind=TokenKind.NUMBER,
                from_dictionary=current.from_dictionary,
            ))
            index += 3
        else:
            result.append(current)
            index += 1
    return result


def should_combine(left: int, right: int) -> bool:
    """Whether two adjacent numbers form one compound ("sto" "piecdziesiat")."""
    return (left >= 100 and right < 100) or (left in _TENS_VALUES and 1 <= right <= 9)


def merge_numbers(tokens: Sequence[Token]) -> list[Token]:
    """Sum adjacent numbers that form one compound value."""
    result: list[Token] = []
    pending: int | None = None
    pending_from_dictionary = False

    def flush() -> None:
        nonlocal pending, pending_from_dictionary
        if pending is not None:
            result.append(Token(
                value=str(pending),
                kind=TokenKind.NUMBER,
                number_value=pending,
                from_dictionary=pending_from_dictionary,
            ))
        pending = None
        pending_from_dictionary = False

    for token in tokens:
        if token.kind == TokenKind.NUMBER and token.number_value is not None:
            if pending is None:
                pending = token.number_value
                pending_from_dictionary = token.from_dictionary
            elif should_combine(pending, token.number_value):
                pending += token.number_value
                pending_from_dictionary = pending_from_dictionary and token.from_dictionary
            else:
                flush()
                pending = token.number_value
                pending_from_dictionary = token.from_dictionary
        else:
            flush()
            result.append(token)

    flush()
    return result


def render_text(tokens: Sequence[Token]) -> str:
    """Join token values, keeping codes and dimensions compact."""
    parts: list[str] = []
    for index, current in enumerate(tokens):
        prev = tokens[index - 1] if index > 0 else None
        following = tokens[index + 1] if index + 1 < len(tokens) else None

        dimension_number = (
            current.kind == TokenKind.NUMBER
            and following is not None
            and following.kind == TokenKind.SYMBOL
            and following.value == "x"
        )

        if prev is None:
            skip_space = True
        elif current.kind == TokenKind.SYMBOL or prev.kind == TokenKind.SYMBOL:
            skip_space = True
        elif current.is_alphanumeric and prev.is_alphanumeric and not dimension_number:
            skip_space = True
        else:
            skip_space = False

        if not skip_space:
            parts.append(" ")
        parts.append(current.value)
    return "".join(parts)


class Normalizer:
    """Renders canonical item text from tokens."""

    def normalize(self, tokens: Sequence[Token], unknown_words: Sequence[str] = ()) -> ParseOutcome:
        if not tokens:
            return ParseOutcome(
                normalized_text=None,
                status=ParseStatus.FAIL,
                debug=("Brak tokenów do parsowania.",),
            )

        debug: list[str] = []
        if unknown_words:
            debug.append(f"Nieznane słowa: {', '.join(unknown_words)}")

        extraction = extract_quantity(tokens)
        debug.extend(extraction.debug)

        cleaned = [
            token
            for token in merge_numbers(merge_decimals(extraction.remaining))
            if token.kind not in (TokenKind.CONNECTOR, TokenKind.FRACTION)
        ]

        normalized_text = render_text(cleaned).strip() or None

        if normalized_text is None:
            status = ParseStatus.FAIL
        elif unknown_words:
            status = ParseStatus.WARNING
        else:
            status = ParseStatus.OK

        return ParseOutcome(
            normalized_text=normalized_text,
            status=status,
            debug=tuple(debug),
            extracted_quantity=extraction.quantity,
            extracted_unit=extraction.unit,
        )


class InventoryParser:
    """Tokenize + normalize free item text in one call."""

    def __init__(self, tokenizer: Tokenizer | None = None, normalizer: Normalizer | None = None):
        self.tokenizer = tokenizer or Tokenizer()
        self.normalizer = normalizer or Normalizer()

    def parse(self, raw_text: str) -> ParseOutcome:
        if not raw_text.strip():
            return ParseOutcome(
                normalized_text=None,
                status=ParseStatus.FAIL,
                debug=("Puste pole wejściowe.",),
            )

        tokenization = self.tokenizer.tokenize(raw_text)
        outcome = self.normalizer.normalize(tokenization.tokens, tokenization.unknown_words)
        logger.debug(f"Inventory parse {raw_text!r} -> {outcome.normalized_text!r} ({outcome.status.value})")
        return outcome
