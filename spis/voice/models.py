"""Voice inventory data models.

Defines tokens, parse outcomes and command results for the pipeline:
    Transcript → Tokens → ParseOutcome / VoiceCommandResult → RoutedCommand
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Union


class UnitType(str, Enum):
    """Inventory units of measure."""

    SZT = "SZT"
    M = "M"
    OP = "OP"
    ROLKA = "ROLKA"
    KPL = "KPL"
    KG = "KG"
    CM = "CM"

    @property
    def label(self) -> str:
        return _UNIT_LABELS[self]


_UNIT_LABELS: dict[UnitType, str] = {
    UnitType.SZT: "szt",
    UnitType.M: "m",
    UnitType.OP: "op",
    UnitType.ROLKA: "rolka",
    UnitType.KPL: "kpl",
    UnitType.KG: "kg",
    UnitType.CM: "cm",
}


class TokenKind(str, Enum):
    """Token classes produced by the tokenizer."""

    WORD = "word"
    LETTER = "letter"
    NUMBER = "number"
    SYMBOL = "symbol"
    UNIT = "unit"
    CONNECTOR = "connector"
    FRACTION = "fraction"


class ParseStatus(str, Enum):
    """Quality of a parse result."""

    OK = "ok"
    WARNING = "warning"
    FAIL = "fail"


class Route(str, Enum):
    """Which router rule produced a command."""

    MARKER = "marker"
    QUANTITY = "quantity"
    CODE = "code"
    NONE = "none"


@dataclass(frozen=True)
class Token:
    """A single classified word of a transcript."""

    value: str
    kind: TokenKind
    number_value: int | None = None
    unit: UnitType | None = None
    from_dictionary: bool = False
    source_text: str | None = None

    @property
    def is_alphanumeric(self) -> bool:
        return self.kind in (TokenKind.LETTER, TokenKind.NUMBER)


@dataclass(frozen=True)
class TokenizationResult:
    """Tokens in input order plus alphabetic words no dictionary knew."""

    tokens: tuple[Token, ...] = ()
    unknown_words: tuple[str, ...] = ()


@dataclass(frozen=True)
class ParseOutcome:
    """Result of normalizing free item text."""

    normalized_text: str | None
    status: ParseStatus
    debug: tuple[str, ...] = ()
    extracted_quantity: int | None = None
    extracted_unit: UnitType | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "normalized_text": self.normalized_text,
            "status": self.status.value,
            "debug": list(self.debug),
            "extracted_quantity": self.extracted_quantity,
            "extracted_unit": self.extracted_unit.value if self.extracted_unit else None,
        }


# =============================================================================
# Voice command results
# =============================================================================


@dataclass(frozen=True)
class AddMarker:
    """Insert a section marker row."""

    name: str
    alias: str
    debug: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": "add_marker",
            "name": self.name,
            "alias": self.alias,
            "debug": list(self.debug),
        }


@dataclass(frozen=True)
class Ignored:
    """Deliberate no-op. Not a failure."""

    reason: str
    debug: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": "ignored",
            "reason": self.reason,
            "debug": list(self.debug),
        }


@dataclass(frozen=True)
class Item:
    """Add or update an inventory item row."""

    name: str
    quantity: int | None = None
    unit: UnitType | None = None
    status: ParseStatus = ParseStatus.OK
    debug: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": "item",
            "name": self.name,
            "quantity": self.quantity,
            "unit": self.unit.value if self.unit else None,
            "status": self.status.value,
            "debug": list(self.debug),
        }


VoiceCommandResult = Union[AddMarker, Ignored, Item]


@dataclass(frozen=True)
class RoutedCommand:
    """The single command produced for one transcript."""

    route: Route
    result: VoiceCommandResult
    alias: str | None = None
    forced: bool = False
    code_mode_raw: str | None = None
    code_mode_normalized: str | None = None
    code_mode_final: str | None = None
    code_mode_tokens: tuple[str, ...] = ()
    trace: tuple[str, ...] = ()

    def debug_lines(self) -> list[str]:
        """Router trace followed by the result's own debug lines."""
        return [*self.trace, *self.result.debug]

    def to_dict(self) -> dict[str, Any]:
        return {
            "route": self.route.value,
            "result": self.result.to_dict(),
            "alias": self.alias,
            "forced": self.forced,
            "code_mode_raw": self.code_mode_raw,
            "code_mode_normalized": self.code_mode_normalized,
            "code_mode_final": self.code_mode_final,
            "code_mode_tokens": list(self.code_mode_tokens),
            "trace": list(self.trace),
        }


@dataclass
class TranscriptionResult:
    """Result handed over by the speech recognition collaborator."""

    transcript: str
    confidence: float = 0.0
    source: str = "vosk"
    language: str = "pl-PL"
    duration_ms: int = 0
    is_final: bool = True
    alternatives: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "transcript": self.transcript,
            "confidence": self.confidence,
            "source": self.source,
            "language": self.language,
            "duration_ms": self.duration_ms,
            "is_final": self.is_final,
            "alternatives": self.alternatives,
        }
