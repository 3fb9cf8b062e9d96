"""Fixed Polish vocabulary shared by the tokenizer and the command parsers.

All keys are lowercase with diacritics folded (see numbers.normalize_polish).
"""

from __future__ import annotations

from dataclasses import dataclass

from spis.voice.models import UnitType

# Multiplication marker used inside code mode until the final case pass.
MULTIPLY = "×"

LETTER_NAMES: dict[str, str] = {
    "a": "A",
    "be": "B",
    "ce": "C",
    "de": "D",
    "e": "E",
    "ef": "F",
    "gie": "G",
    "ha": "H",
    "jot": "J",
    "ka": "K",
    "el": "L",
    "em": "M",
    "en": "N",
    "o": "O",
    "pe": "P",
    "ku": "Q",
    "er": "R",
    "es": "S",
    "te": "T",
    "u": "U",
    "fal": "V",
    "fau": "V",
    "wu": "W",
    "iks": "X",
    "igrek": "Y",
    "ygrek": "Y",
    "igreg": "Y",
    "igrekg": "Y",
    "greg": "Y",
    "zet": "Z",
}

SYMBOL_WORDS: dict[str, str] = {
    "kropka": ".",
    "przecinek": ",",
    "myslnik": "-",
    "minus": "-",
    "kreska": "-",
    "slash": "/",
    "slesz": "/",
    "slesh": "/",
    "ukosnik": "/",
    "plus": "+",
    "na": "x",
    "razy": "x",
    "x": "x",
}

CONNECTOR_WORDS: frozenset[str] = frozenset({"i"})

FRACTION_WORDS: dict[str, str] = {
    "pol": "0,5",
    "cwierc": "0,25",
}


@dataclass(frozen=True)
class UnitAlias:
    unit: UnitType
    tokens: tuple[str, ...]


# Folded surface forms, including multi-word spellings.
UNIT_ALIASES: tuple[UnitAlias, ...] = (
    UnitAlias(UnitType.KG, ("kg",)),
    UnitAlias(UnitType.KG, ("kilo",)),
    UnitAlias(UnitType.KG, ("kilogram",)),
    UnitAlias(UnitType.KG, ("kilograma",)),
    UnitAlias(UnitType.KG, ("kilogramy",)),
    UnitAlias(UnitType.KG, ("kilogramow",)),
    UnitAlias(UnitType.KG, ("ka", "gie")),
    UnitAlias(UnitType.KG, ("ka", "g")),
    UnitAlias(UnitType.M, ("m",)),
    UnitAlias(UnitType.M, ("metr",)),
    UnitAlias(UnitType.M, ("metry",)),
    UnitAlias(UnitType.M, ("metra",)),
    UnitAlias(UnitType.M, ("metrow",)),
    UnitAlias(UnitType.CM, ("cm",)),
    UnitAlias(UnitType.CM, ("centymetr",)),
    UnitAlias(UnitType.CM, ("centymetry",)),
    UnitAlias(UnitType.CM, ("centymetra",)),
    UnitAlias(UnitType.CM, ("centymetrow",)),
    UnitAlias(UnitType.SZT, ("szt",)),
    UnitAlias(UnitType.SZT, ("sztuka",)),
    UnitAlias(UnitType.SZT, ("sztuki",)),
    UnitAlias(UnitType.SZT, ("sztuk",)),
    UnitAlias(UnitType.OP, ("op",)),
    UnitAlias(UnitType.OP, ("opakowanie",)),
    UnitAlias(UnitType.OP, ("opakowania",)),
    UnitAlias(UnitType.OP, ("opakowan",)),
    UnitAlias(UnitType.ROLKA, ("rolka",)),
    UnitAlias(UnitType.ROLKA, ("rolki",)),
    UnitAlias(UnitType.ROLKA, ("rolek",)),
    UnitAlias(UnitType.KPL, ("kpl",)),
    UnitAlias(UnitType.KPL, ("komplet",)),
    UnitAlias(UnitType.KPL, ("komplety",)),
    UnitAlias(UnitType.KPL, ("kompletow",)),
)

# Longest alias first; sorted() is stable so table order breaks ties.
SORTED_UNIT_ALIASES: tuple[UnitAlias, ...] = tuple(
    sorted(UNIT_ALIASES, key=lambda a: len(a.tokens), reverse=True)
)

SINGLE_WORD_UNITS: dict[str, UnitType] = {
    alias.tokens[0]: alias.unit for alias in UNIT_ALIASES if len(alias.tokens) == 1
}
