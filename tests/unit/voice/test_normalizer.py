"""Tests for item text normalization (tokenize + normalize)."""

import pytest

from spis.voice.models import ParseStatus, Token, TokenKind, UnitType
from spis.voice.parser.normalizer import (
    InventoryParser,
    Normalizer,
    extract_quantity,
    merge_decimals,
    render_text,
    should_combine,
)


def number(value: int) -> Token:
    return Token(str(value), TokenKind.NUMBER, number_value=value)


def unit(u: UnitType) -> Token:
    return Token(u.label, TokenKind.UNIT, unit=u)


# =============================================================================
# Full parses
# =============================================================================


class TestInventoryParser:
    """Test full item text parsing."""

    @pytest.mark.parametrize("text,expected", [
        ("igrek de igrek trzy na dwa i pol", "YDY 3x2,5"),
        ("ce ha cztery myslnik sto piecdziesiat slash bax", "CH4-150/BAX"),
        ("ce ha cztery myslnik sto piecdziesiat", "CH4-150"),
        ("kabel trzy na dwa i pol", "KABEL 3x2,5"),
        ("przewod dwa na dwa i pol", "PRZEWOD 2x2,5"),
        ("przewód dwa na dwa i pół", "PRZEWÓD 2x2,5"),
        ("b szesnascie", "B16"),
    ])
    def test_normalized_text(self, inventory_parser, text: str, expected: str):
        result = inventory_parser.parse(text)
        assert result.status == ParseStatus.OK
        assert result.normalized_text == expected
        assert result.extracted_quantity is None

    def test_extracts_quantity_and_unit(self, inventory_parser):
        result = inventory_parser.parse("hager b szesnascie 12 sztuk")
        assert result.status == ParseStatus.OK
        assert result.normalized_text == "HAGER B16"
        assert result.extracted_quantity == 12
        assert result.extracted_unit == UnitType.SZT

    def test_digits_with_quantity(self, inventory_parser):
        result = inventory_parser.parse("hager b 16 5 sztuk")
        assert result.status == ParseStatus.OK
        assert result.normalized_text == "HAGER B16"
        assert result.extracted_quantity == 5
        assert result.extracted_unit == UnitType.SZT

    def test_quantity_after_dimensions(self, inventory_parser):
        result = inventory_parser.parse("igrek de igrek trzy na dwa i pol 15 sztuk")
        assert result.status == ParseStatus.OK
        assert result.normalized_text == "YDY 3x2,5"
        assert result.extracted_quantity == 15
        assert result.extracted_unit == UnitType.SZT

    def test_unknown_words_warn(self, inventory_parser):
        result = inventory_parser.parse("nieznane slowo 5 sztuk")
        assert result.status == ParseStatus.WARNING
        assert result.normalized_text == "NIEZNANE SLOWO"
        assert result.extracted_quantity == 5
        assert result.extracted_unit == UnitType.SZT
        assert any("nieznane" in line for line in result.debug)

    def test_blank_fails(self, inventory_parser):
        result = inventory_parser.parse(" ")
        assert result.status == ParseStatus.FAIL
        assert result.normalized_text is None

    def test_quantity_without_name_fails(self, inventory_parser):
        result = inventory_parser.parse("20 sztuk")
        assert result.status == ParseStatus.FAIL
        assert result.normalized_text is None
        assert result.extracted_quantity == 20
        assert result.extracted_unit == UnitType.SZT

    def test_connectors_never_rendered(self, inventory_parser):
        result = inventory_parser.parse("i pol")
        assert result.status == ParseStatus.FAIL
        assert result.normalized_text is None

    def test_default_construction(self):
        result = InventoryParser().parse("kabel b szesnascie")
        assert result.normalized_text == "KABEL B16"


# =============================================================================
# Stages
# =============================================================================


class TestExtractQuantity:
    """Test removal of the quantity and unit pair."""

    def test_leftmost_pair_wins(self):
        tokens = [number(5), unit(UnitType.SZT), number(3), unit(UnitType.M)]
        extraction = extract_quantity(tokens)
        assert extraction.quantity == 5
        assert extraction.unit == UnitType.SZT
        assert list(extraction.remaining) == tokens[2:]

    def test_removes_nothing_without_pair(self):
        tokens = [unit(UnitType.SZT), number(5)]
        extraction = extract_quantity(tokens)
        assert extraction.quantity is None
        assert extraction.remaining == tuple(tokens)

    def test_removes_exactly_two(self):
        word = Token("KABEL", TokenKind.WORD)
        tokens = [word, number(3), unit(UnitType.M), number(4)]
        extraction = extract_quantity(tokens)
        assert len(extraction.remaining) == len(tokens) - 2
        assert extraction.remaining == (word, number(4))


class TestMergeDecimals:
    """Test merging of spoken decimals."""

    def test_number_connector_fraction(self):
        tokens = [number(3), Token("i", TokenKind.CONNECTOR), Token("0,5", TokenKind.FRACTION)]
        merged = merge_decimals(tokens)
        assert len(merged) == 1
        assert merged[0].value == "3,5"
        assert merged[0].number_value is None

    def test_quarter(self):
        tokens = [number(2), Token("i", TokenKind.CONNECTOR), Token("0,25", TokenKind.FRACTION)]
        assert merge_decimals(tokens)[0].value == "2,25"


class TestShouldCombine:
    """Test which adjacent numbers form one value."""

    @pytest.mark.parametrize("left,right,expected", [
        (100, 50, True),
        (120, 3, True),
        (20, 5, True),
        (10, 3, True),
        (3, 2, False),
        (20, 15, False),
        (100, 100, False),
        (25, 4, False),
    ])
    def test_rule(self, left: int, right: int, expected: bool):
        assert should_combine(left, right) is expected


class TestRenderText:
    """Test spacing of rendered item text."""

    def test_dimension_spacing(self):
        tokens = [
            Token("KABEL", TokenKind.WORD),
            number(3),
            Token("x", TokenKind.SYMBOL),
            number(2),
        ]
        assert render_text(tokens) == "KABEL 3x2"

    def test_letters_and_numbers_are_compact(self):
        tokens = [Token("A", TokenKind.LETTER), Token("B", TokenKind.LETTER), number(7)]
        assert render_text(tokens) == "AB7"

    def test_dimension_number_after_letter_gets_space(self):
        tokens = [Token("B", TokenKind.LETTER), number(3), Token("x", TokenKind.SYMBOL), number(2)]
        assert render_text(tokens) == "B 3x2"

    def test_words_are_spaced(self):
        tokens = [Token("RURA", TokenKind.WORD), Token("PESZEL", TokenKind.WORD)]
        assert render_text(tokens) == "RURA PESZEL"


class TestNormalizer:
    """Test normalization of token streams."""

    def test_empty_tokens_fail(self):
        result = Normalizer().normalize([])
        assert result.status == ParseStatus.FAIL
        assert result.normalized_text is None

    def test_compound_numbers_merge(self):
        tokens = [Token("RURA", TokenKind.WORD), number(100), number(20), number(3)]
        assert Normalizer().normalize(tokens).normalized_text == "RURA 123"

    def test_independent_numbers_stay_apart(self):
        tokens = [number(3), Token("x", TokenKind.SYMBOL), number(2), number(5)]
        # 2 and 5 do not combine; rendered compact as two numbers
        assert Normalizer().normalize(tokens).normalized_text == "3x25"
