"""Tests for transcript tokenization and the default token provider."""

from spis.voice.models import Token, TokenKind, UnitType
from spis.voice.parser.tokenizer import DictionaryTokenProvider, TokenProvider, Tokenizer


class TestDictionaryTokenProvider:
    """Test the default vocabulary lookup."""

    def test_letter_names(self, token_provider):
        assert token_provider.token_for("igrek") == Token("Y", TokenKind.LETTER)
        assert token_provider.token_for("zet") == Token("Z", TokenKind.LETTER)

    def test_single_letters(self, token_provider):
        assert token_provider.token_for("b") == Token("B", TokenKind.LETTER)

    def test_connector_wins_over_single_letter(self, token_provider):
        assert token_provider.token_for("i").kind == TokenKind.CONNECTOR

    def test_number_words(self, token_provider):
        token = token_provider.token_for("szesnaście")
        assert token.kind == TokenKind.NUMBER
        assert token.number_value == 16

    def test_units(self, token_provider):
        token = token_provider.token_for("metrów")
        assert token.kind == TokenKind.UNIT
        assert token.unit == UnitType.M

    def test_symbols(self, token_provider):
        assert token_provider.token_for("na") == Token("x", TokenKind.SYMBOL)
        assert token_provider.token_for("myslnik") == Token("-", TokenKind.SYMBOL)
        assert token_provider.token_for("kropka") == Token(".", TokenKind.SYMBOL)

    def test_fraction(self, token_provider):
        assert token_provider.token_for("pół") == Token("0,5", TokenKind.FRACTION)

    def test_known_words(self):
        provider = DictionaryTokenProvider(known_words=["Przewód"])
        assert provider.token_for("przewod") == Token("PRZEWOD", TokenKind.WORD)

    def test_unknown(self, token_provider):
        assert token_provider.token_for("nieznane") is None


class TestTokenizer:
    """Test splitting and classification of transcript words."""

    def test_kinds_in_order(self, tokenizer):
        result = tokenizer.tokenize("Kabel trzy, na 2")
        kinds = [t.kind for t in result.tokens]
        assert kinds == [TokenKind.WORD, TokenKind.NUMBER, TokenKind.SYMBOL, TokenKind.NUMBER]
        assert result.unknown_words == ()

    def test_dictionary_tokens_are_tagged(self, tokenizer):
        result = tokenizer.tokenize("trzy, 2")
        three, two = result.tokens
        assert three.from_dictionary is True
        assert three.source_text == "trzy,"
        assert two.from_dictionary is False
        assert two.number_value == 2
        assert two.value == "2"

    def test_unknown_words_first_seen_order(self, tokenizer):
        result = tokenizer.tokenize("foo bar foo 12")
        assert result.unknown_words == ("foo", "bar")
        assert [t.value for t in result.tokens] == ["FOO", "BAR", "FOO", "12"]

    def test_known_words_keep_spoken_spelling(self, tokenizer):
        result = tokenizer.tokenize("Przewód kabel")
        assert [t.value for t in result.tokens] == ["PRZEWÓD", "KABEL"]
        assert all(t.from_dictionary for t in result.tokens)
        assert result.unknown_words == ()

    def test_word_keeps_raw_punctuation(self, tokenizer):
        result = tokenizer.tokenize("slowo,")
        assert result.tokens[0].value == "SLOWO,"
        assert result.unknown_words == ("slowo",)

    def test_mixed_word_is_not_unknown(self, tokenizer):
        result = tokenizer.tokenize("abc123")
        assert result.tokens[0] == Token("ABC123", TokenKind.WORD, source_text="abc123")
        assert result.unknown_words == ()

    def test_blank(self, tokenizer):
        result = tokenizer.tokenize("   ")
        assert result.tokens == ()
        assert result.unknown_words == ()

    def test_custom_provider(self):
        class OnlyFoo(TokenProvider):
            def token_for(self, word):
                if word == "foo":
                    return Token("F", TokenKind.LETTER)
                return None

        result = Tokenizer(OnlyFoo()).tokenize("foo trzy")
        assert result.tokens[0].value == "F"
        assert result.tokens[0].from_dictionary is True
        assert result.tokens[1].kind == TokenKind.WORD
        assert result.unknown_words == ("trzy",)
