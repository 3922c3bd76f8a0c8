"""Test keyword lookup and character classification."""

from monkey.tokens import KEYWORDS, TokenType, is_digit, is_letter, lookup_ident


class TestLookupIdent:
    def test_keywords(self):
        assert lookup_ident("fn") == TokenType.FUNCTION
        assert lookup_ident("let") == TokenType.LET
        assert lookup_ident("true") == TokenType.TRUE
        assert lookup_ident("false") == TokenType.FALSE
        assert lookup_ident("if") == TokenType.IF
        assert lookup_ident("else") == TokenType.ELSE
        assert lookup_ident("return") == TokenType.RETURN

    def test_exactly_seven_keywords(self):
        assert len(KEYWORDS) == 7

    def test_plain_identifier(self):
        assert lookup_ident("foobar") == TokenType.IDENT

    def test_keywords_are_case_sensitive(self):
        assert lookup_ident("Let") == TokenType.IDENT
        assert lookup_ident("RETURN") == TokenType.IDENT

    def test_keyword_prefix_is_identifier(self):
        assert lookup_ident("lets") == TokenType.IDENT
        assert lookup_ident("fnord") == TokenType.IDENT


class TestCharClasses:
    def test_letters(self):
        for ch in "azAZ_":
            assert is_letter(ch), f"Expected {ch!r} to be a letter"

    def test_non_letters(self):
        for ch in "09 =!-\t":
            assert not is_letter(ch), f"Expected {ch!r} to NOT be a letter"

    def test_non_ascii_is_not_letter(self):
        assert not is_letter("é")

    def test_digits(self):
        for ch in "0123456789":
            assert is_digit(ch)

    def test_non_digits(self):
        for ch in "a_ -":
            assert not is_digit(ch)

    def test_end_sentinel(self):
        assert not is_letter("")
        assert not is_digit("")


class TestTokenTypeStr:
    def test_operator_renders_as_symbol(self):
        assert str(TokenType.ASSIGN) == "="
        assert str(TokenType.NOT_EQ) == "!="

    def test_category_renders_as_name(self):
        assert str(TokenType.IDENT) == "IDENT"
        assert str(TokenType.EOF) == "EOF"
