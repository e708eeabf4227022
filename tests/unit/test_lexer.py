"""Tests for the catalog lexer."""

from __future__ import annotations

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from catalog_lint.syntax.lexer import Token, TokenKind, tokenize


def kinds(text: str) -> list[TokenKind]:
    return [token.kind for token in tokenize(text)]


class TestPunctuationAndKeys:
    """Structural tokens."""

    @pytest.mark.unit
    def test_table_header_and_key_value(self) -> None:
        assert kinds('[versions]\nagp = "8.11.1"') == [
            TokenKind.LBRACKET,
            TokenKind.BARE,
            TokenKind.RBRACKET,
            TokenKind.NEWLINE,
            TokenKind.BARE,
            TokenKind.EQUALS,
            TokenKind.STRING,
            TokenKind.EOF,
        ]

    @pytest.mark.unit
    def test_dotted_key_is_one_token(self) -> None:
        tokens = list(tokenize("version.ref = 'x'"))
        assert tokens[0] == Token(TokenKind.BARE, "version.ref", 1, 1)

    @pytest.mark.unit
    def test_comments_are_dropped(self) -> None:
        assert kinds("# header\nagp = '1.0' # trailing") == [
            TokenKind.NEWLINE,
            TokenKind.BARE,
            TokenKind.EQUALS,
            TokenKind.STRING,
            TokenKind.EOF,
        ]

    @pytest.mark.unit
    def test_comment_stops_at_crlf(self) -> None:
        assert kinds("# note\r\nagp = '1.0'") == [
            TokenKind.NEWLINE,
            TokenKind.BARE,
            TokenKind.EQUALS,
            TokenKind.STRING,
            TokenKind.EOF,
        ]

    @pytest.mark.unit
    def test_hash_inside_string_is_not_a_comment(self) -> None:
        tokens = list(tokenize('a = "x#y"'))
        assert tokens[2].text == "x#y"

    @pytest.mark.unit
    def test_table_array_header(self) -> None:
        assert kinds("[[tool]]") == [
            TokenKind.TABLE_ARRAY_OPEN,
            TokenKind.BARE,
            TokenKind.TABLE_ARRAY_CLOSE,
            TokenKind.EOF,
        ]

    @pytest.mark.unit
    def test_nested_array_value_is_not_a_table_array(self) -> None:
        assert kinds("a = [[1]]") == [
            TokenKind.BARE,
            TokenKind.EQUALS,
            TokenKind.LBRACKET,
            TokenKind.LBRACKET,
            TokenKind.BARE,
            TokenKind.RBRACKET,
            TokenKind.RBRACKET,
            TokenKind.EOF,
        ]

    @pytest.mark.unit
    def test_crlf_is_a_single_newline(self) -> None:
        tokens = list(tokenize("a = 1\r\nb = 2"))
        assert [t.kind for t in tokens].count(TokenKind.NEWLINE) == 1
        assert tokens[4].line == 2
        assert tokens[4].column == 1

    @pytest.mark.unit
    def test_leading_byte_order_mark_is_ignored(self) -> None:
        tokens = list(tokenize("\ufeffa = 1"))
        assert tokens[0] == Token(TokenKind.BARE, "a", 1, 1)


class TestStrings:
    """Basic, literal and multi-line strings."""

    @pytest.mark.unit
    @pytest.mark.parametrize(
        ("source", "expected"),
        [
            (r'"a\tb"', "a\tb"),
            (r'"quote \" here"', 'quote " here'),
            (r'"back\\slash"', "back\\slash"),
            (r'"caf\u00e9"', "café"),
            (r'"\U0001F600"', "\U0001f600"),
            (r'""', ""),
            (r'"\n\t"', "\n\t"),
        ],
    )
    def test_basic_string_escapes(self, source: str, expected: str) -> None:
        token = next(iter(tokenize(source)))
        assert token.kind is TokenKind.STRING
        assert token.text == expected

    @pytest.mark.unit
    def test_control_character_inside_string_is_kept(self) -> None:
        token = next(iter(tokenize('"a\x01b"')))
        assert token == Token(TokenKind.STRING, "a\x01b", 1, 1)

    @pytest.mark.unit
    def test_control_character_outside_string_is_an_error(self) -> None:
        tokens = list(tokenize("a = \x01"))
        assert tokens[-1] == Token(TokenKind.ERROR, "unexpected character '\\x01'", 1, 5)

    @pytest.mark.unit
    def test_literal_string_has_no_escapes(self) -> None:
        token = next(iter(tokenize(r"'C:\path\n'")))
        assert token.text == r"C:\path\n"

    @pytest.mark.unit
    def test_multiline_basic_string_is_verbatim(self) -> None:
        tokens = list(tokenize('a = """\nline one\nline \\n two"""\nb = 1'))
        string = tokens[2]
        assert string.multiline
        assert string.text == "line one\nline \\n two"
        # b is on line 4
        assert tokens[4].line == 4

    @pytest.mark.unit
    def test_multiline_literal_string(self) -> None:
        token = list(tokenize("a = '''x\ny'''"))[2]
        assert token.text == "x\ny"

    @pytest.mark.unit
    def test_unterminated_basic_string(self) -> None:
        tokens = list(tokenize('agp = "8.11.1\nnext = 1'))
        assert tokens[-1].kind is TokenKind.ERROR
        assert "unterminated string" in tokens[-1].text
        assert (tokens[-1].line, tokens[-1].column) == (1, 7)

    @pytest.mark.unit
    def test_unterminated_multiline_string(self) -> None:
        tokens = list(tokenize('a = """never closed'))
        assert tokens[-1].kind is TokenKind.ERROR
        assert "multi-line" in tokens[-1].text

    @pytest.mark.unit
    def test_unknown_escape_is_an_error(self) -> None:
        tokens = list(tokenize(r'"\q"'))
        assert tokens[-1].kind is TokenKind.ERROR
        assert tokens[-1].text == "unknown escape sequence '\\q'"

    @pytest.mark.unit
    def test_surrogate_escape_is_an_error(self) -> None:
        tokens = list(tokenize(r'"\uD800"'))
        assert tokens[-1].kind is TokenKind.ERROR
        assert "not a scalar value" in tokens[-1].text

    @pytest.mark.unit
    def test_short_unicode_escape_is_an_error(self) -> None:
        tokens = list(tokenize(r'"\u12"'))
        assert tokens[-1].kind is TokenKind.ERROR
        assert "expected 4 hex digits" in tokens[-1].text


class TestErrors:
    """Lexical errors end the stream."""

    @pytest.mark.unit
    def test_colon_separator_is_an_error(self) -> None:
        tokens = list(tokenize('agp: "1.0"'))
        assert tokens[-1] == Token(TokenKind.ERROR, "unexpected character ':'", 1, 4)

    @pytest.mark.unit
    def test_no_tokens_after_error(self) -> None:
        tokens = list(tokenize("a = @ b = 1"))
        assert [t.kind for t in tokens].count(TokenKind.ERROR) == 1
        assert tokens[-1].kind is TokenKind.ERROR

    @pytest.mark.unit
    def test_tokenize_is_lazy(self) -> None:
        stream = tokenize("a = 1\n" * 10_000)
        assert next(stream).text == "a"

    @pytest.mark.unit
    @given(text=st.text(max_size=200))
    @settings(max_examples=200)
    def test_every_stream_ends_with_exactly_one_terminal_token(self, text: str) -> None:
        """Arbitrary text never raises and ends in EOF or ERROR."""
        tokens = list(tokenize(text))
        terminal = {TokenKind.EOF, TokenKind.ERROR}
        assert tokens[-1].kind in terminal
        assert all(t.kind not in terminal for t in tokens[:-1])
