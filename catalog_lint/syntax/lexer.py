"""Single-pass lexer for the catalog TOML dialect.

The lexer turns text into a lazy stream of tokens. Comments and horizontal
whitespace are dropped; newlines are kept because they terminate key/value
lines. A malformed construct does not raise: the stream ends with a single
ERROR token describing what was expected and where.

Supported lexemes:
- Punctuation: ``[ ] [[ ]] { } = ,``
- Bare keys and bare literals: ``[A-Za-z0-9_-]+`` joined by dots (``version.ref``)
- Basic strings ``"..."`` with escapes, literal strings ``'...'``
- Multi-line strings ``\"\"\"...\"\"\"`` and ``'''...'''``, taken verbatim
"""

from __future__ import annotations

import re
from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum

BYTE_ORDER_MARK = "\ufeff"

_WHITESPACE = re.compile(r"[ \t]+")
_LINE_END = re.compile(r"[\r\n]")
_BARE = re.compile(r"[A-Za-z0-9_-]+(?:\.[A-Za-z0-9_-]+)*")
_BASIC_CHUNK = re.compile(r'[^"\\\r\n]+')
_LITERAL = re.compile(r"'([^'\r\n]*)'")
_HEX = re.compile(r"[0-9A-Fa-f]+")

_SIMPLE_ESCAPES = {
    '"': '"',
    "\\": "\\",
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "b": "\b",
    "f": "\f",
}

# Number of hex digits following \u and \U
_UNICODE_ESCAPES = {"u": 4, "U": 8}


class TokenKind(Enum):
    """Token categories produced by the lexer."""

    LBRACKET = "["
    RBRACKET = "]"
    TABLE_ARRAY_OPEN = "[["
    TABLE_ARRAY_CLOSE = "]]"
    LBRACE = "{"
    RBRACE = "}"
    EQUALS = "="
    COMMA = ","
    NEWLINE = "newline"
    BARE = "bare"
    STRING = "string"
    EOF = "eof"
    ERROR = "error"


_PUNCTUATION = {
    "[": TokenKind.LBRACKET,
    "]": TokenKind.RBRACKET,
    "{": TokenKind.LBRACE,
    "}": TokenKind.RBRACE,
    "=": TokenKind.EQUALS,
    ",": TokenKind.COMMA,
}


@dataclass(frozen=True)
class Token:
    """A lexeme with its position.

    For STRING tokens ``text`` is the decoded content. For ERROR tokens it is
    the description of the lexical problem.
    """

    kind: TokenKind
    text: str
    line: int
    column: int
    multiline: bool = False

    def describe(self) -> str:
        """Short rendering used in syntax error messages."""
        if self.kind is TokenKind.EOF:
            return "end of input"
        if self.kind is TokenKind.NEWLINE:
            return "end of line"
        if self.kind is TokenKind.STRING:
            return f'string "{self.text}"'
        return f"'{self.text}'"


def strip_bom(text: str) -> str:
    """Drop a leading byte-order mark, if any."""
    return text[1:] if text.startswith(BYTE_ORDER_MARK) else text


class _Lexer:
    def __init__(self, text: str) -> None:
        self.text = text
        self.pos = 0
        self.line = 1
        self.line_start = 0
        # Open [ and { in value or header context
        self.depth = 0
        self.at_line_start = True
        self.in_table_array_header = False

    @property
    def column(self) -> int:
        return self.pos - self.line_start + 1

    def _token(self, kind: TokenKind, text: str, line: int, column: int, **kw: bool) -> Token:
        self.at_line_start = kind is TokenKind.NEWLINE
        return Token(kind, text, line, column, **kw)

    def _error(self, message: str, line: int | None = None, column: int | None = None) -> Token:
        return Token(
            TokenKind.ERROR,
            message,
            self.line if line is None else line,
            self.column if column is None else column,
        )

    def _advance_over(self, consumed: str) -> None:
        """Move past ``consumed``, keeping line bookkeeping for embedded newlines."""
        start = self.pos
        self.pos += len(consumed)
        last_newline = consumed.rfind("\n")
        if last_newline >= 0:
            self.line += consumed.count("\n")
            self.line_start = start + last_newline + 1

    def tokens(self) -> Iterator[Token]:
        text = self.text
        end = len(text)
        while self.pos < end:
            char = text[self.pos]

            match = _WHITESPACE.match(text, self.pos)
            if match:
                self.pos = match.end()
                continue
            if char == "#":
                line_end = _LINE_END.search(text, self.pos)
                self.pos = line_end.start() if line_end else end
                continue
            if char in "\r\n":
                line, column = self.line, self.column
                width = 2 if text.startswith("\r\n", self.pos) else 1
                self.pos += width
                self.line += 1
                self.line_start = self.pos
                yield self._token(TokenKind.NEWLINE, "\n", line, column)
                continue

            line, column = self.line, self.column

            if char == "[":
                if self.depth == 0 and self.at_line_start and text.startswith("[[", self.pos):
                    self.pos += 2
                    self.in_table_array_header = True
                    yield self._token(TokenKind.TABLE_ARRAY_OPEN, "[[", line, column)
                    continue
                self.depth += 1
            elif char == "]":
                if self.in_table_array_header and text.startswith("]]", self.pos):
                    self.pos += 2
                    self.in_table_array_header = False
                    yield self._token(TokenKind.TABLE_ARRAY_CLOSE, "]]", line, column)
                    continue
                self.depth = max(0, self.depth - 1)
            elif char == "{":
                self.depth += 1
            elif char == "}":
                self.depth = max(0, self.depth - 1)

            kind = _PUNCTUATION.get(char)
            if kind is not None:
                self.pos += 1
                yield self._token(kind, char, line, column)
                continue

            if char == '"':
                token = self._basic_string() if not text.startswith('"""', self.pos) else self._multiline('"""')
            elif char == "'":
                token = self._literal_string() if not text.startswith("'''", self.pos) else self._multiline("'''")
            else:
                match = _BARE.match(text, self.pos)
                if match is None:
                    yield self._error(f"unexpected character {char!r}")
                    return
                self.pos = match.end()
                token = self._token(TokenKind.BARE, match.group(), line, column)

            yield token
            if token.kind is TokenKind.ERROR:
                return

        yield self._token(TokenKind.EOF, "", self.line, self.column)

    def _basic_string(self) -> Token:
        line, column = self.line, self.column
        text = self.text
        self.pos += 1
        parts: list[str] = []
        while True:
            chunk = _BASIC_CHUNK.match(text, self.pos)
            if chunk is not None:
                parts.append(chunk.group())
                self.pos = chunk.end()
            # Stopped on a character the chunk pattern excludes
            if self.pos >= len(text) or text[self.pos] in "\r\n":
                return self._error("unterminated string: expected closing '\"'", line, column)
            if text[self.pos] == '"':
                self.pos += 1
                return self._token(TokenKind.STRING, "".join(parts), line, column)
            decoded = self._escape()
            if isinstance(decoded, Token):
                return decoded
            parts.append(decoded)

    def _escape(self) -> str | Token:
        """Decode the escape sequence at the cursor (which sits on the backslash)."""
        text = self.text
        line, column = self.line, self.column
        code = text[self.pos + 1 : self.pos + 2]
        if code in _SIMPLE_ESCAPES:
            self.pos += 2
            return _SIMPLE_ESCAPES[code]
        width = _UNICODE_ESCAPES.get(code)
        if width is None:
            shown = f"\\{code}" if code and code not in "\r\n" else "\\"
            return self._error(f"unknown escape sequence '{shown}'", line, column)
        digits = text[self.pos + 2 : self.pos + 2 + width]
        hex_match = _HEX.fullmatch(digits)
        if len(digits) != width or hex_match is None:
            return self._error(
                f"invalid unicode escape '\\{code}{digits}': expected {width} hex digits", line, column
            )
        codepoint = int(digits, 16)
        if codepoint > 0x10FFFF or 0xD800 <= codepoint <= 0xDFFF:
            return self._error(f"invalid unicode escape '\\{code}{digits}': not a scalar value", line, column)
        self.pos += 2 + width
        return chr(codepoint)

    def _literal_string(self) -> Token:
        line, column = self.line, self.column
        match = _LITERAL.match(self.text, self.pos)
        if match is None:
            return self._error("unterminated string: expected closing \"'\"", line, column)
        self.pos = match.end()
        return self._token(TokenKind.STRING, match.group(1), line, column)

    def _multiline(self, delimiter: str) -> Token:
        line, column = self.line, self.column
        body_start = self.pos + 3
        close = self.text.find(delimiter, body_start)
        if close < 0:
            return self._error(f"unterminated multi-line string: expected closing {delimiter}", line, column)
        body = self.text[body_start:close]
        self._advance_over(self.text[self.pos : close + 3])
        # A newline right after the opening delimiter is not part of the value
        if body.startswith("\r\n"):
            body = body[2:]
        elif body.startswith("\n"):
            body = body[1:]
        return self._token(TokenKind.STRING, body, line, column, multiline=True)


def tokenize(text: str) -> Iterator[Token]:
    """Lazily tokenize catalog text.

    Args:
        text: Decoded source text. A leading byte-order mark is ignored.

    Yields:
        Tokens in source order, terminated by EOF or by a single ERROR token.
    """
    return _Lexer(strip_bom(text)).tokens()
