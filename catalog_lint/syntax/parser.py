"""Recursive-descent parser from tokens to a Document.

Syntax errors are fatal: the first one stops parsing and is the only syntax
error reported. Duplicate keys are collected instead, so every duplicated key
in the input is reported; a document containing duplicates is still rejected.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterator
from dataclasses import dataclass

from catalog_lint.constants import MAX_NESTING_DEPTH, RESERVED_TABLES
from catalog_lint.syntax.document import (
    ROOT_TABLE,
    Array,
    Document,
    InlineTable,
    Scalar,
    Table,
    Value,
)
from catalog_lint.syntax.lexer import Token, TokenKind, tokenize

logger = logging.getLogger(__name__)

# Bare (unquoted) values that are TOML literals: booleans, numbers, inf/nan
_BARE_LITERAL = re.compile(
    r"true|false"
    r"|[+-]?(?:inf|nan)"
    r"|[+-]?\d[\d_]*(?:\.\d[\d_]*)?(?:[eE][+-]?\d+)?"
    r"|0x[0-9A-Fa-f_]+|0o[0-7_]+|0b[01_]+"
)


@dataclass(frozen=True)
class ParseOutcome:
    """Either a Document or the errors that prevented building one."""

    document: Document | None
    errors: tuple[str, ...] = ()

    @property
    def ok(self) -> bool:
        return self.document is not None


class _Parser:
    def __init__(self, tokens: Iterator[Token]) -> None:
        self._tokens = tokens
        self._error: str | None = None
        self._duplicates: list[str] = []
        self._document = Document()
        self._table: Table | None = None
        self._current = self._next()

    # ------------------------------------------------------------------
    # Token helpers
    # ------------------------------------------------------------------

    def _next(self) -> Token:
        token = next(self._tokens)
        if token.kind is TokenKind.ERROR and self._error is None:
            self._error = f"Syntax error at line {token.line}, column {token.column}: {token.text}"
        return token

    def _advance(self) -> Token:
        previous = self._current
        if previous.kind not in (TokenKind.EOF, TokenKind.ERROR):
            self._current = self._next()
        return previous

    def _fail(self, token: Token, reason: str) -> None:
        if self._error is None:
            self._error = f"Syntax error at line {token.line}, column {token.column}: {reason}"

    def _skip_newlines(self) -> None:
        while self._current.kind is TokenKind.NEWLINE:
            self._advance()

    def _is_key(self, token: Token) -> bool:
        return token.kind is TokenKind.BARE or (token.kind is TokenKind.STRING and not token.multiline)

    def _expect_line_end(self, context: str) -> bool:
        if self._current.kind in (TokenKind.NEWLINE, TokenKind.EOF):
            return True
        self._fail(self._current, f"expected end of line after {context}, found {self._current.describe()}")
        return False

    # ------------------------------------------------------------------
    # Document structure
    # ------------------------------------------------------------------

    def parse(self) -> ParseOutcome:
        while self._error is None:
            token = self._current
            if token.kind is TokenKind.EOF:
                break
            if token.kind is TokenKind.NEWLINE:
                self._advance()
            elif token.kind is TokenKind.LBRACKET:
                self._table_header()
            elif token.kind is TokenKind.TABLE_ARRAY_OPEN:
                self._table_array_header()
            elif self._is_key(token):
                self._key_value_line()
            else:
                self._fail(token, f"expected a key or table header, found {token.describe()}")

        if self._error is not None:
            logger.debug("Parse aborted: %s", self._error)
            return ParseOutcome(None, (*self._duplicates, self._error))
        if self._duplicates:
            logger.debug("Parse rejected: %d duplicate key(s)", len(self._duplicates))
            return ParseOutcome(None, tuple(self._duplicates))
        logger.debug("Parsed %d table(s)", len(self._document.tables))
        return ParseOutcome(self._document)

    def _header_name(self, opener: Token, closer: TokenKind) -> str | None:
        token = self._current
        if not self._is_key(token):
            self._fail(token, f"expected a table name after '{opener.text}', found {token.describe()}")
            return None
        self._advance()
        if self._current.kind is not closer:
            self._fail(
                self._current,
                f"expected '{closer.value}' to close table header '{opener.text}{token.text}', "
                f"found {self._current.describe()}",
            )
            return None
        self._advance()
        return token.text

    def _table_header(self) -> None:
        opener = self._advance()
        name = self._header_name(opener, TokenKind.RBRACKET)
        if name is None or not self._expect_line_end(f"table header [{name}]"):
            return
        if name in self._document.table_arrays:
            self._fail(opener, f"Invalid table definition: [{name}] is already an array of tables")
            return
        table = self._document.tables.get(name)
        if table is None:
            table = Table(name, line=opener.line)
            self._document.tables[name] = table
        self._table = table

    def _table_array_header(self) -> None:
        opener = self._advance()
        name = self._header_name(opener, TokenKind.TABLE_ARRAY_CLOSE)
        if name is None or not self._expect_line_end(f"table header [[{name}]]"):
            return
        if name in RESERVED_TABLES:
            self._fail(opener, f"Invalid table definition: [[{name}]] cannot be an array of tables")
            return
        if name in self._document.tables:
            self._fail(opener, f"Invalid table definition: [[{name}]] is already a table")
            return
        table = Table(name, line=opener.line)
        self._document.table_arrays.setdefault(name, []).append(table)
        self._table = table

    def _key_value_line(self) -> None:
        if self._table is None:
            self._table = Table(ROOT_TABLE)
            self._document.tables[ROOT_TABLE] = self._table
        table = self._table
        key, value = self._key_value(table.name, depth=0)
        if key is None or value is None:
            return
        self._insert(table.entries, key, value, f"table '{table.name}'")
        self._expect_line_end(f"value for key '{key}'")

    def _key_value(self, owner: str, depth: int) -> tuple[str | None, Value | None]:
        key_token = self._advance()
        if self._current.kind is not TokenKind.EQUALS:
            self._fail(
                self._current,
                f"expected '=' after key '{key_token.text}', found {self._current.describe()}",
            )
            return None, None
        self._advance()
        owner_path = f"{owner}.{key_token.text}" if owner else key_token.text
        return key_token.text, self._value(owner_path, depth)

    def _insert(self, entries: dict[str, Value], key: str, value: Value, where: str) -> None:
        if key in entries:
            self._duplicates.append(f"Duplicate key: {key} in {where} (line {value.line})")
            return
        entries[key] = value

    # ------------------------------------------------------------------
    # Values
    # ------------------------------------------------------------------

    def _value(self, owner: str, depth: int) -> Value | None:
        token = self._current
        if depth > MAX_NESTING_DEPTH:
            self._fail(token, f"values nested deeper than {MAX_NESTING_DEPTH} levels")
            return None
        if token.kind is TokenKind.STRING:
            self._advance()
            return Scalar(token.text, quoted=True, line=token.line)
        if token.kind is TokenKind.BARE:
            if _BARE_LITERAL.fullmatch(token.text) is None:
                self._fail(token, f"invalid value '{token.text}': strings must be quoted")
                return None
            self._advance()
            return Scalar(token.text, quoted=False, line=token.line)
        if token.kind is TokenKind.LBRACKET:
            return self._array(owner, depth)
        if token.kind is TokenKind.LBRACE:
            return self._inline_table(owner, depth)
        self._fail(token, f"expected a value, found {token.describe()}")
        return None

    def _array(self, owner: str, depth: int) -> Array | None:
        opener = self._advance()
        items: list[Value] = []
        while True:
            self._skip_newlines()
            if self._current.kind is TokenKind.RBRACKET:
                self._advance()
                return Array(tuple(items), line=opener.line)
            item = self._value(owner, depth + 1)
            if item is None:
                return None
            items.append(item)
            self._skip_newlines()
            if self._current.kind is TokenKind.COMMA:
                self._advance()
            elif self._current.kind is not TokenKind.RBRACKET:
                self._fail(self._current, f"expected ',' or ']' in array, found {self._current.describe()}")
                return None

    def _inline_table(self, owner: str, depth: int) -> InlineTable | None:
        opener = self._advance()
        entries: dict[str, Value] = {}
        while True:
            self._skip_newlines()
            token = self._current
            if token.kind is TokenKind.RBRACE:
                self._advance()
                return InlineTable(entries, line=opener.line)
            if not self._is_key(token):
                self._fail(token, f"expected a key in inline table, found {token.describe()}")
                return None
            key, value = self._key_value(owner, depth + 1)
            if key is None or value is None:
                return None
            self._insert(entries, key, value, f"inline table '{owner}'")
            self._skip_newlines()
            if self._current.kind is TokenKind.COMMA:
                self._advance()
            elif self._current.kind is not TokenKind.RBRACE:
                self._fail(
                    self._current, f"expected ',' or '}}' in inline table, found {self._current.describe()}"
                )
                return None


def parse(text: str) -> ParseOutcome:
    """Parse catalog text into a Document.

    Args:
        text: Decoded catalog text (a leading byte-order mark is ignored).

    Returns:
        ParseOutcome with the Document, or with the syntax/duplicate-key
        errors that prevented building it.
    """
    return _Parser(tokenize(text)).parse()
