"""Lexer, parser and document model for the catalog TOML dialect."""

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
from catalog_lint.syntax.parser import ParseOutcome, parse

__all__ = [
    "ROOT_TABLE",
    "Array",
    "Document",
    "InlineTable",
    "ParseOutcome",
    "Scalar",
    "Table",
    "Token",
    "TokenKind",
    "Value",
    "parse",
    "tokenize",
]
