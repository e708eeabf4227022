"""Typed document model produced by the parser.

A Document is an ordered collection of named tables. Each table maps keys to
Values, where a Value is one of three shapes:

- Scalar: a string or bare literal, with its text already unquoted/unescaped
- InlineTable: ``{ k = v, ... }``
- Array: ``[v, v, ...]``

Dotted keys such as ``version.ref`` are opaque names, not nested structure.
"""

from __future__ import annotations

from dataclasses import dataclass, field

# Name of the implicit table holding keys that appear before the first header
ROOT_TABLE = ""


@dataclass(frozen=True)
class Scalar:
    """A leaf value.

    Attributes:
        text: Literal text with quotes removed and escapes resolved.
        quoted: True for string literals, False for bare literals (true, 42, 1.5).
        line: 1-based source line, for diagnostics.
    """

    text: str
    quoted: bool = True
    line: int = 0

    def describe(self) -> str:
        """Render the value for messages, flagging unquoted literals."""
        return self.text if self.quoted else f"{self.text} (unquoted)"


@dataclass(frozen=True)
class InlineTable:
    """An inline table ``{ k = v, ... }`` with insertion-ordered entries."""

    entries: dict[str, Value] = field(default_factory=dict)
    line: int = 0

    def get(self, key: str) -> Value | None:
        return self.entries.get(key)


@dataclass(frozen=True)
class Array:
    """An array of values."""

    items: tuple[Value, ...] = ()
    line: int = 0


Value = Scalar | InlineTable | Array


def kind_of(value: Value) -> str:
    """Human-readable name of a value's shape."""
    if isinstance(value, Scalar):
        return "string" if value.quoted else "bare value"
    if isinstance(value, InlineTable):
        return "inline table"
    return "array"


@dataclass
class Table:
    """A named table. Reopened ``[name]`` headers share one Table."""

    name: str
    entries: dict[str, Value] = field(default_factory=dict)
    line: int = 0

    def __contains__(self, key: object) -> bool:
        return key in self.entries


@dataclass
class Document:
    """Parsed catalog text.

    Attributes:
        tables: Ordinary tables keyed by name, in order of first appearance.
        table_arrays: ``[[name]]`` arrays of tables; parsed but not interpreted.
    """

    tables: dict[str, Table] = field(default_factory=dict)
    table_arrays: dict[str, list[Table]] = field(default_factory=dict)

    def table(self, name: str) -> Table | None:
        return self.tables.get(name)

    @property
    def is_empty(self) -> bool:
        """True when the source held nothing but whitespace and comments."""
        return not self.tables and not self.table_arrays
