"""Typed catalog model built from a parsed Document.

The model is what the semantic rules query. Each library and plugin entry is
reduced to the attributes the rules care about; anything else is kept in
``extras`` without interpretation.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from functools import cached_property

from catalog_lint.syntax.document import Value


@dataclass(frozen=True)
class Coordinate:
    """A ``group:artifact`` pair."""

    group: str
    artifact: str

    def __str__(self) -> str:
        return f"{self.group}:{self.artifact}"


class _EntryAttributes:
    """Queries shared by library and plugin entries."""

    unreadable: frozenset[str]

    @property
    def malformed(self) -> bool:
        """The entry had a shape problem already recorded as a ShapeIssue."""
        return bool(self.unreadable)

    def readable(self, *attributes: str) -> bool:
        """True when none of ``attributes`` had the wrong shape."""
        return self.unreadable.isdisjoint(attributes)


@dataclass(frozen=True)
class LibrarySpec(_EntryAttributes):
    """A ``[libraries]`` entry.

    Attributes:
        name: Alias of the library in the catalog.
        module: Parsed coordinate, or None when absent or malformed.
        module_text: Coordinate as written (``module`` or ``group:name``), for messages.
        version_direct: Literal version, if given.
        version_ref: Name of a ``[versions]`` entry, if given.
        extras: Attributes preserved but not validated (classifier, type, ...).
        unreadable: Attributes whose value had the wrong shape. An entry that
            is not a table at all lists every attribute.
    """

    name: str
    module: Coordinate | None = None
    module_text: str | None = None
    version_direct: str | None = None
    version_ref: str | None = None
    extras: dict[str, Value] = field(default_factory=dict, hash=False)
    unreadable: frozenset[str] = frozenset()


@dataclass(frozen=True)
class PluginSpec(_EntryAttributes):
    """A ``[plugins]`` entry."""

    name: str
    id: str | None = None
    version_direct: str | None = None
    version_ref: str | None = None
    extras: dict[str, Value] = field(default_factory=dict, hash=False)
    unreadable: frozenset[str] = frozenset()


@dataclass(frozen=True)
class ShapeIssue:
    """An entry the projector could not interpret.

    Attributes:
        section: Catalog section the entry belongs to.
        name: Entry name.
        message: Full error message.
        attribute: Offending attribute, or None when the whole entry is wrong.
    """

    section: str
    name: str
    message: str
    attribute: str | None = None


@dataclass(frozen=True)
class CatalogModel:
    """Typed view over the four catalog sections.

    A section is None when its table is absent from the document, and an
    empty mapping when the table is present but has no entries.

    Attributes:
        versions: Version name to version text.
        libraries: Library alias to LibrarySpec.
        plugins: Plugin alias to PluginSpec.
        bundles: Bundle name to ordered library aliases.
        shape_issues: Entries that could not be projected.
        empty_document: True when the source contained no tables or keys at all.
        unquoted_versions: Version names whose value was a bare literal.
    """

    versions: dict[str, str] | None = None
    libraries: dict[str, LibrarySpec] | None = None
    plugins: dict[str, PluginSpec] | None = None
    bundles: dict[str, tuple[str, ...]] | None = None
    shape_issues: tuple[ShapeIssue, ...] = ()
    empty_document: bool = False
    unquoted_versions: frozenset[str] = frozenset()

    def issues_for(self, section: str) -> list[ShapeIssue]:
        """Shape issues belonging to one section, in document order."""
        return [issue for issue in self.shape_issues if issue.section == section]

    def issues_for_entry(self, section: str, name: str) -> tuple[ShapeIssue, ...]:
        """Shape issues of one entry, in document order."""
        return self._issues_by_entry.get((section, name), ())

    @cached_property
    def _issues_by_entry(self) -> dict[tuple[str, str], tuple[ShapeIssue, ...]]:
        grouped: dict[tuple[str, str], list[ShapeIssue]] = {}
        for issue in self.shape_issues:
            grouped.setdefault((issue.section, issue.name), []).append(issue)
        return {key: tuple(issues) for key, issues in grouped.items()}

    def referenced_versions(self) -> set[str]:
        """All version names targeted by a library or plugin ``version.ref``."""
        refs: set[str] = set()
        for spec in (*(self.libraries or {}).values(), *(self.plugins or {}).values()):
            if spec.version_ref is not None:
                refs.add(spec.version_ref)
        return refs

    def resolve_version(self, spec: LibrarySpec | PluginSpec) -> str | None:
        """Effective version of an entry: the direct version or the referenced one."""
        if spec.version_ref is not None:
            return (self.versions or {}).get(spec.version_ref)
        return spec.version_direct
