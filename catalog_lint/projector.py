"""Projection of a parsed Document onto the typed CatalogModel.

The projector reads the four reserved tables and converts each entry into a
LibrarySpec, PluginSpec, version string or bundle list. Entries of the wrong
shape are not silently defaulted: they become ShapeIssues, reported later by
the rule that owns the section. Tables other than the reserved four are
ignored.

Entry notations understood:

    [libraries]
    a = { module = "g:a", version.ref = "v" }
    b = { group = "g", name = "b", version = "1.0" }
    c = { module = "g:c", version = { strictly = "[1.0,2.0)" } }
    d = "g:d:1.0"

    [plugins]
    p = { id = "com.example.plugin", version.ref = "v" }
    q = "com.example.other:1.0"
"""

from __future__ import annotations

import logging

from catalog_lint.constants import (
    BUNDLES,
    GROUP_KEY,
    ID_KEY,
    LIBRARIES,
    MODULE_KEY,
    NAME_KEY,
    PLUGINS,
    RICH_VERSION_KEYS,
    RICH_VERSION_REF_KEY,
    VERSION_KEY,
    VERSION_REF_KEY,
    VERSIONS,
)
from catalog_lint.formats import coordinate_from_parts, parse_coordinate
from catalog_lint.models.catalog import CatalogModel, LibrarySpec, PluginSpec, ShapeIssue
from catalog_lint.syntax.document import Array, Document, InlineTable, Scalar, Table, Value, kind_of

logger = logging.getLogger(__name__)

_LIBRARY_KEYS = frozenset({MODULE_KEY, GROUP_KEY, NAME_KEY, VERSION_KEY, VERSION_REF_KEY})
_PLUGIN_KEYS = frozenset({ID_KEY, VERSION_KEY, VERSION_REF_KEY})


class _Projection:
    def __init__(self) -> None:
        self.issues: list[ShapeIssue] = []

    def issue(self, section: str, name: str, message: str, attribute: str | None = None) -> None:
        self.issues.append(ShapeIssue(section, name, message, attribute))

    def unreadable_since(self, before: int) -> frozenset[str]:
        """Attributes flagged by the shape issues recorded after index ``before``."""
        return frozenset(issue.attribute for issue in self.issues[before:] if issue.attribute is not None)

    def text(self, section: str, owner: str, entry: str, attribute: str, value: Value | None) -> str | None:
        """Read a string attribute, recording a shape issue for non-scalars."""
        if value is None:
            return None
        if isinstance(value, Scalar):
            return value.text
        self.issue(
            section,
            entry,
            f"{owner} '{entry}' has invalid '{attribute}': expected a string, found {kind_of(value)}",
            attribute,
        )
        return None

    def versions(self, table: Table) -> tuple[dict[str, str], frozenset[str]]:
        versions: dict[str, str] = {}
        unquoted: set[str] = set()
        for name, value in table.entries.items():
            if isinstance(value, Scalar):
                versions[name] = value.text
                if not value.quoted:
                    unquoted.add(name)
            elif isinstance(value, InlineTable):
                rich = self.rich_version(value)
                if rich is None:
                    self.issue(
                        VERSIONS,
                        name,
                        f"Invalid version format: rich version for key {name} needs one of "
                        f"{', '.join(RICH_VERSION_KEYS)}",
                    )
                else:
                    versions[name] = rich
            else:
                self.issue(
                    VERSIONS,
                    name,
                    f"Invalid version format: expected a string for key {name}, found {kind_of(value)}",
                )
        return versions, frozenset(unquoted)

    def rich_version(self, table: InlineTable) -> str | None:
        for key in RICH_VERSION_KEYS:
            value = table.get(key)
            if isinstance(value, Scalar):
                return value.text
        return None

    def version_attributes(
        self, section: str, owner: str, name: str, entry: InlineTable
    ) -> tuple[str | None, str | None]:
        """Read ``version``/``version.ref`` into (direct, ref)."""
        direct: str | None = None
        ref = self.text(section, owner, name, VERSION_REF_KEY, entry.get(VERSION_REF_KEY))
        version = entry.get(VERSION_KEY)
        if isinstance(version, InlineTable):
            nested_ref = version.get(RICH_VERSION_REF_KEY)
            if isinstance(nested_ref, Scalar):
                ref = nested_ref.text if ref is None else ref
            direct = self.rich_version(version)
            if direct is None and nested_ref is None:
                self.issue(
                    section,
                    name,
                    f"{owner} '{name}' has invalid 'version': rich version needs 'ref' or one of "
                    f"{', '.join(RICH_VERSION_KEYS)}",
                    VERSION_KEY,
                )
        else:
            direct = self.text(section, owner, name, VERSION_KEY, version)
        return direct, ref

    def library(self, name: str, value: Value) -> LibrarySpec:
        if isinstance(value, Scalar) and value.quoted:
            return self.library_from_notation(name, value.text)
        if not isinstance(value, InlineTable):
            self.issue(
                LIBRARIES,
                name,
                f"Library '{name}' must be an inline table or a \"group:artifact:version\" string, "
                f"found {kind_of(value)}",
            )
            return LibrarySpec(name=name, unreadable=_LIBRARY_KEYS)

        before = len(self.issues)
        module_text = self.text(LIBRARIES, "Library", name, MODULE_KEY, value.get(MODULE_KEY))
        group = self.text(LIBRARIES, "Library", name, GROUP_KEY, value.get(GROUP_KEY))
        artifact = self.text(LIBRARIES, "Library", name, NAME_KEY, value.get(NAME_KEY))
        if module_text is not None:
            module = parse_coordinate(module_text)
        elif group is not None or artifact is not None:
            module_text = f"{group or ''}:{artifact or ''}"
            module = coordinate_from_parts(group or "", artifact or "")
        else:
            module = None

        direct, ref = self.version_attributes(LIBRARIES, "Library", name, value)
        return LibrarySpec(
            name=name,
            module=module,
            module_text=module_text,
            version_direct=direct,
            version_ref=ref,
            extras={key: item for key, item in value.entries.items() if key not in _LIBRARY_KEYS},
            unreadable=self.unreadable_since(before),
        )

    def library_from_notation(self, name: str, text: str) -> LibrarySpec:
        parts = text.split(":")
        if len(parts) == 3:
            module_text, version = f"{parts[0]}:{parts[1]}", parts[2]
            return LibrarySpec(
                name=name,
                module=parse_coordinate(module_text),
                module_text=module_text,
                version_direct=version,
            )
        return LibrarySpec(name=name, module=parse_coordinate(text), module_text=text)

    def plugin(self, name: str, value: Value) -> PluginSpec:
        if isinstance(value, Scalar) and value.quoted:
            plugin_id, sep, version = value.text.partition(":")
            return PluginSpec(name=name, id=plugin_id, version_direct=version if sep else None)
        if not isinstance(value, InlineTable):
            self.issue(
                PLUGINS,
                name,
                f"Plugin '{name}' must be an inline table or an \"id:version\" string, found {kind_of(value)}",
            )
            return PluginSpec(name=name, unreadable=_PLUGIN_KEYS)
        before = len(self.issues)
        direct, ref = self.version_attributes(PLUGINS, "Plugin", name, value)
        return PluginSpec(
            name=name,
            id=self.text(PLUGINS, "Plugin", name, ID_KEY, value.get(ID_KEY)),
            version_direct=direct,
            version_ref=ref,
            extras={key: item for key, item in value.entries.items() if key not in _PLUGIN_KEYS},
            unreadable=self.unreadable_since(before),
        )

    def bundle(self, name: str, value: Value) -> tuple[str, ...] | None:
        if not isinstance(value, Array):
            self.issue(
                BUNDLES,
                name,
                f"Invalid bundle definition: bundle {name} must be an array of library names, "
                f"found {kind_of(value)}",
            )
            return None
        members: list[str] = []
        for item in value.items:
            if isinstance(item, Scalar):
                members.append(item.text)
            else:
                self.issue(
                    BUNDLES,
                    name,
                    f"Invalid bundle reference: {kind_of(item)} in bundle {name} is not a library name",
                )
        return tuple(members)


def project(document: Document) -> CatalogModel:
    """Build a CatalogModel from a parsed Document.

    Args:
        document: Output of the parser.

    Returns:
        CatalogModel whose sections are None for absent tables, with any
        malformed entries recorded as shape issues.
    """
    projection = _Projection()

    versions: dict[str, str] | None = None
    unquoted: frozenset[str] = frozenset()
    table = document.table(VERSIONS)
    if table is not None:
        versions, unquoted = projection.versions(table)

    libraries: dict[str, LibrarySpec] | None = None
    table = document.table(LIBRARIES)
    if table is not None:
        libraries = {}
        for name, value in table.entries.items():
            libraries[name] = projection.library(name, value)

    plugins: dict[str, PluginSpec] | None = None
    table = document.table(PLUGINS)
    if table is not None:
        plugins = {}
        for name, value in table.entries.items():
            plugins[name] = projection.plugin(name, value)

    bundles: dict[str, tuple[str, ...]] | None = None
    table = document.table(BUNDLES)
    if table is not None:
        bundles = {}
        for name, value in table.entries.items():
            members = projection.bundle(name, value)
            if members is not None:
                bundles[name] = members

    logger.debug(
        "Projected catalog: %d version(s), %d librar(ies), %d plugin(s), %d bundle(s), %d shape issue(s)",
        len(versions or {}),
        len(libraries or {}),
        len(plugins or {}),
        len(bundles or {}),
        len(projection.issues),
    )
    return CatalogModel(
        versions=versions,
        libraries=libraries,
        plugins=plugins,
        bundles=bundles,
        shape_issues=tuple(projection.issues),
        empty_document=document.is_empty,
        unquoted_versions=unquoted,
    )
