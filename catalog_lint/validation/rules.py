"""Validation rule base class and built-in rules.

Each rule checks one aspect of catalog validity and returns every problem it
finds, so no rule masks another. Rules are designed to be unit-testable in
isolation and composable into a validation pipeline; the runner executes them
in a fixed order, which fixes the order of messages.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field

from catalog_lint.config import ValidatorConfig
from catalog_lint.constants import (
    BUNDLES,
    GROUP_KEY,
    ID_KEY,
    LIBRARIES,
    MODULE_KEY,
    NAME_KEY,
    PLUGINS,
    REQUIRED_TABLES,
    VERSION_KEY,
    VERSION_REF_KEY,
    VERSIONS,
)
from catalog_lint.formats import is_valid_plugin_id, is_valid_version
from catalog_lint.models.catalog import CatalogModel, LibrarySpec, PluginSpec
from catalog_lint.validation.results import Issue, Severity


def _show(text: str) -> str:
    """Render a possibly blank value so it stays visible in a message."""
    return text if text.strip() else f'"{text}"'


@dataclass(frozen=True)
class RuleContext:
    """Everything a rule may consult.

    Attributes:
        catalog: Projected catalog.
        config: Data tables for the data-driven rules.
    """

    catalog: CatalogModel
    config: ValidatorConfig = field(default_factory=ValidatorConfig)


class ValidationRule(ABC):
    """Base class for all validation rules.

    Subclasses must define:
        name: Unique identifier for the rule
        severity: ERROR (blocking) or WARNING (non-blocking)
        description: Human-readable explanation for --verbose

    Subclasses must implement:
        check(): Run the validation and return the issues found
    """

    name: str
    severity: Severity
    description: str

    @abstractmethod
    def check(self, context: RuleContext) -> list[Issue]:
        """Run this validation rule against a catalog.

        Args:
            context: Catalog and configuration to check.

        Returns:
            Issues found, empty when the rule passes.
        """
        ...

    def _fail(self, message: str, *, fix_hint: str | None = None) -> Issue:
        """Helper to create an issue attributed to this rule."""
        return Issue(
            rule_name=self.name,
            severity=self.severity,
            message=message,
            fix_hint=fix_hint,
        )


class RequiredSectionsRule(ValidationRule):
    """Check that the versions and libraries tables exist.

    An input with no content at all gets a single "Empty or invalid TOML
    file" error instead of one error per missing section.
    """

    name = "required_sections"
    severity = Severity.ERROR
    description = "Verify [versions] and [libraries] are present"

    def check(self, context: RuleContext) -> list[Issue]:
        catalog = context.catalog
        if catalog.empty_document:
            return [
                self._fail(
                    "Empty or invalid TOML file",
                    fix_hint="Add [versions] and [libraries] tables",
                )
            ]
        sections = {VERSIONS: catalog.versions, LIBRARIES: catalog.libraries}
        return [
            self._fail(f"The {section} section is required", fix_hint=f"Add a [{section}] table")
            for section in REQUIRED_TABLES
            if sections[section] is None
        ]


class NonEmptySectionsRule(ValidationRule):
    """Check that the required tables have at least one entry."""

    name = "non_empty_sections"
    severity = Severity.ERROR
    description = "Verify [versions] and [libraries] are not empty"

    def check(self, context: RuleContext) -> list[Issue]:
        catalog = context.catalog
        issues = []
        if catalog.versions is not None and not catalog.versions and not catalog.issues_for(VERSIONS):
            issues.append(self._fail("The versions section cannot be empty"))
        if catalog.libraries is not None and not catalog.libraries:
            issues.append(self._fail("The libraries section cannot be empty"))
        return issues


class _EntryRule(ValidationRule):
    """Shared checks for libraries and plugins."""

    section: str
    label: str

    def _shape_issues(self, catalog: CatalogModel, name: str) -> list[Issue]:
        return [
            self._fail(issue.message, fix_hint="Fix the entry's value types")
            for issue in catalog.issues_for_entry(self.section, name)
        ]

    def _version_issues(self, spec: LibrarySpec | PluginSpec) -> list[Issue]:
        if not spec.readable(VERSION_KEY, VERSION_REF_KEY):
            return []
        issues = []
        if spec.version_direct is not None and spec.version_ref is not None:
            issues.append(
                self._fail(
                    f"{self.label.capitalize()} '{spec.name}' has conflicting version specification: "
                    f"both version ({_show(spec.version_direct)}) and version.ref ({spec.version_ref}) are set",
                    fix_hint="Keep either version or version.ref",
                )
            )
        elif spec.version_direct is None and spec.version_ref is None:
            issues.append(
                self._fail(
                    f"{self.label.capitalize()} '{spec.name}' is missing version: "
                    "set version or version.ref",
                )
            )
        return issues

    def _reference_issues(self, catalog: CatalogModel, spec: LibrarySpec | PluginSpec) -> list[Issue]:
        if spec.version_ref is None or spec.version_ref in (catalog.versions or {}):
            return []
        return [
            self._fail(
                f"Missing version reference: {spec.version_ref} in {self.label} '{spec.name}'",
                fix_hint=f"Add '{spec.version_ref}' to [versions] or fix the reference",
            )
        ]


class LibraryEntriesRule(_EntryRule):
    """Check each library's coordinate, version specification and reference."""

    name = "library_entries"
    severity = Severity.ERROR
    description = "Verify library coordinates and versions"
    section = LIBRARIES
    label = "library"

    def check(self, context: RuleContext) -> list[Issue]:
        catalog = context.catalog
        issues: list[Issue] = []
        for name, spec in (catalog.libraries or {}).items():
            issues.extend(self._shape_issues(catalog, name))
            issues.extend(self._version_issues(spec))
            issues.extend(self._module_issues(spec))
            issues.extend(self._reference_issues(catalog, spec))
        return issues

    def _module_issues(self, spec: LibrarySpec) -> list[Issue]:
        if not spec.readable(MODULE_KEY, GROUP_KEY, NAME_KEY):
            return []
        if spec.module_text is None:
            return [
                self._fail(
                    f"Invalid module format: missing 'module' or 'group'/'name' for library '{spec.name}'",
                    fix_hint='Use module = "group:artifact"',
                )
            ]
        if spec.module is None:
            return [
                self._fail(
                    f"Invalid module format: {_show(spec.module_text)} for library '{spec.name}'",
                    fix_hint='Use module = "group:artifact"',
                )
            ]
        return []


class PluginEntriesRule(_EntryRule):
    """Check each plugin's id, version specification and reference."""

    name = "plugin_entries"
    severity = Severity.ERROR
    description = "Verify plugin ids and versions"
    section = PLUGINS
    label = "plugin"

    def check(self, context: RuleContext) -> list[Issue]:
        catalog = context.catalog
        issues: list[Issue] = []
        for name, spec in (catalog.plugins or {}).items():
            issues.extend(self._shape_issues(catalog, name))
            issues.extend(self._id_issues(spec))
            issues.extend(self._version_issues(spec))
            issues.extend(self._reference_issues(catalog, spec))
        return issues

    def _id_issues(self, spec: PluginSpec) -> list[Issue]:
        if not spec.readable(ID_KEY):
            return []
        if spec.id is None:
            return [self._fail(f"Plugin '{spec.name}' is missing plugin id", fix_hint='Add id = "..."')]
        if not is_valid_plugin_id(spec.id):
            return [
                self._fail(
                    f"Invalid plugin ID format: {_show(spec.id)} for plugin '{spec.name}'",
                    fix_hint="Plugin ids are dotted lowercase names, e.g. com.android.application",
                )
            ]
        return []


class VersionFormatsRule(ValidationRule):
    """Check every version string: [versions] entries, then direct versions."""

    name = "version_formats"
    severity = Severity.ERROR
    description = "Verify versions are semantic versions, X.Y.+ or ranges"

    _HINT = "Use MAJOR.MINOR[.PATCH][-pre][+build], X.Y.+ or a range like [1.0,2.0)"

    def check(self, context: RuleContext) -> list[Issue]:
        catalog = context.catalog
        issues = [self._fail(issue.message, fix_hint=self._HINT) for issue in catalog.issues_for(VERSIONS)]
        for name, text in (catalog.versions or {}).items():
            if not is_valid_version(text):
                suffix = " (unquoted)" if name in catalog.unquoted_versions else ""
                issues.append(
                    self._fail(f"Invalid version format: {_show(text)} for key {name}{suffix}", fix_hint=self._HINT)
                )
        for label, specs in (("library", catalog.libraries), ("plugin", catalog.plugins)):
            for name, spec in (specs or {}).items():
                direct = spec.version_direct
                if direct is not None and not is_valid_version(direct):
                    issues.append(
                        self._fail(
                            f"Invalid version format: {_show(direct)} for {label} '{name}'", fix_hint=self._HINT
                        )
                    )
        return issues


class UnreferencedVersionsRule(ValidationRule):
    """Warn about [versions] entries nothing refers to."""

    name = "unreferenced_versions"
    severity = Severity.WARNING
    description = "Find versions not used by any version.ref"

    def check(self, context: RuleContext) -> list[Issue]:
        catalog = context.catalog
        referenced = catalog.referenced_versions()
        return [
            self._fail(f"Unreferenced version: {name}", fix_hint="Remove it or reference it with version.ref")
            for name in (catalog.versions or {})
            if name not in referenced
        ]


class BundleReferencesRule(ValidationRule):
    """Check that bundles only name existing libraries."""

    name = "bundle_references"
    severity = Severity.ERROR
    description = "Verify bundle members are defined libraries"

    def check(self, context: RuleContext) -> list[Issue]:
        catalog = context.catalog
        if catalog.bundles is None and not catalog.issues_for(BUNDLES):
            return []
        issues = [self._fail(issue.message) for issue in catalog.issues_for(BUNDLES)]
        libraries = catalog.libraries or {}
        for bundle, members in (catalog.bundles or {}).items():
            for member in members:
                if member not in libraries:
                    issues.append(
                        self._fail(
                            f"Invalid bundle reference: {_show(member)} in bundle {bundle}",
                            fix_hint=f"Define '{member}' in [libraries] or remove it from the bundle",
                        )
                    )
        return issues


class VulnerableVersionsRule(ValidationRule):
    """Warn about versions on the known-vulnerable deny-list.

    A dependency on the list matches a [versions] key of the same name, and
    any library whose group or artifact equals it.
    """

    name = "vulnerable_versions"
    severity = Severity.WARNING
    description = "Find known-vulnerable dependency versions"

    def check(self, context: RuleContext) -> list[Issue]:
        catalog = context.catalog
        versions = catalog.versions or {}
        messages: list[str] = []
        for dependency, bad_versions in context.config.vulnerable_versions.items():
            found = []
            if versions.get(dependency) in bad_versions:
                found.append(versions[dependency])
            for spec in (catalog.libraries or {}).values():
                if spec.module is None or dependency not in (spec.module.group, spec.module.artifact):
                    continue
                resolved = catalog.resolve_version(spec)
                if resolved in bad_versions:
                    found.append(resolved)
            for version in found:
                message = f"Potentially vulnerable version: {dependency} {version}"
                if message not in messages:
                    messages.append(message)
        return [self._fail(message, fix_hint="Upgrade to a patched release") for message in messages]


class CriticalDependenciesRule(ValidationRule):
    """Warn when none of the configured critical dependencies is declared."""

    name = "critical_dependencies"
    severity = Severity.WARNING
    description = "Check that a configured critical dependency is present"

    def check(self, context: RuleContext) -> list[Issue]:
        critical = context.config.critical_dependencies
        libraries = context.catalog.libraries
        if not critical or libraries is None:
            return []
        coordinates = [spec.module_text for spec in libraries.values() if spec.module_text]
        if any(needle in coordinate for needle in critical for coordinate in coordinates):
            return []
        return [
            self._fail(
                "Missing critical dependency: No testing dependencies found "
                f"(expected one of: {', '.join(critical)})",
                fix_hint="Declare a test framework in [libraries]",
            )
        ]


class VersionCompatibilityRule(ValidationRule):
    """Check configured pairs of incompatible tool versions.

    A tool's version is looked up as a [versions] key, falling back to the
    resolved version of a plugin with the same alias.
    """

    name = "version_compatibility"
    severity = Severity.ERROR
    description = "Find known-incompatible version combinations"

    def check(self, context: RuleContext) -> list[Issue]:
        catalog = context.catalog
        issues = []
        for pair in context.config.incompatible_versions:
            first = self._tool_version(catalog, pair.first)
            second = self._tool_version(catalog, pair.second)
            if first == pair.first_version and second == pair.second_version:
                issues.append(
                    self._fail(
                        f"Version incompatibility: {pair.message}",
                        fix_hint=f"Change {pair.first} or {pair.second} to a supported combination",
                    )
                )
        return issues

    @staticmethod
    def _tool_version(catalog: CatalogModel, tool: str) -> str | None:
        versions = catalog.versions or {}
        if tool in versions:
            return versions[tool]
        plugin = (catalog.plugins or {}).get(tool)
        return catalog.resolve_version(plugin) if plugin is not None else None
