"""Validation runner that executes all rules against a projected catalog."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from catalog_lint.config import ValidatorConfig
from catalog_lint.models.catalog import CatalogModel
from catalog_lint.validation.results import Issue
from catalog_lint.validation.rules import (
    BundleReferencesRule,
    CriticalDependenciesRule,
    LibraryEntriesRule,
    NonEmptySectionsRule,
    PluginEntriesRule,
    RequiredSectionsRule,
    RuleContext,
    UnreferencedVersionsRule,
    ValidationRule,
    VersionCompatibilityRule,
    VersionFormatsRule,
    VulnerableVersionsRule,
)

logger = logging.getLogger(__name__)

# Order here is the order messages appear in a result
# Immutable tuple to prevent accidental mutation
DEFAULT_RULES: tuple[ValidationRule, ...] = (
    RequiredSectionsRule(),
    NonEmptySectionsRule(),
    LibraryEntriesRule(),
    PluginEntriesRule(),
    VersionFormatsRule(),
    UnreferencedVersionsRule(),
    BundleReferencesRule(),
    VulnerableVersionsRule(),
    CriticalDependenciesRule(),
    VersionCompatibilityRule(),
)


def check(
    catalog: CatalogModel,
    *,
    config: ValidatorConfig | None = None,
    rules: Sequence[ValidationRule] | None = None,
) -> list[Issue]:
    """Run validation rules against a catalog.

    Every rule runs; a failing rule never stops the ones after it.

    Args:
        catalog: Projected catalog to check.
        config: Data tables for the data-driven rules. Defaults to ValidatorConfig().
        rules: Optional sequence of rules to run. Defaults to DEFAULT_RULES.

    Returns:
        Issues from all rules, in rule order.
    """
    if rules is None:
        rules = DEFAULT_RULES

    context = RuleContext(catalog=catalog, config=config if config is not None else ValidatorConfig())
    issues: list[Issue] = []

    for rule in rules:
        found = rule.check(context)
        if found:
            logger.debug("Rule %s reported %d issue(s)", rule.name, len(found))
        issues.extend(found)

    return issues
