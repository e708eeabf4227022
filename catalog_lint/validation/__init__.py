"""Semantic validation of projected catalogs.

This module provides the public API for rule-based checking:
- check(): Run validation rules against a catalog
- ValidationResult: Immutable outcome of validating one catalog
- ValidationRule: Base class for custom rules
"""

from catalog_lint.validation.results import (
    Issue,
    Severity,
    ValidationResult,
)
from catalog_lint.validation.rules import RuleContext, ValidationRule
from catalog_lint.validation.runner import DEFAULT_RULES, check

__all__ = [
    "DEFAULT_RULES",
    "Issue",
    "RuleContext",
    "Severity",
    "ValidationResult",
    "ValidationRule",
    "check",
]
