"""catalog-lint - Validate dependency version catalogs (libs.versions.toml).

Public API:
- validate(): Validate catalog bytes or text
- validate_path(): Read and validate a catalog file
- CatalogValidator: Validator bound to one rules configuration
- ValidatorConfig: Data tables for the configurable rules
- ValidationResult: Outcome of validating one catalog
"""

from catalog_lint.config import ValidatorConfig, resolve_config
from catalog_lint.reader import ReadFailure, read_catalog, validate_path
from catalog_lint.validation.results import Issue, Severity, ValidationResult
from catalog_lint.validator import CatalogValidator, validate

__all__ = [
    "CatalogValidator",
    "Issue",
    "ReadFailure",
    "Severity",
    "ValidationResult",
    "ValidatorConfig",
    "read_catalog",
    "resolve_config",
    "validate",
    "validate_path",
]
