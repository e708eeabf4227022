"""Structured error codes for catalog-lint.

Malformed catalogs never raise: they produce a ValidationResult. These
exceptions cover operator mistakes around the validator, such as a broken
rules file.

All errors follow the format CLINT-{category}{number}:
- CLINT-CFG*: Configuration errors
"""

from __future__ import annotations

from typing import Any


class CatalogLintError(Exception):
    """Base class for all catalog-lint errors.

    All errors have:
    - code: Structured error code (e.g., CLINT-CFG001)
    - message: Human-readable error message
    """

    code: str = "CLINT-000"

    # Reserved attribute names that cannot be overwritten by context
    _RESERVED_ATTRS = frozenset({"code", "message", "context", "args"})

    def __init__(self, message: str, **context: Any) -> None:
        """Initialize a catalog-lint error.

        Args:
            message: Human-readable error message.
            **context: Additional context stored as error attributes.
                Reserved keys (code, message, context, args) are ignored.
        """
        self.message = message
        self.context = context
        for key, value in context.items():
            if key not in self._RESERVED_ATTRS:
                setattr(self, key, value)
        super().__init__(f"[{self.code}] {message}")

    def to_dict(self) -> dict[str, Any]:
        """Convert error to JSON-serializable dict."""
        return {
            "code": self.code,
            "message": self.message,
            "context": self.context,
        }


# Configuration Errors (CLINT-CFG*)
class ConfigError(CatalogLintError):
    """Base class for configuration-related errors."""

    code = "CLINT-CFG000"


class ConfigParseError(ConfigError):
    """Raised when a rules file is not valid YAML.

    Error code: CLINT-CFG001
    """

    code = "CLINT-CFG001"

    def __init__(self, path: str, parse_error: str) -> None:
        super().__init__(
            f"Failed to parse config file {path}: {parse_error}",
            path=path,
            parse_error=parse_error,
        )


class ConfigInvalidStructureError(ConfigError):
    """Raised when a rules file parses but has the wrong shape.

    Error code: CLINT-CFG002
    """

    code = "CLINT-CFG002"

    def __init__(self, path: str, detail: str) -> None:
        super().__init__(
            f"Invalid config structure in {path}: {detail}",
            path=path,
            detail=detail,
        )


class ConfigNotFoundError(ConfigError):
    """Raised when an explicitly requested rules file does not exist.

    Error code: CLINT-CFG003
    """

    code = "CLINT-CFG003"

    def __init__(self, path: str) -> None:
        super().__init__(f"Config file not found: {path}", path=path)
