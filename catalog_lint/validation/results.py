"""Validation result data structures.

Rules produce Issues; the result builder folds them into the immutable
ValidationResult handed back to callers for display and JSON export.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any


class Severity(Enum):
    """Severity level for validation issues.

    ERROR: Makes the catalog invalid
    WARNING: Advisory only, never affects validity
    """

    ERROR = "error"
    WARNING = "warning"


@dataclass(frozen=True)
class Issue:
    """A single finding from a validation rule.

    Attributes:
        rule_name: Identifier for the rule that produced this issue.
        severity: Whether the issue blocks validity.
        message: Human-readable description; callers match on its wording.
        fix_hint: Optional suggestion for fixing the issue.
    """

    rule_name: str
    severity: Severity
    message: str
    fix_hint: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to JSON-serializable dict."""
        d: dict[str, Any] = {
            "rule_name": self.rule_name,
            "severity": self.severity.value,
            "message": self.message,
        }
        if self.fix_hint is not None:
            d["fix_hint"] = self.fix_hint
        return d


def _now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of validating one catalog.

    Attributes:
        is_valid: True exactly when there are no errors.
        errors: Error messages in rule order.
        warnings: Warning messages in rule order.
        timestamp: When the result was built (UTC).
        issues: Structured form of every error and warning.
    """

    is_valid: bool
    errors: tuple[str, ...] = ()
    warnings: tuple[str, ...] = ()
    timestamp: datetime = field(default_factory=_now)
    issues: tuple[Issue, ...] = ()

    @classmethod
    def from_issues(cls, issues: Iterable[Issue]) -> ValidationResult:
        """Build a result, splitting issues by severity and preserving order."""
        collected = tuple(issues)
        errors = tuple(i.message for i in collected if i.severity is Severity.ERROR)
        warnings = tuple(i.message for i in collected if i.severity is Severity.WARNING)
        return cls(is_valid=not errors, errors=errors, warnings=warnings, issues=collected)

    @classmethod
    def failure(cls, rule_name: str, message: str, *, fix_hint: str | None = None) -> ValidationResult:
        """Build a result carrying a single error (unreadable input, syntax error)."""
        return cls.from_issues([Issue(rule_name, Severity.ERROR, message, fix_hint)])

    def to_dict(self) -> dict[str, Any]:
        """Convert to JSON-serializable dict for --json output."""
        return {
            "is_valid": self.is_valid,
            "error_count": len(self.errors),
            "warning_count": len(self.warnings),
            "errors": list(self.errors),
            "warnings": list(self.warnings),
            "timestamp": self.timestamp.isoformat(),
            "issues": [i.to_dict() for i in self.issues],
        }
