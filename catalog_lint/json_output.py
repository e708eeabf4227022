"""JSON output envelope for machine-readable CLI output.

Every command that supports ``--format json`` (or ``check --json``) prints
exactly one envelope:

    {
        "success": true|false,
        "command": "check",
        "data": { ... },
        "errors": [ ... ]  # Only present when success=false
    }

For ``check``, ``data`` holds the full ValidationResult and ``errors`` lists
each validation error with the rule that produced it.

Usage:
    from catalog_lint.json_output import result_envelope

    envelope = result_envelope("check", path, result)
    click.echo(envelope.to_json())
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any

from catalog_lint.validation.results import Severity, ValidationResult


@dataclass
class ErrorDetail:
    """Structure for individual error entries in the errors array.

    Attributes:
        type: Rule name (e.g. "library_entries") or exception class name
        message: Human-readable error description
        code: Structured error code for exceptions (e.g. "CLINT-CFG001")
    """

    type: str
    message: str
    code: str | None = None

    def to_dict(self) -> dict[str, str]:
        """Convert to dictionary for JSON serialization."""
        d = {"type": self.type, "message": self.message}
        if self.code is not None:
            d["code"] = self.code
        return d


@dataclass
class OutputEnvelope:
    """The wrapper structure for all JSON command output.

    Attributes:
        success: True if command completed without errors, False otherwise
        command: Name of the command that produced this output
        data: Command-specific payload
        errors: Array of error objects; present only when success=False
    """

    success: bool
    command: str
    data: dict[str, Any] | None
    errors: list[ErrorDetail] | None = field(default=None)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization.

        The errors field is excluded when None (for success cases).
        """
        result: dict[str, Any] = {
            "success": self.success,
            "command": self.command,
            "data": self.data,
        }

        if self.errors is not None:
            result["errors"] = [e.to_dict() for e in self.errors]

        return result

    def to_json(self, *, indent: int | None = 2) -> str:
        """Convert to JSON string (``indent=None`` for compact output)."""
        return json.dumps(self.to_dict(), indent=indent)


def success_envelope(command: str, data: dict[str, Any]) -> OutputEnvelope:
    """Create a success envelope with the given command and data."""
    return OutputEnvelope(success=True, command=command, data=data)


def error_envelope(
    command: str,
    errors: list[ErrorDetail],
    *,
    data: dict[str, Any] | None = None,
) -> OutputEnvelope:
    """Create an error envelope with the given command and errors.

    Args:
        command: Name of the command (e.g. "check")
        errors: ErrorDetail objects describing the errors
        data: Optional partial data to include (default: empty dict)
    """
    return OutputEnvelope(
        success=False,
        command=command,
        data=data if data is not None else {},
        errors=errors,
    )


def result_envelope(command: str, path: str, result: ValidationResult) -> OutputEnvelope:
    """Wrap a ValidationResult, failing the envelope when the catalog is invalid.

    Warnings never fail the envelope; they stay in ``data``.
    """
    data = {"path": path, **result.to_dict()}
    if result.is_valid:
        return success_envelope(command, data)
    errors = [
        ErrorDetail(type=issue.rule_name, message=issue.message)
        for issue in result.issues
        if issue.severity is Severity.ERROR
    ]
    return error_envelope(command, errors, data=data)
