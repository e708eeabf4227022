"""Styled terminal output for the catalog-lint CLI.

All user-facing CLI messages go through these helpers so that validity,
errors and warnings look the same in every command.

Usage:
    from catalog_lint.output import success, info, warn, error, detail

    success("gradle/libs.versions.toml is valid")
    info("Checking gradle/libs.versions.toml")
    warn("Unreferenced version: okhttp")
    error("Missing version reference: kotlin in library 'kotlin-stdlib'")
    detail("hint: Add 'kotlin' to [versions] or fix the reference")

Errors and warnings go to stderr, everything else to stdout.
"""

from __future__ import annotations

import sys
from typing import TextIO

import click

# ANSI color codes via click's style system
_STYLES = {
    "success": {"fg": "green"},
    "info": {"fg": "blue"},
    "warn": {"fg": "yellow"},
    "error": {"fg": "red"},
    "detail": {"fg": "bright_black"},  # Dimmed/gray
}

_PREFIXES = {
    "success": "✓",  # checkmark
    "info": "→",  # arrow
    "warn": "⚠",  # warning
    "error": "✗",  # X
    "detail": " ",  # indent only
}


def _output(message: str, style: str, *, file: TextIO | None = None, nl: bool = True) -> None:
    fg_color = _STYLES[style]["fg"]
    styled_prefix = click.style(_PREFIXES[style], fg=fg_color)
    styled_message = click.style(message, fg=fg_color)
    click.echo(f"{styled_prefix} {styled_message}", file=file, nl=nl)


def success(message: str, *, file: TextIO | None = None, nl: bool = True) -> None:
    """Print a success message with green checkmark.

    Example:
        >>> success("libs.versions.toml is valid")
        ✓ libs.versions.toml is valid
    """
    _output(message, "success", file=file, nl=nl)


def info(message: str, *, file: TextIO | None = None, nl: bool = True) -> None:
    """Print an info message with blue arrow."""
    _output(message, "info", file=file, nl=nl)


def warn(message: str, *, file: TextIO | None = None, nl: bool = True) -> None:
    """Print a warning message with yellow warning symbol (default: stderr).

    Example:
        >>> warn("Unreferenced version: okhttp")
        ⚠ Unreferenced version: okhttp
    """
    _output(message, "warn", file=file or sys.stderr, nl=nl)


def error(message: str, *, file: TextIO | None = None, nl: bool = True) -> None:
    """Print an error message with red X (default: stderr).

    Example:
        >>> error("The versions section is required")
        ✗ The versions section is required
    """
    _output(message, "error", file=file or sys.stderr, nl=nl)


def detail(message: str, *, file: TextIO | None = None, nl: bool = True) -> None:
    """Print a dimmed, indented follow-up line such as a fix hint."""
    _output(message, "detail", file=file, nl=nl)
