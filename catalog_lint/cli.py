"""catalog-lint CLI - validate dependency version catalogs.

The CLI is a thin wrapper around the Python API (see validator.py).
All validation logic lives in the library; the CLI handles user interaction.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import click

from catalog_lint.config import resolve_config
from catalog_lint.errors import ConfigError
from catalog_lint.json_output import ErrorDetail, error_envelope, result_envelope, success_envelope
from catalog_lint.output import detail, error, info, success, warn
from catalog_lint.reader import validate_path
from catalog_lint.validation import DEFAULT_RULES, Severity, ValidationResult

DEFAULT_CATALOG = Path("gradle") / "libs.versions.toml"


def should_output_json(ctx: click.Context, json_flag: bool = False) -> bool:
    """Determine if JSON output should be used.

    Global --format=json takes precedence, but the per-command --json flag
    also works.
    """
    obj = ctx.find_root().obj or {}
    return obj.get("format", "text") == "json" or json_flag


def output_json_envelope(envelope: Any) -> None:
    """Output a JSON envelope to stdout."""
    click.echo(envelope.to_json())


@click.group()
@click.version_option(package_name="catalog-lint")
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["json", "text"]),
    default="text",
    help="Output format (json for machine parsing, text for humans).",
)
@click.pass_context
def cli(ctx: click.Context, output_format: str) -> None:
    """catalog-lint - Validate libs.versions.toml dependency catalogs."""
    ctx.ensure_object(dict)
    ctx.obj["format"] = output_format


def _print_issues(result: ValidationResult, *, verbose: bool) -> None:
    for issue in result.issues:
        if issue.severity is Severity.ERROR:
            error(issue.message)
        else:
            warn(issue.message)
        if verbose and issue.fix_hint:
            detail(f"  Hint: {issue.fix_hint}")


def _print_check_summary(path: Path, result: ValidationResult) -> None:
    """Print check summary message."""
    warning_count = len(result.warnings)
    warnings = f"{warning_count} warning{'s' if warning_count != 1 else ''}"
    if result.is_valid:
        suffix = f" ({warnings})" if warning_count else ""
        success(f"{path} is valid{suffix}")
        return

    error_count = len(result.errors)
    parts = [f"{error_count} error{'s' if error_count != 1 else ''}"]
    if warning_count:
        parts.append(warnings)
    error(f"Validation failed: {', '.join(parts)}")


@cli.command()
@click.argument("path", type=click.Path(path_type=Path), default=DEFAULT_CATALOG)
@click.option("--json", "json_output", is_flag=True, help="Output results as JSON")
@click.option(
    "--config",
    "config_path",
    type=click.Path(path_type=Path),
    default=None,
    help="YAML rules file (overrides CATALOG_LINT_CONFIG).",
)
@click.option("--verbose", "-v", is_flag=True, help="Show fix hints and debug logging")
@click.pass_context
def check(ctx: click.Context, path: Path, json_output: bool, config_path: Path | None, verbose: bool) -> None:
    """Validate a version catalog.

    Parses the catalog, runs every validation rule and reports all errors
    and warnings. Exits with status 1 when the catalog has errors; warnings
    alone never fail the check.

    PATH is the catalog file (default: gradle/libs.versions.toml).
    """
    use_json = should_output_json(ctx, json_output)
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    try:
        config = resolve_config(config_path)
    except ConfigError as err:
        if use_json:
            envelope = error_envelope(
                "check",
                [ErrorDetail(type=type(err).__name__, message=err.message, code=err.code)],
            )
            output_json_envelope(envelope)
        else:
            error(str(err))
        raise SystemExit(1) from err

    result = validate_path(path, config=config)

    if use_json:
        output_json_envelope(result_envelope("check", str(path), result))
    else:
        if verbose:
            info(f"Checking {path}")
        _print_issues(result, verbose=verbose)
        _print_check_summary(path, result)

    # Exit code: 1 if any errors (not warnings)
    if not result.is_valid:
        raise SystemExit(1)


@cli.command()
@click.option("--json", "json_output", is_flag=True, help="Output results as JSON")
@click.pass_context
def rules(ctx: click.Context, json_output: bool) -> None:
    """List the validation rules in the order they run."""
    if should_output_json(ctx, json_output):
        data = {
            "rules": [
                {"name": rule.name, "severity": rule.severity.value, "description": rule.description}
                for rule in DEFAULT_RULES
            ]
        }
        output_json_envelope(success_envelope("rules", data))
        return

    for rule in DEFAULT_RULES:
        info(f"{rule.name} ({rule.severity.value})")
        detail(f"  {rule.description}")
