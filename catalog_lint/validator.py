"""Validator facade: bytes in, ValidationResult out.

Pipeline:
    decode -> parse (lexer + parser) -> project -> rules -> result

A syntax or duplicate-key error stops the pipeline after parsing; semantic
rules only run on a well-formed document. Nothing here raises for malformed
input, and nothing is shared between calls, so validate() can run from many
threads at once.

Usage:
    from catalog_lint import validate

    result = validate(Path("gradle/libs.versions.toml").read_bytes())
    if not result.is_valid:
        for message in result.errors:
            print(message)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from catalog_lint.config import ValidatorConfig
from catalog_lint.projector import project
from catalog_lint.reader import ReadFailure
from catalog_lint.syntax.parser import parse
from catalog_lint.validation.results import Issue, Severity, ValidationResult
from catalog_lint.validation.runner import check

logger = logging.getLogger(__name__)

SYNTAX_RULE = "syntax"
READ_RULE = "read"

UNDECODABLE_MESSAGE = "Syntax error: content is not valid UTF-8 text"


def validate(
    data: bytes | bytearray | memoryview | str | ReadFailure, *, config: ValidatorConfig | None = None
) -> ValidationResult:
    """Validate one catalog.

    Args:
        data: Raw catalog bytes (any bytes-like object), already-decoded
            text, or a ReadFailure from the file reader.
        config: Rule configuration. Defaults to ValidatorConfig().

    Returns:
        ValidationResult with every error and warning found, in rule order.
    """
    if isinstance(data, ReadFailure):
        logger.debug("Catalog unavailable: %s", data.message)
        return ValidationResult.failure(READ_RULE, data.message, fix_hint="Check the catalog path")

    if isinstance(data, (bytes, bytearray, memoryview)):
        try:
            text = bytes(data).decode("utf-8")
        except UnicodeDecodeError:
            logger.debug("Catalog is not valid UTF-8")
            return ValidationResult.failure(SYNTAX_RULE, UNDECODABLE_MESSAGE, fix_hint="Save the file as UTF-8")
    else:
        text = data

    outcome = parse(text)
    if outcome.document is None:
        logger.debug("Parsing failed with %d error(s)", len(outcome.errors))
        return ValidationResult.from_issues(
            Issue(rule_name=SYNTAX_RULE, severity=Severity.ERROR, message=message)
            for message in outcome.errors
        )

    catalog = project(outcome.document)
    return ValidationResult.from_issues(check(catalog, config=config))


@dataclass(frozen=True)
class CatalogValidator:
    """Reusable validator bound to one configuration.

    Holds only immutable configuration, so one instance can be shared
    across threads.
    """

    config: ValidatorConfig = field(default_factory=ValidatorConfig)

    def validate(self, data: bytes | bytearray | memoryview | str | ReadFailure) -> ValidationResult:
        """Validate one catalog with this validator's configuration."""
        return validate(data, config=self.config)
