"""File access for catalogs.

The validator core works on bytes or text and never touches the filesystem.
This module reads a catalog file and turns I/O failures into a ReadFailure
value, which the validator reports like any other defect.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from catalog_lint.config import ValidatorConfig
    from catalog_lint.validation.results import ValidationResult

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReadFailure:
    """A catalog file that could not be read.

    Attributes:
        path: Path as given by the caller.
        reason: OS error text.
        missing: True when the file does not exist.
    """

    path: str
    reason: str = ""
    missing: bool = False

    @property
    def message(self) -> str:
        if self.missing:
            return f"TOML file does not exist: {self.path}"
        return f"TOML file could not be read: {self.path} ({self.reason})"


def read_catalog(path: Path) -> bytes | ReadFailure:
    """Read a catalog file as raw bytes.

    Args:
        path: Path to the catalog, e.g. gradle/libs.versions.toml.

    Returns:
        File contents, or a ReadFailure describing why they are unavailable.
    """
    try:
        data = path.read_bytes()
    except FileNotFoundError:
        return ReadFailure(path=str(path), reason="not found", missing=True)
    except OSError as e:
        return ReadFailure(path=str(path), reason=e.strerror or str(e))
    logger.debug("Read %d byte(s) from %s", len(data), path)
    return data


def validate_path(path: Path, *, config: ValidatorConfig | None = None) -> ValidationResult:
    """Read a catalog file and validate it.

    Args:
        path: Path to the catalog.
        config: Rule configuration. Defaults to ValidatorConfig().

    Returns:
        ValidationResult; an unreadable file yields a single error.
    """
    from catalog_lint.validator import validate

    return validate(read_catalog(path), config=config)
