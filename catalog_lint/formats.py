"""Format predicates for versions, module coordinates and plugin ids.

Accepted version shapes:
- Semantic versions: ``1.2``, ``1.2.3``, ``1.2.3-alpha.1``, ``1.2.3+build.5``,
  ``1.0.0-alpha+build.123``, ``1.0.0-SNAPSHOT``
- Dynamic versions: ``1.2.+``
- Ranges: ``[1.0,2.0)``, ``(1.0,2.0]``, ``[1.0,2.0]``, ``[1.0,)``
"""

from __future__ import annotations

import re

from catalog_lint.models.catalog import Coordinate

_IDENTIFIERS = r"[0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*"

SEMVER_PATTERN = re.compile(rf"\d+\.\d+(?:\.\d+)?(?:-{_IDENTIFIERS})?(?:\+{_IDENTIFIERS})?")
PLUS_PATTERN = re.compile(r"\d+(?:\.\d+)*\.\+")

_RANGE_BOUND = rf"\d+(?:\.\d+){{0,2}}(?:-{_IDENTIFIERS})?"
RANGE_PATTERN = re.compile(rf"[\[(]\s*{_RANGE_BOUND}\s*,\s*(?:{_RANGE_BOUND}\s*)?[\])]")

# One side of a group:artifact coordinate
COORDINATE_PART = re.compile(r"[A-Za-z0-9._-]+")

# Dotted lowercase identifier segments, e.g. com.android.application
PLUGIN_ID_PATTERN = re.compile(r"[a-z][a-z0-9_-]*(?:\.[a-z][a-z0-9_-]*)+")


def is_valid_version(text: str) -> bool:
    """Check a version string against the accepted shapes.

    Args:
        text: Version as written in the catalog.

    Returns:
        True for a non-blank semantic version, dynamic ``X.Y.+`` version, or
        bracketed range; False otherwise.
    """
    if not text.strip():
        return False
    return any(
        pattern.fullmatch(text) is not None for pattern in (SEMVER_PATTERN, PLUS_PATTERN, RANGE_PATTERN)
    )


def parse_coordinate(text: str) -> Coordinate | None:
    """Split ``group:artifact`` into a Coordinate.

    Returns None unless there is exactly one ``:`` with a well-formed,
    non-empty group and artifact on either side.
    """
    group, sep, artifact = text.partition(":")
    if not sep or ":" in artifact:
        return None
    return coordinate_from_parts(group, artifact)


def coordinate_from_parts(group: str, artifact: str) -> Coordinate | None:
    """Build a Coordinate from separate ``group`` and ``name`` attributes."""
    if COORDINATE_PART.fullmatch(group) is None or COORDINATE_PART.fullmatch(artifact) is None:
        return None
    return Coordinate(group, artifact)


def is_valid_plugin_id(text: str) -> bool:
    """True for dotted lowercase plugin ids such as ``org.jetbrains.kotlin.jvm``."""
    return PLUGIN_ID_PATTERN.fullmatch(text) is not None
