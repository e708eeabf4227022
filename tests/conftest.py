"""Shared pytest fixtures for catalog-lint tests."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

from catalog_lint.models.catalog import CatalogModel
from catalog_lint.projector import project
from catalog_lint.syntax.parser import parse

# =============================================================================
# Catalog Sources
# =============================================================================

# Valid catalog touching every section and entry notation, with no warnings
VALID_CATALOG = """\
# Shared dependency versions
[versions]
agp = "8.11.1"
kotlin = "2.0.21"
junit = "4.13.2"

[libraries]
kotlin-stdlib = { module = "org.jetbrains.kotlin:kotlin-stdlib", version.ref = "kotlin" }
junit = { group = "junit", name = "junit", version.ref = "junit" }
okhttp = "com.squareup.okhttp3:okhttp:4.12.0"

[plugins]
android-application = { id = "com.android.application", version.ref = "agp" }

[bundles]
testing = ["junit"]
"""

# Smallest valid catalog
MINIMAL_CATALOG = """\
[versions]
agp = "8.11.1"

[libraries]
a = { module = "g:a", version.ref = "agp" }
"""


@pytest.fixture
def valid_catalog_text() -> str:
    """Source of a valid catalog with every section populated."""
    return VALID_CATALOG


@pytest.fixture
def minimal_catalog_text() -> str:
    """Source of the smallest valid catalog."""
    return MINIMAL_CATALOG


# =============================================================================
# Factories
# =============================================================================


@pytest.fixture
def write_catalog(tmp_path: Path) -> Callable[..., Path]:
    """Factory writing catalog text to gradle/<name> under tmp_path."""

    def _write(text: str, name: str = "libs.versions.toml") -> Path:
        path = tmp_path / "gradle" / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def make_catalog() -> Callable[[str], CatalogModel]:
    """Factory parsing and projecting syntactically valid catalog text."""

    def _make(text: str) -> CatalogModel:
        outcome = parse(text)
        assert outcome.document is not None, outcome.errors
        return project(outcome.document)

    return _make
