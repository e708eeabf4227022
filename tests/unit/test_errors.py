"""Unit tests for catalog-lint error classes.

Tests cover:
- Base CatalogLintError behavior
- Error code format (CLINT-{category}{number})
- Error to_dict serialization
- Configuration error types
"""

from __future__ import annotations

import re

import pytest

from catalog_lint.errors import (
    CatalogLintError,
    ConfigError,
    ConfigInvalidStructureError,
    ConfigNotFoundError,
    ConfigParseError,
)


class TestCatalogLintError:
    """Tests for base CatalogLintError class."""

    @pytest.mark.unit
    def test_str_includes_code(self) -> None:
        err = CatalogLintError("something broke")

        assert str(err) == "[CLINT-000] something broke"
        assert err.message == "something broke"

    @pytest.mark.unit
    def test_context_becomes_attributes(self) -> None:
        err = CatalogLintError("x", path="a.yaml")

        assert err.path == "a.yaml"  # type: ignore[attr-defined]
        assert err.context == {"path": "a.yaml"}

    @pytest.mark.unit
    def test_reserved_context_keys_do_not_override(self) -> None:
        err = CatalogLintError("x", code="EVIL", args=("y",))

        assert err.code == "CLINT-000"
        assert err.args == ("[CLINT-000] x",)
        assert err.context["code"] == "EVIL"

    @pytest.mark.unit
    def test_to_dict(self) -> None:
        err = ConfigNotFoundError("rules.yaml")

        assert err.to_dict() == {
            "code": "CLINT-CFG003",
            "message": "Config file not found: rules.yaml",
            "context": {"path": "rules.yaml"},
        }


class TestConfigErrors:
    """Configuration error hierarchy."""

    @pytest.mark.unit
    @pytest.mark.parametrize(
        ("err", "code"),
        [
            (ConfigParseError("a.yaml", "bad indent"), "CLINT-CFG001"),
            (ConfigInvalidStructureError("a.yaml", "not a mapping"), "CLINT-CFG002"),
            (ConfigNotFoundError("a.yaml"), "CLINT-CFG003"),
        ],
    )
    def test_codes(self, err: ConfigError, code: str) -> None:
        assert err.code == code
        assert isinstance(err, ConfigError)
        assert isinstance(err, CatalogLintError)

    @pytest.mark.unit
    def test_code_format(self) -> None:
        for cls in (ConfigError, ConfigParseError, ConfigInvalidStructureError, ConfigNotFoundError):
            assert re.fullmatch(r"CLINT-CFG\d{3}", cls.code)

    @pytest.mark.unit
    def test_parse_error_message(self) -> None:
        err = ConfigParseError("a.yaml", "bad indent")

        assert err.message == "Failed to parse config file a.yaml: bad indent"
        assert err.parse_error == "bad indent"  # type: ignore[attr-defined]
