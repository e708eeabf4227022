"""Tests for the JSON output envelope."""

from __future__ import annotations

import json

import pytest

from catalog_lint.json_output import (
    ErrorDetail,
    OutputEnvelope,
    error_envelope,
    result_envelope,
    success_envelope,
)
from catalog_lint.validation.results import Issue, Severity, ValidationResult


class TestErrorDetail:
    @pytest.mark.unit
    def test_to_dict_without_code(self) -> None:
        assert ErrorDetail(type="library_entries", message="bad").to_dict() == {
            "type": "library_entries",
            "message": "bad",
        }

    @pytest.mark.unit
    def test_to_dict_with_code(self) -> None:
        detail = ErrorDetail(type="ConfigNotFoundError", message="missing", code="CLINT-CFG003")

        assert detail.to_dict()["code"] == "CLINT-CFG003"


class TestEnvelopes:
    @pytest.mark.unit
    def test_success_envelope_has_no_errors_key(self) -> None:
        envelope = success_envelope("check", {"is_valid": True})

        assert envelope.to_dict() == {"success": True, "command": "check", "data": {"is_valid": True}}

    @pytest.mark.unit
    def test_error_envelope_defaults_data(self) -> None:
        envelope = error_envelope("check", [ErrorDetail(type="X", message="y")])

        assert envelope.to_dict()["data"] == {}
        assert envelope.to_dict()["errors"] == [{"type": "X", "message": "y"}]

    @pytest.mark.unit
    def test_to_json_round_trips(self) -> None:
        envelope = OutputEnvelope(success=True, command="rules", data={"rules": []})

        assert json.loads(envelope.to_json(indent=None)) == envelope.to_dict()


class TestResultEnvelope:
    @pytest.mark.unit
    def test_valid_result(self) -> None:
        result = ValidationResult.from_issues([Issue("unreferenced_versions", Severity.WARNING, "Unreferenced version: x")])

        data = result_envelope("check", "libs.versions.toml", result).to_dict()

        assert data["success"] is True
        assert "errors" not in data
        assert data["data"]["path"] == "libs.versions.toml"
        assert data["data"]["warnings"] == ["Unreferenced version: x"]

    @pytest.mark.unit
    def test_invalid_result_lists_errors_only(self) -> None:
        result = ValidationResult.from_issues(
            [
                Issue("library_entries", Severity.ERROR, "Missing version reference: v in library 'a'"),
                Issue("unreferenced_versions", Severity.WARNING, "Unreferenced version: x"),
            ]
        )

        data = result_envelope("check", "libs.versions.toml", result).to_dict()

        assert data["success"] is False
        assert data["errors"] == [
            {"type": "library_entries", "message": "Missing version reference: v in library 'a'"}
        ]
        assert data["data"]["error_count"] == 1
