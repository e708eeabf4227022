"""Tests for output.py - styled terminal output helpers."""

from __future__ import annotations

from io import StringIO

import pytest
from hypothesis import given
from hypothesis import strategies as st

from catalog_lint.output import detail, error, info, success, warn


class TestOutputFunctions:
    """Tests for output helper functions."""

    @pytest.mark.unit
    @pytest.mark.parametrize(
        ("func", "prefix"),
        [(success, "✓"), (info, "→"), (warn, "⚠"), (error, "✗")],
    )
    def test_prefix_and_message(self, func, prefix: str) -> None:
        output = StringIO()
        func("Unreferenced version: okhttp", file=output)

        result = output.getvalue()
        assert result == f"{prefix} Unreferenced version: okhttp\n"

    @pytest.mark.unit
    def test_detail_is_indented(self) -> None:
        output = StringIO()
        detail("Hint: add it", file=output)

        assert output.getvalue() == "  Hint: add it\n"

    @pytest.mark.unit
    def test_no_newline_when_nl_false(self) -> None:
        output = StringIO()
        success("test", file=output, nl=False)

        assert not output.getvalue().endswith("\n")

    @pytest.mark.unit
    def test_errors_and_warnings_default_to_stderr(self, capsys: pytest.CaptureFixture[str]) -> None:
        error("broken")
        warn("careful")
        info("fine")

        captured = capsys.readouterr()
        assert "broken" in captured.err
        assert "careful" in captured.err
        assert "fine" in captured.out
        assert "broken" not in captured.out

    @pytest.mark.unit
    @given(message=st.text(alphabet=st.characters(blacklist_categories=("Cs", "Cc")), max_size=50))
    def test_message_is_preserved(self, message: str) -> None:
        output = StringIO()
        info(message, file=output)

        assert message in output.getvalue()
