"""Unit tests for record helpers and SafeFilename."""

from __future__ import annotations

import pytest

from tabex.kernel.types import DEFAULT_FILENAME, SafeFilename, cell, cell_text, infer_headers


class TestInferHeaders:
    def test_first_record_keys_in_order(self) -> None:
        records = [{"b": 1, "a": 2}, {"a": 3, "c": 4}]
        assert infer_headers(records) == ["b", "a"]

    def test_override_wins(self) -> None:
        assert infer_headers([{"a": 1}], ["x", "y"]) == ["x", "y"]

    def test_empty_batch_has_no_columns(self) -> None:
        assert infer_headers([]) == []

    def test_override_with_empty_batch(self) -> None:
        assert infer_headers([], ["id"]) == ["id"]


class TestCellText:
    @pytest.mark.parametrize(
        "value, expected",
        [
            (None, ""),
            (True, "true"),
            (False, "false"),
            (0, "0"),
            (1.5, "1.5"),
            ("Ann", "Ann"),
        ],
    )
    def test_rendering(self, value: object, expected: str) -> None:
        assert cell_text(value) == expected

    def test_missing_key_is_empty(self) -> None:
        assert cell({"a": 1}, "b") == ""

    def test_none_record_is_empty(self) -> None:
        assert cell(None, "a") == ""


class TestSafeFilename:
    def test_valid_value(self) -> None:
        assert str(SafeFilename("report_2024-01")) == "report_2024-01"

    def test_rejects_unsafe_value(self) -> None:
        with pytest.raises(ValueError):
            SafeFilename("../etc/passwd")

    def test_sanitize_replaces_disallowed_chars(self) -> None:
        assert SafeFilename.sanitize("my report.v2").value == "my_report_v2"

    def test_sanitize_truncates(self) -> None:
        assert len(SafeFilename.sanitize("a" * 300).value) == 255

    @pytest.mark.parametrize("text", [None, "", "   "])
    def test_sanitize_blank_falls_back(self, text: str | None) -> None:
        assert SafeFilename.sanitize(text).value == DEFAULT_FILENAME

    def test_with_extension(self) -> None:
        assert SafeFilename("data").with_extension("csv") == "data.csv"
