"""Tests for AI response validation."""

import pytest

from alchemist.extraction.exceptions import InvalidResponseError
from alchemist.extraction.validator import build_matrix, parse_json_object


class TestParseJsonObject:
    def test_parses_object(self) -> None:
        assert parse_json_object('{"data": []}') == {"data": []}

    def test_strips_markdown_code_fences(self) -> None:
        assert parse_json_object('```json\n{"data": [["a"]]}\n```') == {"data": [["a"]]}

    def test_strips_plain_code_fences(self) -> None:
        assert parse_json_object('```\n{"data": []}\n```') == {"data": []}

    def test_invalid_json_raises(self) -> None:
        with pytest.raises(InvalidResponseError, match="Invalid JSON"):
            parse_json_object("not valid json")

    def test_json_array_raises(self) -> None:
        with pytest.raises(InvalidResponseError, match="must be an object"):
            parse_json_object("[[1, 2]]")


class TestBuildMatrix:
    def test_returns_rows(self) -> None:
        payload = {"data": [["Name", "Age"], ["Ann", "30"]]}
        assert build_matrix(payload, "data") == [["Name", "Age"], ["Ann", "30"]]

    def test_allows_ragged_and_empty_rows(self) -> None:
        payload = {"data": [["a", "b", "c"], [], ["d"]]}
        assert build_matrix(payload, "data") == [["a", "b", "c"], [], ["d"]]

    def test_stringifies_scalars_and_nulls(self) -> None:
        payload = {"data": [[30, 1.5, True, None, "x"]]}
        assert build_matrix(payload, "data") == [["30", "1.5", "true", "", "x"]]

    def test_missing_field_raises(self) -> None:
        with pytest.raises(InvalidResponseError, match="Missing required field: data"):
            build_matrix({"notData": []}, "data")

    def test_non_array_field_raises(self) -> None:
        with pytest.raises(InvalidResponseError, match="must be an array"):
            build_matrix({"translatedData": "hola"}, "translatedData")

    def test_null_field_raises(self) -> None:
        with pytest.raises(InvalidResponseError, match="must be an array"):
            build_matrix({"data": None}, "data")

    def test_non_array_row_raises(self) -> None:
        with pytest.raises(InvalidResponseError, match="row at index 1"):
            build_matrix({"data": [["ok"], "not a row"]}, "data")

    def test_nested_cell_raises(self) -> None:
        with pytest.raises(InvalidResponseError, match="non-scalar"):
            build_matrix({"data": [[{"a": 1}]]}, "data")
