"""Validates untrusted AI responses before they become result models."""

import json
from typing import Any

from alchemist.extraction.exceptions import InvalidResponseError
from alchemist.results.models import Matrix

_SCALAR_TYPES = (str, int, float, bool)


def parse_json_object(raw: str) -> dict[str, Any]:
    """Parse a provider response as a JSON object.

    Markdown code fences around the payload are stripped first.

    Raises:
        InvalidResponseError: if the text is not JSON or not an object.
    """
    cleaned = raw.strip()
    if cleaned.startswith("```"):
        lines = cleaned.splitlines()
        if lines and lines[0].startswith("```"):
            lines = lines[1:]
        if lines and lines[-1].strip() == "```":
            lines = lines[:-1]
        cleaned = "\n".join(lines)

    try:
        parsed = json.loads(cleaned)
    except json.JSONDecodeError as exc:
        raise InvalidResponseError(f"Invalid JSON response: {exc}") from exc

    if not isinstance(parsed, dict):
        raise InvalidResponseError("JSON response must be an object")
    return parsed


def build_matrix(payload: dict[str, Any], field: str) -> Matrix:
    """Read ``payload[field]`` as an array of rows of cell strings.

    Scalar cells are stringified and nulls become empty strings; rows may be
    ragged.

    Raises:
        InvalidResponseError: if the field is missing, is not an array, or
            holds a row or cell of the wrong type.
    """
    if field not in payload:
        raise InvalidResponseError(f"Missing required field: {field}")
    rows = payload[field]
    if not isinstance(rows, list):
        raise InvalidResponseError(f"'{field}' must be an array")
    return [_build_row(row, field, i) for i, row in enumerate(rows)]


def _build_row(raw: Any, field: str, index: int) -> list[str]:
    if not isinstance(raw, list):
        raise InvalidResponseError(f"'{field}' row at index {index} must be an array")
    cells: list[str] = []
    for cell in raw:
        if cell is None:
            cells.append("")
        elif isinstance(cell, _SCALAR_TYPES):
            cells.append(cell if isinstance(cell, str) else json.dumps(cell))
        else:
            raise InvalidResponseError(
                f"'{field}' row at index {index} holds a non-scalar cell: {cell!r}"
            )
    return cells
