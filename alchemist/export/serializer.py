import datetime
import html

from alchemist.logging.logger import Log
from alchemist.results.models import Matrix, ResultModel, TabularResult, TextResult
from alchemist.tabular.base import BaseTabularCodec

DOCUMENT_TITLE = "Extracted Data"
EXPORT_BASENAME = "extracted_data"
WORD_MEDIA_TYPE = "application/msword"

_BYTE_ORDER_MARK = "\ufeff"

_TEXT_STYLE = (
    "body { font-family: Arial, sans-serif; font-size: 12pt; }\n"
    "pre { white-space: pre-wrap; word-wrap: break-word; "
    "font-family: 'Courier New', Courier, monospace; }"
)
_TABLE_STYLE = (
    "body { font-family: Arial, sans-serif; }\n"
    "table { border-collapse: collapse; width: 100%; margin-bottom: 20px; }\n"
    "th, td { border: 1px solid #dddddd; text-align: left; padding: 8px; }\n"
    "th { background-color: #f2f2f2; }\n"
    "h2 { color: #333; }"
)


def export_filename(extension: str, now: datetime.datetime | None = None) -> str:
    """Name a download ``extracted_data_<UTC timestamp>.<extension>``."""
    moment = now or datetime.datetime.now(datetime.timezone.utc)
    stamp = moment.strftime("%Y-%m-%dT%H-%M-%S")
    return f"{EXPORT_BASENAME}_{stamp}.{extension.lstrip('.')}"


class ExportSerializer:
    """Turns a result model into downloadable spreadsheet or word-processor bytes."""

    def __init__(self, codec: BaseTabularCodec) -> None:
        self._codec = codec

    def to_spreadsheet_bytes(self, result: TabularResult) -> bytes | None:
        """One sheet per unit in insertion order; None when there are no units."""
        if result.is_empty:
            return None
        data = self._codec.encode(result.units)
        Log.info(f"Spreadsheet export: {len(result.units)} sheet(s), {len(data)} bytes")
        return data

    def to_word_bytes(self, result: ResultModel) -> bytes | None:
        """HTML document with a byte-order mark, readable by word processors.

        Returns None when there is nothing to export.
        """
        if isinstance(result, TextResult):
            page = _html_page(_TEXT_STYLE, f"<pre>{html.escape(result.text)}</pre>")
        elif isinstance(result, TabularResult) and not result.is_empty:
            sections = "".join(
                _unit_section(name, matrix) for name, matrix in result.units.items()
            )
            page = _html_page(_TABLE_STYLE, sections)
        else:
            return None
        data = f"{_BYTE_ORDER_MARK}{page}".encode("utf-8")
        Log.info(f"Word export: {len(data)} bytes")
        return data


def _html_page(style: str, body: str) -> str:
    return (
        '<!DOCTYPE html><html><head><meta charset="UTF-8">'
        f"<title>{DOCUMENT_TITLE}</title>\n<style>\n{style}\n</style>\n"
        f"</head><body>{body}</body></html>"
    )


def _unit_section(name: str, matrix: Matrix) -> str:
    parts = [f"<h2>{html.escape(name)}</h2>"]
    if not matrix:
        return "".join(parts)
    parts.append("<table>")
    header = matrix[0]
    if header:
        parts.append("<thead><tr>")
        parts.extend(f"<th>{_cell(value)}</th>" for value in header)
        parts.append("</tr></thead>")
    parts.append("<tbody>")
    for row in matrix[1:]:
        parts.append("<tr>")
        parts.extend(f"<td>{_cell(value)}</td>" for value in row)
        parts.append("</tr>")
    parts.append("</tbody></table>")
    return "".join(parts)


def _cell(value: str | None) -> str:
    return html.escape(value) if value else ""
