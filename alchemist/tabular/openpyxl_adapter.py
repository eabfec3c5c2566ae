import datetime
import io
from collections.abc import Iterable, Mapping

import openpyxl
from openpyxl.cell.read_only import EmptyCell, ReadOnlyCell
import xlrd

from alchemist.results.models import Matrix
from alchemist.tabular.base import BaseTabularCodec
from alchemist.tabular.exceptions import TabularCodecError

# Legacy .xls files are OLE2 compound documents.
_OLE2_SIGNATURE = b"\xd0\xcf\x11\xe0\xa1\xb1\x1a\xe1"


class OpenpyxlCodec(BaseTabularCodec):
    """Reads and writes .xlsx workbooks with openpyxl; reads legacy .xls with xlrd."""

    def decode(self, data: bytes) -> dict[str, Matrix]:
        if data.startswith(_OLE2_SIGNATURE):
            return self._decode_xls(data)
        try:
            workbook = openpyxl.load_workbook(io.BytesIO(data), read_only=True, data_only=True)
        except Exception as exc:
            raise TabularCodecError(f"openpyxl could not read workbook: {exc}") from exc
        try:
            return {
                sheet.title: _stored_matrix(sheet.iter_rows())
                for sheet in workbook.worksheets
            }
        except Exception as exc:
            raise TabularCodecError(f"openpyxl could not read workbook: {exc}") from exc
        finally:
            workbook.close()

    def encode(self, units: Mapping[str, Matrix]) -> bytes:
        if not units:
            raise TabularCodecError("Cannot write a workbook without sheets")
        workbook = openpyxl.Workbook()
        workbook.remove(workbook.active)
        try:
            for name, matrix in units.items():
                sheet = workbook.create_sheet(title=name)
                for row_idx, row in enumerate(matrix, start=1):
                    for col_idx, value in enumerate(row, start=1):
                        cell = sheet.cell(row=row_idx, column=col_idx, value=value)
                        if isinstance(value, str) and value.startswith("="):
                            # Cells hold literal text, never formulas.
                            cell.data_type = "s"
            buffer = io.BytesIO()
            workbook.save(buffer)
        except Exception as exc:
            raise TabularCodecError(f"openpyxl could not write workbook: {exc}") from exc
        return buffer.getvalue()

    def _decode_xls(self, data: bytes) -> dict[str, Matrix]:
        try:
            book = xlrd.open_workbook(file_contents=data, ragged_rows=True)
        except Exception as exc:
            raise TabularCodecError(f"xlrd could not read workbook: {exc}") from exc
        units: dict[str, Matrix] = {}
        for sheet in book.sheets():
            rows = (
                [_xls_value(cell, book.datemode) for cell in sheet.row(row_idx)]
                for row_idx in range(sheet.nrows)
            )
            units[sheet.name] = _drop_trailing_empty_rows(
                [[_cell_text(value) for value in row] for row in rows]
            )
        return units


def _stored_matrix(rows: Iterable[tuple[ReadOnlyCell | EmptyCell, ...]]) -> Matrix:
    """Stringify each row up to its last stored cell.

    Read-only rows are padded with EmptyCell where the file stores nothing,
    so blank cells that were written survive and padding does not.
    """
    matrix: Matrix = []
    for row in rows:
        width = 0
        for idx, cell in enumerate(row, start=1):
            if not isinstance(cell, EmptyCell):
                width = idx
        matrix.append([_cell_text(cell.value) for cell in row[:width]])
    return _drop_trailing_empty_rows(matrix)


def _drop_trailing_empty_rows(matrix: Matrix) -> Matrix:
    # A row without cells has no stored form once it is the last row.
    while matrix and not matrix[-1]:
        matrix.pop()
    return matrix


def _cell_text(value: object) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "TRUE" if value else "FALSE"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (datetime.datetime, datetime.date, datetime.time)):
        return value.isoformat()
    return str(value)


def _xls_value(cell: "xlrd.sheet.Cell", datemode: int) -> object:
    if cell.ctype in (xlrd.XL_CELL_EMPTY, xlrd.XL_CELL_BLANK):
        return None
    if cell.ctype == xlrd.XL_CELL_BOOLEAN:
        return bool(cell.value)
    if cell.ctype == xlrd.XL_CELL_DATE:
        return xlrd.xldate_as_datetime(cell.value, datemode)
    if cell.ctype == xlrd.XL_CELL_ERROR:
        return xlrd.error_text_from_code.get(cell.value, "")
    return cell.value
