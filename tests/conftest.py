import io

import openpyxl
import pytest

from alchemist.documents.models import RawDocument

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def build_workbook(sheets: dict[str, list[list[object]]]) -> bytes:
    """Write an .xlsx workbook with one sheet per entry, in order."""
    workbook = openpyxl.Workbook()
    workbook.remove(workbook.active)
    for name, rows in sheets.items():
        sheet = workbook.create_sheet(title=name)
        for row in rows:
            sheet.append(row)
    buf = io.BytesIO()
    workbook.save(buf)
    return buf.getvalue()


@pytest.fixture()
def two_sheet_xlsx_bytes() -> bytes:
    """Sheet A holds a header and one row; Sheet B is empty."""
    return build_workbook({
        "Sheet A": [["Name", "Age"], ["Ann", "30"]],
        "Sheet B": [],
    })


@pytest.fixture()
def spreadsheet_document(two_sheet_xlsx_bytes: bytes) -> RawDocument:
    return RawDocument(
        content=two_sheet_xlsx_bytes,
        media_type=XLSX_MEDIA_TYPE,
        filename="people.xlsx",
    )


@pytest.fixture()
def image_document() -> RawDocument:
    return RawDocument(
        content=b"\x89PNG\r\n\x1a\nfake-image",
        media_type="image/png",
        filename="invoice.png",
    )


@pytest.fixture()
def pdf_document() -> RawDocument:
    return RawDocument(
        content=b"%PDF-1.4 fake",
        media_type="application/pdf",
        filename="report.pdf",
    )


@pytest.fixture()
def make_workbook():  # type: ignore[no-untyped-def]
    """Factory fixture: sheets mapping -> .xlsx bytes."""
    return build_workbook
