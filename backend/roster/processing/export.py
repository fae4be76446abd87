"""
Export adapter — serialise the filtered (unpaged) employee view.

Both formats share the same column set. They are pure transforms: the
caller decides where the bytes go (download response, file on disk).
"""

from __future__ import annotations

import csv
import io
from typing import Iterable, Sequence

from openpyxl import Workbook
from openpyxl.styles import Font
from openpyxl.utils import get_column_letter

from roster.core.constants import ExportFormat
from roster.core.errors import ExportError
from roster.core.logging import get_logger
from roster.processing.view import EmployeeLike, full_name

logger = get_logger(__name__)

HEADERS = ("Name", "Email", "Department", "Salary (₹)")
COLUMN_WIDTHS = (28, 32, 18, 14)
SHEET_TITLE = "Employees"
# Indian rupee, en-IN grouping
SALARY_NUMBER_FORMAT = "[$₹-4009]#,##0"

EXPORT_FILENAMES = {
    ExportFormat.CSV: "employees.csv",
    ExportFormat.XLSX: "employees.xlsx",
}


def _row(record: EmployeeLike) -> tuple[str, str, str, int]:
    return (full_name(record), record.email, record.department, record.salary)


def to_csv(records: Iterable[EmployeeLike]) -> str:
    """Header line, then one fully quoted line per record."""
    buffer = io.StringIO()
    csv.writer(buffer, lineterminator="\n").writerow(HEADERS)
    body = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")
    for record in records:
        body.writerow(_row(record))
    return buffer.getvalue()


def to_xlsx(records: Iterable[EmployeeLike]) -> bytes:
    """Single-sheet workbook with a bold header and currency-formatted salaries."""
    try:
        workbook = Workbook()
        sheet = workbook.active
        sheet.title = SHEET_TITLE

        sheet.append(HEADERS)
        for cell in sheet[1]:
            cell.font = Font(bold=True)
        for index, width in enumerate(COLUMN_WIDTHS, start=1):
            sheet.column_dimensions[get_column_letter(index)].width = width

        salary_column = len(HEADERS)
        for record in records:
            sheet.append(_row(record))
            sheet.cell(row=sheet.max_row, column=salary_column).number_format = SALARY_NUMBER_FORMAT

        buffer = io.BytesIO()
        workbook.save(buffer)
    except Exception as exc:
        logger.error("Spreadsheet export failed", error=str(exc))
        raise ExportError("Failed to export to Excel") from exc
    return buffer.getvalue()


def export_records(records: Sequence[EmployeeLike], fmt: ExportFormat | str) -> bytes:
    """Serialise ``records`` in ``fmt``; CSV is returned UTF-8 encoded."""
    fmt = ExportFormat(fmt)
    if fmt == ExportFormat.CSV:
        return to_csv(records).encode("utf-8")
    return to_xlsx(records)
