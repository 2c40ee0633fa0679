from __future__ import annotations

import io
from dataclasses import dataclass
from typing import Iterable

import pandas as pd
from openpyxl.styles import Font, PatternFill

from ..attendance.model import AttendanceRecord

XLSX_MIMETYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
SHEET_NAME = "Attendance Report"

COLUMNS = [
    ("Employee ID", 15),
    ("Employee Name", 25),
    ("Date", 15),
    ("Check In Time", 20),
    ("Check Out Time", 20),
    ("Working Hours", 15),
    ("Status", 15),
]


@dataclass(frozen=True)
class ExportFile:
    filename: str
    content: bytes
    mimetype: str = XLSX_MIMETYPE


def _row(r: AttendanceRecord) -> list:
    return [
        r.employee_id,
        r.employee_name,
        r.date,
        r.check_in_time.strftime("%H:%M:%S") if r.check_in_time else "",
        r.check_out_time.strftime("%H:%M:%S") if r.check_out_time else "",
        r.working_hours if r.working_hours is not None else "",
        r.status.value,
    ]


def build_workbook(records: Iterable[AttendanceRecord]) -> bytes:
    """Render records to an .xlsx workbook with a bold, shaded header row."""
    df = pd.DataFrame([_row(r) for r in records], columns=[name for name, _ in COLUMNS])

    out = io.BytesIO()
    with pd.ExcelWriter(out, engine="openpyxl") as writer:
        df.to_excel(writer, index=False, sheet_name=SHEET_NAME)
        ws = writer.sheets[SHEET_NAME]
        header_fill = PatternFill(fill_type="solid", fgColor="FFE0E0E0")
        for idx, (_, width) in enumerate(COLUMNS, start=1):
            cell = ws.cell(row=1, column=idx)
            cell.font = Font(bold=True)
            cell.fill = header_fill
            ws.column_dimensions[cell.column_letter].width = width
    return out.getvalue()
