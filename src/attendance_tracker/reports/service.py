from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Callable, List, Optional

from ..attendance.model import AttendanceRecord
from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import date_key, month_key_bounds, now_local
from .exporter import ExportFile, build_workbook
from .summary import MonthlySummary, summarize


@dataclass(frozen=True)
class MonthlyReport:
    summary: MonthlySummary
    records: List[AttendanceRecord]


class AttendanceReportService:
    def __init__(self, attendance: AttendanceRepository, *, clock: Callable[[], datetime] = now_local):
        self._attendance = attendance
        self._clock = clock

    def monthly_summary(self, month: int, year: int) -> MonthlyReport:
        start, end = month_key_bounds(month, year)
        records = list(self._attendance.list_by_date_range(start, end))
        return MonthlyReport(summary=summarize(records), records=records)

    def export(
        self,
        *,
        start_date: Optional[str] = None,
        end_date: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> ExportFile:
        if start_date and end_date:
            records = self._attendance.list_by_date_range(start_date, end_date)
        else:
            records = self._attendance.list_all()

        filename = f"attendance_report_{date_key(now or self._clock())}.xlsx"
        return ExportFile(filename=filename, content=build_workbook(records))
