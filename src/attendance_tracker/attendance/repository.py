from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import AttendanceRecord

ATTENDANCE_UNIQUE_KEY = "uq_attendance_employee_date"


class AttendanceRepository(Protocol):
    """Attendance record store.

    Listing methods return records ordered by date, then check-in time, both
    descending. ``create_checkin`` must enforce one record per
    (employee_id, date) at the storage level and raise
    ``DuplicateRecordError`` on violation.
    """

    def get_for_employee_and_date(self, employee_id: str, work_date: str) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def create_checkin(self, record: AttendanceRecord) -> AttendanceRecord:
        raise NotImplementedError

    def save_checkout(self, record: AttendanceRecord) -> bool:
        """Persist check-out fields only if the stored record is still open."""

        raise NotImplementedError

    def count_all(self) -> int:
        raise NotImplementedError

    def list_page(self, *, offset: int, limit: int) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def list_by_date_range(self, start_date: str, end_date: str) -> Sequence[AttendanceRecord]:
        """Records with ``start_date <= date <= end_date`` (YYYY-MM-DD string comparison)."""

        raise NotImplementedError

    def list_all(self) -> Sequence[AttendanceRecord]:
        raise NotImplementedError
