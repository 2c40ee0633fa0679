from __future__ import annotations

from dataclasses import replace
from typing import Any, Dict, Optional, Sequence

from ..core.enums import AttendanceStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import AttendanceRecord, Location
from .repository import AttendanceRepository

_COLUMNS = """
    attendance_id, employee_id, employee_name, work_date, check_in_time, check_out_time,
    working_hours, status, check_in_image, check_out_image, notes,
    latitude, longitude, address, created_at, updated_at
"""

_ORDER = "ORDER BY work_date DESC, check_in_time DESC"


def _row_to_record(r: Dict[str, Any]) -> AttendanceRecord:
    location = None
    if r.get("latitude") is not None or r.get("longitude") is not None or r.get("address"):
        location = Location(
            latitude=r.get("latitude"),
            longitude=r.get("longitude"),
            address=r.get("address"),
        )
    working_hours = r.get("working_hours")
    return AttendanceRecord(
        attendance_id=int(r["attendance_id"]),
        employee_id=r["employee_id"],
        employee_name=r["employee_name"],
        date=str(r["work_date"]),
        check_in_time=r["check_in_time"],
        check_out_time=r.get("check_out_time"),
        # DECIMAL comes back as Decimal
        working_hours=float(working_hours) if working_hours is not None else None,
        status=AttendanceStatus(r["status"]),
        check_in_image=r.get("check_in_image"),
        check_out_image=r.get("check_out_image"),
        notes=r.get("notes"),
        location=location,
        created_at=r.get("created_at"),
        updated_at=r.get("updated_at"),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_for_employee_and_date(self, employee_id: str, work_date: str) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM attendance_records WHERE employee_id=%s AND work_date=%s",
                (employee_id, work_date),
            )
            r = fetchone(cur)
            return _row_to_record(r) if r else None

    def create_checkin(self, record: AttendanceRecord) -> AttendanceRecord:
        loc = record.location or Location()
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance_records(
                    employee_id, employee_name, work_date, check_in_time, status,
                    check_in_image, notes, latitude, longitude, address
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    record.employee_id,
                    record.employee_name,
                    record.date,
                    record.check_in_time,
                    record.status.value,
                    record.check_in_image,
                    record.notes,
                    loc.latitude,
                    loc.longitude,
                    loc.address,
                ),
            )
            attendance_id = int(cur.lastrowid)
        return replace(record, attendance_id=attendance_id)

    def save_checkout(self, record: AttendanceRecord) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance_records
                SET check_out_time=%s, check_out_image=%s, working_hours=%s, status=%s
                WHERE employee_id=%s AND work_date=%s AND check_out_time IS NULL
                """,
                (
                    record.check_out_time,
                    record.check_out_image,
                    record.working_hours,
                    record.status.value,
                    record.employee_id,
                    record.date,
                ),
            )
            return cur.rowcount > 0

    def count_all(self) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(*) AS total FROM attendance_records")
            row = fetchone(cur)
            return int(row["total"]) if row else 0

    def list_page(self, *, offset: int, limit: int) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM attendance_records {_ORDER} LIMIT %s OFFSET %s",
                (int(limit), int(offset)),
            )
            return [_row_to_record(r) for r in fetchall(cur)]

    def list_by_date_range(self, start_date: str, end_date: str) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM attendance_records WHERE work_date BETWEEN %s AND %s {_ORDER}",
                (start_date, end_date),
            )
            return [_row_to_record(r) for r in fetchall(cur)]

    def list_all(self) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM attendance_records {_ORDER}")
            return [_row_to_record(r) for r in fetchall(cur)]
