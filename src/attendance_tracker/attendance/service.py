from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable, List, Optional

from ..common.datetime_utils import date_key, now_local
from ..core.constants import DEFAULT_PAGE, DEFAULT_PAGE_LIMIT, MAX_WORKING_HOURS
from ..core.exceptions import AlreadyCheckedIn, AlreadyCheckedOut, AuthorizationError, DuplicateRecordError, NoCheckInFound
from ..users.model import User
from .model import AttendanceRecord, Location, Page
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


def require_owner(actor: User, employee_id: str) -> None:
    """Employees may only record attendance for themselves; admins for anyone."""
    if not actor.is_admin and actor.employee_id != employee_id:
        raise AuthorizationError("You can only record attendance for your own Employee ID")


class AttendanceService:
    """Check-in/check-out state machine: absent -> checked-in -> completed."""

    def __init__(self, attendance: AttendanceRepository, *, clock: Callable[[], datetime] = now_local):
        self._attendance = attendance
        self._clock = clock

    def check_in(
        self,
        *,
        employee_id: str,
        employee_name: str,
        image: Optional[str] = None,
        notes: Optional[str] = None,
        location: Optional[Location] = None,
        now: Optional[datetime] = None,
    ) -> AttendanceRecord:
        now = now or self._clock()
        today = date_key(now)

        if self._attendance.get_for_employee_and_date(employee_id, today):
            raise AlreadyCheckedIn()

        record = AttendanceRecord(
            employee_id=employee_id,
            employee_name=employee_name,
            date=today,
            check_in_time=now,
            check_in_image=image,
            notes=notes,
            location=location,
        )
        try:
            saved = self._attendance.create_checkin(record)
        except DuplicateRecordError:
            # A concurrent check-in won between our lookup and insert.
            raise AlreadyCheckedIn()

        logger.info("check-in %s (%s) on %s", employee_id, employee_name, today)
        return saved

    def check_out(
        self,
        *,
        employee_id: str,
        image: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> AttendanceRecord:
        now = now or self._clock()
        today = date_key(now)

        record = self._attendance.get_for_employee_and_date(employee_id, today)
        if not record:
            raise NoCheckInFound()

        record.complete(check_out_time=now, image=image)

        hours = record.working_hours
        if hours is not None and not 0 <= hours <= MAX_WORKING_HOURS:
            logger.warning("working hours out of range for %s on %s: %s", employee_id, today, hours)

        if not self._attendance.save_checkout(record):
            raise AlreadyCheckedOut()

        logger.info("check-out %s on %s (%s h)", employee_id, today, hours)
        return record

    def today(self, *, now: Optional[datetime] = None) -> List[AttendanceRecord]:
        today = date_key(now or self._clock())
        return list(self._attendance.list_by_date_range(today, today))

    def list_page(self, *, page: int = DEFAULT_PAGE, limit: int = DEFAULT_PAGE_LIMIT) -> Page[AttendanceRecord]:
        offset = (page - 1) * limit
        total = self._attendance.count_all()
        items = list(self._attendance.list_page(offset=offset, limit=limit))
        return Page(items=items, page=page, limit=limit, total=total)

    def list_by_date_range(self, start_date: str, end_date: str) -> List[AttendanceRecord]:
        return list(self._attendance.list_by_date_range(start_date, end_date))
