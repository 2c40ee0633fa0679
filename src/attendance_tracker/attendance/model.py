from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Generic, List, Optional, TypeVar

from ..core.enums import AttendanceStatus
from ..core.exceptions import AlreadyCheckedOut

T = TypeVar("T")

_TWO_PLACES = Decimal("0.01")


def working_hours_between(check_in: datetime, check_out: datetime) -> float:
    """Elapsed hours rounded half-up to 2 decimals (09:00 -> 17:30 gives 8.5)."""
    hours = Decimal(str((check_out - check_in).total_seconds())) / Decimal(3600)
    return float(hours.quantize(_TWO_PLACES, rounding=ROUND_HALF_UP))


@dataclass(frozen=True)
class Location:
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    address: Optional[str] = None


@dataclass
class AttendanceRecord:
    """Domain entity: one employee's attendance for one calendar day.

    Lifecycle: created checked-in, completed exactly once by ``complete``.
    ``working_hours`` is derived on completion and never recomputed.
    """

    employee_id: str
    employee_name: str
    date: str
    check_in_time: datetime
    status: AttendanceStatus = AttendanceStatus.CHECKED_IN
    check_out_time: Optional[datetime] = None
    working_hours: Optional[float] = None
    check_in_image: Optional[str] = None
    check_out_image: Optional[str] = None
    notes: Optional[str] = None
    location: Optional[Location] = None
    attendance_id: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def is_completed(self) -> bool:
        return self.status == AttendanceStatus.COMPLETED or self.check_out_time is not None

    def calculate_working_hours(self) -> Optional[float]:
        # Frozen once set.
        if self.working_hours is not None:
            return self.working_hours
        if self.check_in_time is None or self.check_out_time is None:
            return None
        self.working_hours = working_hours_between(self.check_in_time, self.check_out_time)
        return self.working_hours

    def complete(self, *, check_out_time: datetime, image: Optional[str] = None) -> None:
        if self.is_completed:
            raise AlreadyCheckedOut()
        self.check_out_time = check_out_time
        self.check_out_image = image
        self.updated_at = check_out_time
        self.calculate_working_hours()
        self.status = AttendanceStatus.COMPLETED

    @property
    def working_duration(self) -> Optional[str]:
        """Human-readable working hours, e.g. 8.5 -> '8h 30m'."""
        if self.working_hours is None:
            return None
        hours = int(self.working_hours)
        minutes = int(round((self.working_hours - hours) * 60))
        if minutes == 60:
            hours, minutes = hours + 1, 0
        return f"{hours}h {minutes}m"


@dataclass(frozen=True)
class Page(Generic[T]):
    items: List[T] = field(default_factory=list)
    page: int = 1
    limit: int = 10
    total: int = 0

    @property
    def pages(self) -> int:
        return math.ceil(self.total / self.limit) if self.limit else 0
