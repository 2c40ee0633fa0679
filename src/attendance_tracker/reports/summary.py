from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from ..attendance.model import AttendanceRecord
from ..core.enums import AttendanceStatus


@dataclass(frozen=True)
class MonthlySummary:
    total_days: int = 0
    completed_days: int = 0
    total_working_hours: float = 0
    average_working_hours: float = 0.0

    def to_dict(self) -> dict:
        return {
            "totalDays": self.total_days,
            "completedDays": self.completed_days,
            "totalWorkingHours": self.total_working_hours,
            "averageWorkingHours": f"{self.average_working_hours:.2f}",
        }


def summarize(records: Iterable[AttendanceRecord]) -> MonthlySummary:
    """Counts and hour totals over ``records``; open days count as 0 hours.

    The average is taken over every record, completed or not.
    """
    total_days = 0
    completed_days = 0
    total_hours = 0.0
    for r in records:
        total_days += 1
        if r.status == AttendanceStatus.COMPLETED:
            completed_days += 1
        total_hours += r.working_hours or 0.0

    if not total_days:
        return MonthlySummary()

    # Inputs carry 2 decimals; rounding strips float noise from the sum.
    total_hours = round(total_hours, 2)
    return MonthlySummary(
        total_days=total_days,
        completed_days=completed_days,
        total_working_hours=total_hours,
        average_working_hours=total_hours / total_days,
    )
