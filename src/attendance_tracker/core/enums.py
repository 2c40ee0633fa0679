from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User role used for authorization."""

    ADMIN = "admin"
    EMPLOYEE = "employee"


class AttendanceStatus(str, Enum):
    """Lifecycle state of one day's attendance record.

    A day with no record is "absent"; it has no stored representation.
    """

    CHECKED_IN = "checked-in"
    COMPLETED = "completed"
