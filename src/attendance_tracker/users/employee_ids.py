from __future__ import annotations

import re
from datetime import datetime
from typing import Optional

from ..core.constants import EMPLOYEE_ID_PREFIX, EMPLOYEE_SEQUENCE_WIDTH
from .repository import UserRepository

_EMPLOYEE_ID_RE = re.compile(rf"^{EMPLOYEE_ID_PREFIX}(\d{{4}})(\d+)$")


def next_employee_id(latest: Optional[str], year: int) -> str:
    """Format the id following ``latest``, e.g. EMP2025007 -> EMP2025008.

    The sequence restarts at 1 when ``latest`` is missing, unparsable or from
    an earlier year. Sequences past 999 widen rather than wrap.
    """
    seq = 1
    if latest:
        m = _EMPLOYEE_ID_RE.match(latest)
        if m and int(m.group(1)) == year:
            seq = int(m.group(2)) + 1
    return f"{EMPLOYEE_ID_PREFIX}{year:04d}{seq:0{EMPLOYEE_SEQUENCE_WIDTH}d}"


class EmployeeIdAllocator:
    """Read-latest-then-increment allocator.

    Two concurrent registrations can compute the same id; the unique key on
    ``users.employee_id`` rejects the second insert.
    """

    def __init__(self, users: UserRepository):
        self._users = users

    def allocate(self, now: datetime) -> str:
        latest = self._users.get_latest_employee_id(EMPLOYEE_ID_PREFIX)
        return next_employee_id(latest, now.year)
