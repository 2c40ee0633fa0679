from __future__ import annotations

from datetime import datetime

from attendance_tracker.core.enums import Role
from attendance_tracker.users.employee_ids import EmployeeIdAllocator, next_employee_id
from tests.fakes import InMemoryUsers


def test_first_employee_of_the_year():
    assert next_employee_id(None, 2025) == "EMP2025001"


def test_increments_latest_suffix():
    assert next_employee_id("EMP2025007", 2025) == "EMP2025008"


def test_sequence_restarts_in_new_year():
    assert next_employee_id("EMP2024042", 2025) == "EMP2025001"


def test_sequence_widens_past_999():
    assert next_employee_id("EMP2025999", 2025) == "EMP20251000"
    assert next_employee_id("EMP20251000", 2025) == "EMP20251001"


def test_unparsable_latest_starts_over():
    assert next_employee_id("ADM0001", 2025) == "EMP2025001"


def test_allocator_reads_most_recently_created_user():
    users = InMemoryUsers()
    for emp in ("EMP2025001", "EMP2025002"):
        users.create_user(
            employee_id=emp,
            name=emp,
            email=f"{emp.lower()}@example.com",
            password_hash="x",
            role=Role.EMPLOYEE,
            department="Ops",
        )

    assert EmployeeIdAllocator(users).allocate(datetime(2025, 11, 3)) == "EMP2025003"
