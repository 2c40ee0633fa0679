from __future__ import annotations

from datetime import datetime

import pytest

from attendance_tracker.config import testing as testing_settings
from attendance_tracker.container import build_services
from attendance_tracker.main import create_app

from .fakes import InMemoryAttendance, InMemoryUsers


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2025, 11, 3, 9, 0, 0)


@pytest.fixture
def users_repo() -> InMemoryUsers:
    return InMemoryUsers()


@pytest.fixture
def attendance_repo() -> InMemoryAttendance:
    return InMemoryAttendance()


@pytest.fixture
def container(users_repo, attendance_repo):
    return build_services(
        users_repo=users_repo,
        attendance_repo=attendance_repo,
        jwt_secret=testing_settings.JWT_SECRET,
    )


@pytest.fixture
def app(container):
    return create_app(settings=testing_settings, container=container)


@pytest.fixture
def client(app):
    return app.test_client()
