from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .database.connection import DBConfig, DatabaseConnection
from .reports.service import AttendanceReportService
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserRepository
from .users.service import AuthService, UserService
from .users.tokens import TokenService


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    users_repo: UserRepository
    attendance_repo: AttendanceRepository

    tokens: TokenService
    auth_service: AuthService
    user_service: UserService
    attendance_service: AttendanceService
    report_service: AttendanceReportService


def build_services(
    *,
    users_repo: UserRepository,
    attendance_repo: AttendanceRepository,
    jwt_secret: str,
    conn: Optional[DatabaseConnection] = None,
) -> Container:
    """Wire services over the given repositories (tests pass in-memory ones)."""
    tokens = TokenService(jwt_secret)
    return Container(
        conn=conn,
        users_repo=users_repo,
        attendance_repo=attendance_repo,
        tokens=tokens,
        auth_service=AuthService(users_repo, tokens),
        user_service=UserService(users_repo),
        attendance_service=AttendanceService(attendance_repo),
        report_service=AttendanceReportService(attendance_repo),
    )


def build_container(*, db_config: dict, jwt_secret: str) -> Container:
    conn = DatabaseConnection(DBConfig.from_dict(db_config))
    return build_services(
        users_repo=MySQLUserRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        jwt_secret=jwt_secret,
        conn=conn,
    )
