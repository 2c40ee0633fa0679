from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Optional

from ..core.enums import Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import User
from .repository import UserRepository

_USER_COLUMNS = """
    user_id, employee_id, name, email, password_hash, role, department,
    is_active, last_login, created_at
"""


def _row_to_user(row: Dict[str, Any]) -> User:
    return User(
        user_id=int(row["user_id"]),
        employee_id=row["employee_id"],
        name=row["name"],
        email=row["email"],
        password_hash=row["password_hash"],
        role=Role(row["role"]),
        department=row["department"],
        is_active=bool(row.get("is_active", True)),
        last_login=row.get("last_login"),
        created_at=row.get("created_at"),
    )


class MySQLUserRepository(UserRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _get_one(self, where: str, params: tuple) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_USER_COLUMNS} FROM users WHERE {where}", params)
            row = fetchone(cur)
            return _row_to_user(row) if row else None

    def get_by_id(self, user_id: int) -> Optional[User]:
        return self._get_one("user_id=%s", (int(user_id),))

    def get_by_email(self, email: str) -> Optional[User]:
        return self._get_one("email=%s", (email,))

    def get_by_employee_id(self, employee_id: str) -> Optional[User]:
        return self._get_one("employee_id=%s", (employee_id,))

    def get_latest_employee_id(self, prefix: str) -> Optional[str]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT employee_id
                FROM users
                WHERE employee_id LIKE %s
                ORDER BY created_at DESC, user_id DESC
                LIMIT 1
                """,
                (f"{prefix}%",),
            )
            row = fetchone(cur)
            return row["employee_id"] if row else None

    def create_user(
        self,
        *,
        employee_id: str,
        name: str,
        email: str,
        password_hash: str,
        role: Role,
        department: str,
    ) -> User:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO users(employee_id, name, email, password_hash, role, department, is_active)
                VALUES(%s,%s,%s,%s,%s,%s,1)
                """,
                (employee_id, name, email, password_hash, role.value, department),
            )
            user_id = int(cur.lastrowid)

        created = self.get_by_id(user_id)
        if created is None:
            raise RuntimeError(f"user {user_id} vanished right after insert")
        return created

    def update_profile(self, user_id: int, *, name: str, email: str, department: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE users SET name=%s, email=%s, department=%s WHERE user_id=%s",
                (name, email, department, int(user_id)),
            )
            return cur.rowcount > 0

    def touch_last_login(self, user_id: int, at: datetime) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE users SET last_login=%s WHERE user_id=%s", (at, int(user_id)))

    def set_active(self, user_id: int, *, is_active: bool) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE users SET is_active=%s WHERE user_id=%s", (1 if is_active else 0, int(user_id)))
            return cur.rowcount > 0
