from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol

from ..core.enums import Role
from .model import User

# Unique index names, reported through DuplicateRecordError.key
EMAIL_UNIQUE_KEY = "uq_users_email"
EMPLOYEE_ID_UNIQUE_KEY = "uq_users_employee_id"


class UserRepository(Protocol):
    """Repository interface for users.

    Note (DIP): the service layer depends on this interface, not on a concrete DB.
    Writes that hit a unique key raise ``DuplicateRecordError``.
    """

    def get_by_id(self, user_id: int) -> Optional[User]:
        raise NotImplementedError

    def get_by_email(self, email: str) -> Optional[User]:
        raise NotImplementedError

    def get_by_employee_id(self, employee_id: str) -> Optional[User]:
        raise NotImplementedError

    def get_latest_employee_id(self, prefix: str) -> Optional[str]:
        """Employee id of the most recently created user whose id starts with ``prefix``."""

        raise NotImplementedError

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
        raise NotImplementedError

    def update_profile(
        self,
        user_id: int,
        *,
        name: str,
        email: str,
        department: str,
    ) -> bool:
        raise NotImplementedError

    def touch_last_login(self, user_id: int, at: datetime) -> None:
        raise NotImplementedError

    def set_active(self, user_id: int, *, is_active: bool) -> bool:
        raise NotImplementedError
