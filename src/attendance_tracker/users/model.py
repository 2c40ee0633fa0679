from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class User:
    """Domain entity: a registered employee or admin.

    Note: Plain data object (no DB access code here).
    """

    user_id: int
    employee_id: str
    name: str
    email: str
    password_hash: str
    role: Role
    department: str
    is_active: bool = True
    last_login: Optional[datetime] = None
    created_at: Optional[datetime] = None

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN
