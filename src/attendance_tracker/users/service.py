from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from datetime import datetime
from typing import Callable, Optional

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.datetime_utils import now_local
from ..core.enums import Role
from ..core.exceptions import (
    AccountDisabled,
    AuthorizationError,
    ConflictError,
    DuplicateRecordError,
    EmailTaken,
    InvalidCredentials,
    InvalidToken,
    NotFoundError,
    ValidationError,
)
from .employee_ids import EmployeeIdAllocator
from .model import User
from .repository import EMAIL_UNIQUE_KEY, UserRepository
from .tokens import TokenService

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AuthResult:
    """What the client receives after register/login."""

    user: User
    token: str


class AuthService:
    """Use cases: register, login, verify a session token."""

    def __init__(
        self,
        users: UserRepository,
        tokens: TokenService,
        *,
        employee_ids: Optional[EmployeeIdAllocator] = None,
        clock: Callable[[], datetime] = now_local,
    ):
        self._users = users
        self._tokens = tokens
        self._employee_ids = employee_ids or EmployeeIdAllocator(users)
        self._clock = clock

    def register(
        self,
        *,
        name: str,
        email: str,
        password: str,
        department: str,
        now: Optional[datetime] = None,
    ) -> AuthResult:
        now = now or self._clock()
        email = email.lower()

        if self._users.get_by_email(email):
            raise EmailTaken()

        employee_id = self._employee_ids.allocate(now)
        try:
            user = self._users.create_user(
                employee_id=employee_id,
                name=name,
                email=email,
                password_hash=generate_password_hash(password),
                role=Role.EMPLOYEE,
                department=department,
            )
        except DuplicateRecordError as e:
            if e.key == EMAIL_UNIQUE_KEY:
                raise EmailTaken()
            logger.warning("employee id %s collided during registration", employee_id)
            raise ConflictError("Employee ID was assigned concurrently, please try again")

        self._users.touch_last_login(user.user_id, now)
        logger.info("registered %s (%s)", user.employee_id, user.email)
        return AuthResult(user=replace(user, last_login=now), token=self._tokens.issue(user.user_id))

    def login(self, *, email: str, password: str, now: Optional[datetime] = None) -> AuthResult:
        now = now or self._clock()

        user = self._users.get_by_email(email.lower())
        if not user or not _password_matches(user.password_hash, password):
            raise InvalidCredentials()
        if not user.is_active:
            raise AccountDisabled()

        self._users.touch_last_login(user.user_id, now)
        logger.info("login %s", user.employee_id)
        return AuthResult(user=replace(user, last_login=now), token=self._tokens.issue(user.user_id))

    def verify(self, token: str) -> User:
        user_id = self._tokens.decode(token)
        user = self._users.get_by_id(user_id)
        if not user or not user.is_active:
            logger.warning("token for missing or inactive user %s", user_id)
            raise InvalidToken()
        return user


def _password_matches(password_hash: str, password: str) -> bool:
    try:
        return check_password_hash(password_hash, password)
    except ValueError:
        # e.g. placeholder hashes like 'CHANGE_ME' or corrupted values
        return False


class UserService:
    """Use cases: profile read/update, account activation (admin)."""

    def __init__(self, users: UserRepository):
        self._users = users

    def get_profile(self, user_id: int) -> User:
        user = self._users.get_by_id(user_id)
        if not user:
            raise NotFoundError("User not found")
        return user

    def update_profile(
        self,
        user_id: int,
        *,
        name: Optional[str] = None,
        email: Optional[str] = None,
        department: Optional[str] = None,
    ) -> User:
        user = self.get_profile(user_id)

        if email:
            email = email.lower()
            if email != user.email:
                other = self._users.get_by_email(email)
                if other and other.user_id != user.user_id:
                    raise EmailTaken("Email is already used by another user")

        try:
            self._users.update_profile(
                user.user_id,
                name=name or user.name,
                email=email or user.email,
                department=department or user.department,
            )
        except DuplicateRecordError:
            raise EmailTaken("Email is already used by another user")

        return self.get_profile(user.user_id)

    def set_active(self, *, actor: User, employee_id: str, is_active: bool) -> User:
        if not actor.is_admin:
            raise AuthorizationError()

        target = self._users.get_by_employee_id(employee_id)
        if not target:
            raise NotFoundError("User not found")
        if target.user_id == actor.user_id and not is_active:
            raise ValidationError("You cannot deactivate your own account")

        self._users.set_active(target.user_id, is_active=is_active)
        logger.info("%s set %s active=%s", actor.employee_id, target.employee_id, is_active)
        return self.get_profile(target.user_id)
