"""Request contracts for the auth endpoints and the public user shape."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional

from ..common.validators import optional_str, require_email, require_min_length, require_non_empty, require_object
from ..core.constants import MIN_PASSWORD_LENGTH
from ..core.exceptions import ValidationError
from .model import User


@dataclass(frozen=True)
class RegisterRequest:
    name: str
    email: str
    password: str
    department: str

    @classmethod
    def from_payload(cls, payload: Any) -> "RegisterRequest":
        payload = require_object(payload)
        if not all(payload.get(k) for k in ("name", "email", "password", "department")):
            raise ValidationError("All fields are required")
        return cls(
            name=require_non_empty(payload.get("name"), "Name"),
            email=require_email(payload.get("email")),
            password=require_min_length(payload.get("password"), "Password", MIN_PASSWORD_LENGTH),
            department=require_non_empty(payload.get("department"), "Department"),
        )


@dataclass(frozen=True)
class LoginRequest:
    email: str
    password: str

    @classmethod
    def from_payload(cls, payload: Any) -> "LoginRequest":
        payload = require_object(payload)
        email = payload.get("email")
        password = payload.get("password")
        if not email or not password or not isinstance(email, str) or not isinstance(password, str):
            raise ValidationError("Email and password are required")
        return cls(email=email.strip().lower(), password=password)


@dataclass(frozen=True)
class ProfileUpdateRequest:
    name: Optional[str] = None
    email: Optional[str] = None
    department: Optional[str] = None

    @classmethod
    def from_payload(cls, payload: Any) -> "ProfileUpdateRequest":
        payload = require_object(payload)
        email = payload.get("email")
        return cls(
            name=optional_str(payload.get("name"), "Name", max_len=100),
            email=require_email(email) if email else None,
            department=optional_str(payload.get("department"), "Department", max_len=100),
        )


@dataclass(frozen=True)
class ActiveToggleRequest:
    active: bool

    @classmethod
    def from_payload(cls, payload: Any) -> "ActiveToggleRequest":
        payload = require_object(payload)
        active = payload.get("active")
        if not isinstance(active, bool):
            raise ValidationError("active must be true or false")
        return cls(active=active)


def user_to_dict(user: User, *, with_activity: bool = False) -> dict:
    """Public user shape; never includes the password hash."""
    out = {
        "id": user.user_id,
        "employeeId": user.employee_id,
        "name": user.name,
        "email": user.email,
        "role": user.role.value,
        "department": user.department,
    }
    if with_activity:
        out["isActive"] = user.is_active
        out["lastLogin"] = user.last_login.isoformat() if user.last_login else None
        out["createdAt"] = user.created_at.isoformat() if user.created_at else None
    return out
