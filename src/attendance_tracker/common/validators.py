from __future__ import annotations

import re
from typing import Any, Mapping, Optional

from ..core.exceptions import ValidationError
from .datetime_utils import date_key, parse_iso_date

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def require_object(payload: Any) -> Mapping[str, Any]:
    """Request bodies must be JSON objects; a missing body reads as empty."""
    if payload is None:
        return {}
    if not isinstance(payload, Mapping):
        raise ValidationError("Request body must be a JSON object")
    return payload


def require_non_empty(value: Any, field_name: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def optional_str(value: Any, field_name: str, *, max_len: Optional[int] = None) -> Optional[str]:
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValidationError(f"{field_name} must be a string")
    value = value.strip()
    if max_len is not None and len(value) > max_len:
        raise ValidationError(f"{field_name} must be at most {max_len} characters")
    return value or None


def require_min_length(value: Any, field_name: str, min_len: int) -> str:
    if not isinstance(value, str) or len(value) < min_len:
        raise ValidationError(f"{field_name} must be at least {min_len} characters")
    return value


def require_email(value: Any, field_name: str = "Email") -> str:
    value = require_non_empty(value, field_name).lower()
    if not _EMAIL_RE.match(value):
        raise ValidationError(f"{field_name} is not a valid email address")
    return value


def require_date_key(value: Any, field_name: str) -> str:
    """Validate a YYYY-MM-DD string and return it zero-padded (2025-1-5 -> 2025-01-05)."""
    value = require_non_empty(value, field_name)
    try:
        return date_key(parse_iso_date(value))
    except ValueError:
        raise ValidationError(f"{field_name} must be a YYYY-MM-DD date")


def int_or_default(value: Any, default: int, *, minimum: int = 1, maximum: Optional[int] = None) -> int:
    """Lenient integer parsing for query-string paging parameters."""
    try:
        parsed = int(value)
    except (TypeError, ValueError):
        return default
    if parsed < minimum:
        return default
    if maximum is not None and parsed > maximum:
        return maximum
    return parsed


def require_month_year(month: Any, year: Any) -> tuple[int, int]:
    try:
        m = int(month)
        y = int(year)
    except (TypeError, ValueError):
        raise ValidationError("Month and year are required")
    if not 1 <= m <= 12:
        raise ValidationError("Month must be between 1 and 12")
    if not 1 <= y <= 9999:
        raise ValidationError("Year must be a four-digit number")
    return m, y
