"""Request contracts for the attendance endpoints and the record JSON shape."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional

from ..common.validators import int_or_default, optional_str, require_date_key, require_non_empty, require_object
from ..core.constants import DEFAULT_PAGE, DEFAULT_PAGE_LIMIT, MAX_NOTES_LENGTH, MAX_PAGE_LIMIT
from ..core.exceptions import ValidationError
from .model import AttendanceRecord, Location, Page


def _optional_number(value: Any, field_name: str) -> Optional[float]:
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValidationError(f"{field_name} must be a number")
    return float(value)


def parse_location(value: Any) -> Optional[Location]:
    if value is None:
        return None
    if not isinstance(value, Mapping):
        raise ValidationError("location must be an object")
    return Location(
        latitude=_optional_number(value.get("latitude"), "location.latitude"),
        longitude=_optional_number(value.get("longitude"), "location.longitude"),
        address=optional_str(value.get("address"), "location.address", max_len=255),
    )


@dataclass(frozen=True)
class CheckInRequest:
    employee_id: str
    employee_name: str
    image: Optional[str] = None
    notes: Optional[str] = None
    location: Optional[Location] = None

    @classmethod
    def from_payload(cls, payload: Any) -> "CheckInRequest":
        payload = require_object(payload)
        if not payload.get("employeeId") or not payload.get("employeeName"):
            raise ValidationError("Employee ID and name are required")
        return cls(
            employee_id=require_non_empty(payload.get("employeeId"), "Employee ID"),
            employee_name=require_non_empty(payload.get("employeeName"), "Employee name"),
            image=optional_str(payload.get("checkInImage"), "checkInImage"),
            notes=optional_str(payload.get("notes"), "notes", max_len=MAX_NOTES_LENGTH),
            location=parse_location(payload.get("location")),
        )


@dataclass(frozen=True)
class CheckOutRequest:
    employee_id: str
    image: Optional[str] = None

    @classmethod
    def from_payload(cls, payload: Any) -> "CheckOutRequest":
        payload = require_object(payload)
        if not payload.get("employeeId"):
            raise ValidationError("Employee ID is required")
        return cls(
            employee_id=require_non_empty(payload.get("employeeId"), "Employee ID"),
            image=optional_str(payload.get("checkOutImage"), "checkOutImage"),
        )


@dataclass(frozen=True)
class DateRangeQuery:
    start_date: str
    end_date: str

    @classmethod
    def from_args(cls, args: Mapping[str, Any]) -> "DateRangeQuery":
        if not args.get("startDate") or not args.get("endDate"):
            raise ValidationError("Start date and end date are required")
        return cls(
            start_date=require_date_key(args.get("startDate"), "startDate"),
            end_date=require_date_key(args.get("endDate"), "endDate"),
        )

    @classmethod
    def optional_from_args(cls, args: Mapping[str, Any]) -> Optional["DateRangeQuery"]:
        """Both bounds or nothing; a lone bound is ignored."""
        if args.get("startDate") and args.get("endDate"):
            return cls.from_args(args)
        return None


@dataclass(frozen=True)
class PageQuery:
    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_PAGE_LIMIT

    @classmethod
    def from_args(cls, args: Mapping[str, Any]) -> "PageQuery":
        return cls(
            page=int_or_default(args.get("page"), DEFAULT_PAGE),
            limit=int_or_default(args.get("limit"), DEFAULT_PAGE_LIMIT, maximum=MAX_PAGE_LIMIT),
        )


def _iso(value) -> Optional[str]:
    return value.isoformat() if value else None


def record_to_dict(r: AttendanceRecord) -> dict:
    location = None
    if r.location:
        location = {
            "latitude": r.location.latitude,
            "longitude": r.location.longitude,
            "address": r.location.address,
        }
    return {
        "id": r.attendance_id,
        "employeeId": r.employee_id,
        "employeeName": r.employee_name,
        "date": r.date,
        "checkInTime": _iso(r.check_in_time),
        "checkOutTime": _iso(r.check_out_time),
        "workingHours": r.working_hours,
        "workingDuration": r.working_duration,
        "status": r.status.value,
        "checkInImage": r.check_in_image,
        "checkOutImage": r.check_out_image,
        "notes": r.notes,
        "location": location,
        "createdAt": _iso(r.created_at),
        "updatedAt": _iso(r.updated_at),
    }


def pagination_to_dict(page: Page) -> dict:
    return {"page": page.page, "limit": page.limit, "total": page.total, "pages": page.pages}
