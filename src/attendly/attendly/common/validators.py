from __future__ import annotations

from datetime import date, time
from typing import Any, Optional

from ..core.enums import AttendanceStatus, DayOfWeek, SubjectType
from ..core.exceptions import ValidationError
from .datetime_utils import parse_hhmm, parse_iso_date


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not str(value).strip():
        raise ValidationError(f"{field_name} is required")
    return str(value).strip()


def _whole_number(value: Any, field_name: str) -> int:
    if isinstance(value, bool) or isinstance(value, float) and not value.is_integer():
        raise ValidationError(f"{field_name} must be a whole number")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be a whole number")


def require_positive_int(value: Any, field_name: str) -> int:
    number = _whole_number(value, field_name)
    if number <= 0:
        raise ValidationError(f"{field_name} must be a positive whole number")
    return number


def require_non_negative_int(value: Any, field_name: str) -> int:
    number = _whole_number(value, field_name)
    if number < 0:
        raise ValidationError(f"{field_name} must be 0 or more")
    return number


def require_percentage(value: Any, field_name: str = "Minimum attendance") -> float:
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be a number")
    if not 0 <= number <= 100:
        raise ValidationError(f"{field_name} must be between 0 and 100")
    return number


def require_date(value: Any, field_name: str = "Date") -> date:
    if isinstance(value, date):
        return value
    try:
        return parse_iso_date(str(value or "").strip())
    except ValueError:
        raise ValidationError(f"{field_name} must be a YYYY-MM-DD date")


def require_time(value: Any, field_name: str) -> time:
    if isinstance(value, time):
        return value
    try:
        return parse_hhmm(str(value or ""))
    except ValueError:
        raise ValidationError(f"{field_name} must be a HH:MM time")


def require_time_range(start: time, end: time) -> None:
    if not start < end:
        raise ValidationError("Start time must be before end time")


def require_day(value: Any) -> DayOfWeek:
    try:
        return DayOfWeek(value)
    except ValueError:
        raise ValidationError("Day must be one of Mon, Tue, Wed, Thu, Fri, Sat")


def require_subject_type(value: Any) -> SubjectType:
    try:
        return SubjectType(value)
    except ValueError:
        raise ValidationError("Subject type must be Lecture or Lab")


def require_status(value: Any) -> AttendanceStatus:
    try:
        return AttendanceStatus(value)
    except ValueError:
        raise ValidationError("Status must be Attended, Absent, Cancelled or Postponed")


def require_manual_status(value: Any) -> AttendanceStatus:
    """Postponed is set by rescheduling, never logged by hand."""
    status = require_status(value)
    if status == AttendanceStatus.POSTPONED:
        raise ValidationError("Status must be Attended, Absent or Cancelled")
    return status


def require_date_range(start: Optional[date], end: Optional[date], max_days: int) -> None:
    """Both ends or neither; start not after end; at most `max_days` days inclusive."""
    if (start is None) != (end is None):
        raise ValidationError("Provide both start and end dates, or neither")
    if start is None:
        return
    if start > end:
        raise ValidationError("Start date must not be after end date")
    if (end - start).days + 1 > max_days:
        raise ValidationError(f"Date range cannot be longer than {max_days} days")
