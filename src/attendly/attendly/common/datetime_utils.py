from __future__ import annotations

from datetime import date, datetime, time, timedelta
from typing import Optional

from ..core.enums import DayOfWeek

_WEEKDAY_CODES = {
    0: DayOfWeek.MON,
    1: DayOfWeek.TUE,
    2: DayOfWeek.WED,
    3: DayOfWeek.THU,
    4: DayOfWeek.FRI,
    5: DayOfWeek.SAT,
}

WEEKDAY_NAMES = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def format_iso_date(value: date) -> str:
    return value.strftime("%Y-%m-%d")


def parse_hhmm(value: str) -> time:
    """Parse a 24-hour HH:MM string (single-digit hours accepted)."""
    return datetime.strptime(value.strip(), "%H:%M").time()


def format_hhmm(value: time) -> str:
    return value.strftime("%H:%M")


def add_minutes(value: time, minutes: int) -> time:
    """Shift a wall-clock time, wrapping past midnight."""
    return (datetime.combine(date.min, value) + timedelta(minutes=minutes)).time()


def minutes_between(start: time, end: time) -> int:
    return (end.hour * 60 + end.minute) - (start.hour * 60 + start.minute)


def is_sunday(day: date) -> bool:
    return day.weekday() == 6


def weekday_code(day: date) -> Optional[DayOfWeek]:
    """Timetable day for a date, or None on Sunday."""
    return _WEEKDAY_CODES.get(day.weekday())


def weekday_name(day: date) -> str:
    return WEEKDAY_NAMES[day.weekday()]


def today_local() -> date:
    """Current local date.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now().date()
