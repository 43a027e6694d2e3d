from __future__ import annotations

import calendar
from datetime import date, timedelta
from typing import Optional

from ..common.datetime_utils import is_sunday
from ..core.enums import AttendanceStatus, DayStatus
from ..store.state import AppState
from ..timetable.resolver import get_schedule_for_date
from .model import CalendarDay


def day_status(state: AppState, day: date) -> CalendarDay:
    """Colour of one calendar cell plus a per-class breakdown."""

    if day in state.holidays:
        return CalendarDay(day, DayStatus.HOLIDAY, "Holiday")
    if is_sunday(day):
        return CalendarDay(day, DayStatus.WEEKEND, "Sunday")

    if not get_schedule_for_date(state, day):
        return CalendarDay(day, DayStatus.NO_CLASS, "No classes scheduled")

    records = sorted(state.records_on(day), key=lambda r: r.slot_id)
    if not records:
        return CalendarDay(day, DayStatus.NO_DATA, "No attendance logged")

    lines = []
    for record in records:
        subject = state.subject_for_slot(record.slot_id)
        lines.append(f"{subject.name if subject else 'Unknown'}: {record.status.value}")
    details = "\n".join(lines)

    statuses = [r.status for r in records]
    attended = AttendanceStatus.ATTENDED in statuses
    absent = AttendanceStatus.ABSENT in statuses

    if attended and absent:
        return CalendarDay(day, DayStatus.MIXED, details)
    if absent:
        return CalendarDay(day, DayStatus.ABSENT, details)
    if attended:
        return CalendarDay(day, DayStatus.ATTENDED, details)
    if AttendanceStatus.CANCELLED in statuses:
        return CalendarDay(day, DayStatus.CANCELLED, details)
    return CalendarDay(day, DayStatus.NO_DATA, "Status pending")


def default_range(state: AppState, today: date) -> tuple[date, date]:
    """Whole months from the first tracked date to the last logged one."""

    logged = [r.date for r in state.attendance.values()]
    starts = logged + ([state.tracking_start_date] if state.tracking_start_date else [])
    start = min(starts) if starts else today
    end = max(logged) if logged else start

    first = start.replace(day=1)
    last = end.replace(day=calendar.monthrange(end.year, end.month)[1])
    return first, last


def build_calendar(
    state: AppState,
    *,
    today: date,
    start: Optional[date] = None,
    end: Optional[date] = None,
) -> dict[str, list[CalendarDay]]:
    """Day statuses grouped by month ("YYYY-MM"), months in order."""

    if start is None or end is None:
        start, end = default_range(state, today)

    months: dict[str, list[CalendarDay]] = {}
    day = start
    while day <= end:
        months.setdefault(day.strftime("%Y-%m"), []).append(day_status(state, day))
        day += timedelta(days=1)
    return months
