from __future__ import annotations

from datetime import date, timedelta
from typing import Optional

from ..common.datetime_utils import weekday_name
from ..core.constants import WEEKLY_SUMMARY_DAYS
from ..core.enums import AttendanceStatus
from ..store.state import AppState
from .model import ClassInfo, WeeklySummary


def build_weekly_summary(state: AppState, today: date) -> Optional[WeeklySummary]:
    """Attendance of the seven days ending `today`, or None if nothing to report."""

    week_start = today - timedelta(days=WEEKLY_SUMMARY_DAYS - 1)
    records = sorted(
        (r for r in state.attendance.values() if week_start <= r.date <= today),
        key=lambda r: (r.date, r.slot_id),
    )

    buckets: dict[AttendanceStatus, list[ClassInfo]] = {
        AttendanceStatus.ATTENDED: [],
        AttendanceStatus.ABSENT: [],
        AttendanceStatus.CANCELLED: [],
    }
    for record in records:
        if record.status not in buckets:
            continue
        subject = state.subject_for_slot(record.slot_id)
        if subject is None:
            continue
        buckets[record.status].append(ClassInfo(subject_name=subject.name, day=weekday_name(record.date)))

    attended = buckets[AttendanceStatus.ATTENDED]
    missed = buckets[AttendanceStatus.ABSENT]
    if not attended and not missed:
        return None

    percentage = round(len(attended) / (len(attended) + len(missed)) * 100, 1)
    return WeeklySummary(
        week_start=week_start,
        week_end=today,
        attended_classes=tuple(attended),
        missed_classes=tuple(missed),
        cancelled_classes=tuple(buckets[AttendanceStatus.CANCELLED]),
        attendance_percentage=percentage,
        user_name=state.user_name,
    )
