from __future__ import annotations

from datetime import date
from typing import Callable, Optional

from ..common.datetime_utils import format_iso_date, today_local
from ..common.validators import require_date_range
from ..core.constants import MAX_CALENDAR_DAYS
from ..store.store import Store
from .calendar_view import build_calendar
from .engine import compute_stats, compute_subject_stats
from .model import WeeklySummary
from .weekly import build_weekly_summary


class StatisticsService:
    def __init__(self, store: Store, *, today: Callable[[], date] = today_local):
        self._store = store
        self._today = today

    def overview(self) -> dict:
        stats = compute_stats(self._store.state)
        return {
            "attended_credits": stats.attended_credits,
            "conducted_credits": stats.conducted_credits,
            "cancelled_count": stats.cancelled_count,
            "attendance_percentage": round(stats.attendance_percentage, 2),
            "min_attendance_percentage": self._store.state.min_attendance_percentage,
            "safe_to_miss": {
                "kind": stats.safe_to_miss.kind.value,
                "credits": stats.safe_to_miss.credits,
                "message": stats.safe_to_miss.describe(),
            },
        }

    def by_subject(self) -> list[dict]:
        state = self._store.state
        rows = []
        for subject_id, s in compute_subject_stats(state).items():
            subject = state.subject_by_id(subject_id)
            rows.append(
                {
                    "subject_id": subject_id,
                    "name": subject.name,
                    "attended_classes": s.attended_classes,
                    "conducted_classes": s.conducted_classes,
                    "percentage": round(s.percentage, 2),
                }
            )
        rows.sort(key=lambda r: r["name"].lower())
        return rows

    def calendar(self, *, start: Optional[date] = None, end: Optional[date] = None) -> dict[str, list[dict]]:
        require_date_range(start, end, MAX_CALENDAR_DAYS)
        months = build_calendar(self._store.state, today=self._today(), start=start, end=end)
        return {
            month: [{"date": format_iso_date(d.date), "status": d.status.value, "details": d.details} for d in days]
            for month, days in months.items()
        }

    def weekly_summary(self) -> Optional[WeeklySummary]:
        return build_weekly_summary(self._store.state, self._today())
