from __future__ import annotations

from dataclasses import replace
from datetime import date
from typing import Iterable, Optional

from ..store.state import AppState
from ..subjects.model import HistoricalRecord


def set_min_attendance_percentage(state: AppState, percentage: float) -> AppState:
    return replace(state, min_attendance_percentage=percentage)


def add_holiday(state: AppState, day: date) -> AppState:
    if day in state.holidays:
        return state
    return replace(state, holidays=state.holidays | {day})


def remove_holiday(state: AppState, day: date) -> AppState:
    if day not in state.holidays:
        return state
    return replace(state, holidays=state.holidays - {day})


def save_historical_data(
    state: AppState,
    tracking_start_date: date,
    records: Iterable[HistoricalRecord],
) -> AppState:
    """Replace the historical baseline and the date daily tracking starts at."""

    known = {s.id for s in state.subjects}
    kept = tuple(r for r in records if r.subject_id in known)
    return replace(state, tracking_start_date=tracking_start_date, historical_data=kept)


def clear_historical_data(state: AppState) -> AppState:
    return replace(state, tracking_start_date=None, historical_data=())


def set_user_name(state: AppState, name: Optional[str]) -> AppState:
    return replace(state, user_name=(name or "").strip() or None)
