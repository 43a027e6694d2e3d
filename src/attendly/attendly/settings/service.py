from __future__ import annotations

from typing import Iterable, Optional

from ..common.datetime_utils import format_iso_date
from ..common.validators import require_date, require_non_negative_int, require_percentage
from ..core.exceptions import ValidationError
from ..store.store import Store
from ..subjects.model import HistoricalRecord
from . import reducers


class SettingsService:
    def __init__(self, store: Store):
        self._store = store

    def view(self) -> dict:
        state = self._store.state
        return {
            "min_attendance_percentage": state.min_attendance_percentage,
            "tracking_start_date": format_iso_date(state.tracking_start_date) if state.tracking_start_date else None,
            "user_name": state.user_name,
            "holidays": [format_iso_date(d) for d in sorted(state.holidays)],
            "historical_data": [
                {"subject_id": h.subject_id, "conducted": h.conducted, "attended": h.attended}
                for h in state.historical_data
            ],
        }

    def set_min_attendance(self, percentage) -> None:
        self._store.apply(reducers.set_min_attendance_percentage, require_percentage(percentage))

    def add_holiday(self, on_date) -> None:
        self._store.apply(reducers.add_holiday, require_date(on_date))

    def remove_holiday(self, on_date) -> None:
        self._store.apply(reducers.remove_holiday, require_date(on_date))

    def set_user_name(self, name: Optional[str]) -> None:
        self._store.apply(reducers.set_user_name, name)

    def save_historical_data(self, *, start_date, rows: Iterable[dict]) -> None:
        """Store the official baseline; daily tracking starts at `start_date`."""

        state = self._store.state
        records = []
        seen = set()
        for row in rows:
            subject_id = str(row.get("subject_id") or "")
            if state.subject_by_id(subject_id) is None:
                raise ValidationError("Subject not found")
            if subject_id in seen:
                raise ValidationError("Each subject may appear only once")
            seen.add(subject_id)

            conducted = require_non_negative_int(row.get("conducted"), "Conducted classes")
            attended = require_non_negative_int(row.get("attended"), "Attended classes")
            if attended > conducted:
                raise ValidationError("Attended classes cannot be more than conducted classes")
            records.append(HistoricalRecord(subject_id=subject_id, conducted=conducted, attended=attended))

        self._store.apply(reducers.save_historical_data, require_date(start_date, "Start date"), records)

    def clear_historical_data(self) -> None:
        self._store.apply(reducers.clear_historical_data)
