from __future__ import annotations

from datetime import date
from typing import Iterable

from ..common.datetime_utils import format_hhmm
from ..common.validators import require_date, require_day, require_time, require_time_range
from ..core.exceptions import ValidationError
from ..store.store import Store
from . import reducers
from .model import ExtractedSlot, OneOffSlot, TimeSlot
from .resolver import get_schedule_for_date


class TimetableService:
    def __init__(self, store: Store):
        self._store = store

    def _require_subject(self, subject_id: str) -> None:
        if self._store.state.subject_by_id(subject_id) is None:
            raise ValidationError("Subject not found")

    def _times(self, start_time, end_time):
        start = require_time(start_time, "Start time")
        end = require_time(end_time, "End time")
        require_time_range(start, end)
        return start, end

    def list_slots(self) -> list[TimeSlot]:
        order = {d: i for i, d in enumerate(["Mon", "Tue", "Wed", "Thu", "Fri", "Sat"])}
        return sorted(self._store.state.timetable, key=lambda s: (order.get(s.day.value, 99), s.start_time))

    def add_slot(self, *, day: str, start_time, end_time, subject_id: str) -> TimeSlot:
        self._require_subject(subject_id)
        start, end = self._times(start_time, end_time)
        slot = TimeSlot(id=self._store.new_id(), day=require_day(day), start_time=start, end_time=end, subject_id=subject_id)
        self._store.apply(reducers.add_time_slot, slot)
        return slot

    def update_slot(self, *, slot_id: str, day: str, start_time, end_time, subject_id: str) -> TimeSlot:
        if self._store.state.time_slot_by_id(slot_id) is None:
            raise ValidationError("Timetable slot not found")
        self._require_subject(subject_id)
        start, end = self._times(start_time, end_time)
        slot = TimeSlot(id=slot_id, day=require_day(day), start_time=start, end_time=end, subject_id=subject_id)
        self._store.apply(reducers.update_time_slot, slot)
        return slot

    def delete_slot(self, *, slot_id: str) -> None:
        if self._store.state.time_slot_by_id(slot_id) is None:
            raise ValidationError("Timetable slot not found")
        self._store.apply(reducers.delete_time_slot, slot_id)

    def clear(self) -> None:
        self._store.apply(reducers.clear_timetable)

    def add_one_off(self, *, on_date, start_time, end_time, subject_id: str) -> OneOffSlot:
        self._require_subject(subject_id)
        start, end = self._times(start_time, end_time)
        slot = OneOffSlot(
            id=self._store.new_id(),
            date=require_date(on_date),
            start_time=start,
            end_time=end,
            subject_id=subject_id,
        )
        self._store.apply(reducers.add_one_off_slot, slot)
        return slot

    def import_extracted(self, slots: Iterable[ExtractedSlot]) -> int:
        """Import reviewed extraction results; returns how many slots were added."""
        before = len(self._store.state.timetable)
        self._store.apply(reducers.import_timetable, list(slots), self._store.new_id)
        return len(self._store.state.timetable) - before

    def schedule_for(self, day: date) -> list[dict]:
        state = self._store.state
        rows = []
        for occurrence in get_schedule_for_date(state, day):
            subject = state.subject_by_id(occurrence.subject_id)
            record = state.record_for(day, occurrence.slot_id)
            rows.append(
                {
                    "slot_id": occurrence.slot_id,
                    "subject_id": occurrence.subject_id,
                    "subject_name": subject.name if subject else "Unknown",
                    "subject_type": subject.type.value if subject else None,
                    "start_time": format_hhmm(occurrence.start_time),
                    "end_time": format_hhmm(occurrence.end_time),
                    "is_one_off": occurrence.is_one_off,
                    "status": record.status.value if record else None,
                }
            )
        return rows
