from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Mapping, Optional, Union

from ..attendance.model import AttendanceKey, AttendanceRecord
from ..core.constants import DEFAULT_MIN_ATTENDANCE_PERCENTAGE
from ..subjects.model import HistoricalRecord, Subject
from ..timetable.model import OneOffSlot, TimeSlot

AnySlot = Union[TimeSlot, OneOffSlot]


@dataclass(frozen=True)
class AppState:
    """Whole-application snapshot.

    Every transition builds a new AppState; nothing mutates an existing one.
    `attendance` is keyed by (date, slot_id) so a second record for the same
    occurrence cannot exist.
    """

    subjects: tuple[Subject, ...] = ()
    timetable: tuple[TimeSlot, ...] = ()
    one_off_slots: tuple[OneOffSlot, ...] = ()
    attendance: Mapping[AttendanceKey, AttendanceRecord] = field(default_factory=dict)
    holidays: frozenset[date] = frozenset()
    min_attendance_percentage: float = DEFAULT_MIN_ATTENDANCE_PERCENTAGE
    historical_data: tuple[HistoricalRecord, ...] = ()
    tracking_start_date: Optional[date] = None
    user_name: Optional[str] = None

    def subject_by_id(self, subject_id: str) -> Optional[Subject]:
        return next((s for s in self.subjects if s.id == subject_id), None)

    def time_slot_by_id(self, slot_id: str) -> Optional[TimeSlot]:
        return next((s for s in self.timetable if s.id == slot_id), None)

    def one_off_by_id(self, slot_id: str) -> Optional[OneOffSlot]:
        return next((s for s in self.one_off_slots if s.id == slot_id), None)

    def slot_by_id(self, slot_id: str) -> Optional[AnySlot]:
        return self.time_slot_by_id(slot_id) or self.one_off_by_id(slot_id)

    def subject_for_slot(self, slot_id: str) -> Optional[Subject]:
        slot = self.slot_by_id(slot_id)
        return self.subject_by_id(slot.subject_id) if slot else None

    def record_for(self, day: date, slot_id: str) -> Optional[AttendanceRecord]:
        return self.attendance.get(AttendanceKey(day, slot_id))

    def records_on(self, day: date) -> list[AttendanceRecord]:
        return [r for r in self.attendance.values() if r.date == day]

    def is_before_tracking(self, day: date) -> bool:
        return self.tracking_start_date is not None and day < self.tracking_start_date
