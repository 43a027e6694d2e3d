from __future__ import annotations

from dataclasses import dataclass
from datetime import date, time
from typing import Optional

from ..core.enums import DayOfWeek


@dataclass(frozen=True)
class TimeSlot:
    """Weekly-recurring class."""

    id: str
    day: DayOfWeek
    start_time: time
    end_time: time
    subject_id: str


@dataclass(frozen=True)
class OneOffSlot:
    """Single-occurrence class, either added ad hoc or created by a reschedule.

    `original_slot_id`/`original_date` are only set for reschedules and point
    at the postponed recurring occurrence.
    """

    id: str
    date: date
    start_time: time
    end_time: time
    subject_id: str
    original_slot_id: Optional[str] = None
    original_date: Optional[date] = None

    @property
    def is_rescheduled(self) -> bool:
        return self.original_slot_id is not None and self.original_date is not None


@dataclass(frozen=True)
class ScheduledClass:
    """Read-model: one class occurrence on a specific date."""

    slot_id: str
    subject_id: str
    start_time: time
    end_time: time
    is_one_off: bool


@dataclass(frozen=True)
class RawExtractedSlot:
    """Timetable block as returned by image extraction (no end time yet)."""

    day: DayOfWeek
    start_time: time
    subject_name: str


@dataclass(frozen=True)
class ExtractedSlot:
    day: DayOfWeek
    start_time: time
    end_time: time
    subject_name: str
