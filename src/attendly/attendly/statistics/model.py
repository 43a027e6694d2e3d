from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..core.enums import DayStatus, ProjectionKind


@dataclass(frozen=True)
class SafeToMiss:
    """Credit-weighted projection against the minimum attendance threshold.

    `credits` is None for the UNBOUNDED and NOT_ACHIEVABLE sentinels.
    """

    kind: ProjectionKind
    credits: Optional[int] = None

    def describe(self) -> str:
        if self.kind == ProjectionKind.UNBOUNDED:
            return "No minimum set, every class can be missed"
        if self.kind == ProjectionKind.NOT_ACHIEVABLE:
            return "Not achievable: a 100% target cannot be recovered after a miss"
        unit = "credit" if self.credits == 1 else "credits"
        if self.kind == ProjectionKind.MUST_ATTEND:
            return f"Attend {self.credits} more {unit} to reach the minimum"
        return f"You can miss {self.credits} more {unit}"


@dataclass(frozen=True)
class AttendanceStats:
    attended_credits: int
    conducted_credits: int
    cancelled_count: int
    attendance_percentage: float
    safe_to_miss: SafeToMiss


@dataclass(frozen=True)
class SubjectStats:
    subject_id: str
    attended_classes: int
    conducted_classes: int
    percentage: float


@dataclass(frozen=True)
class CalendarDay:
    date: date
    status: DayStatus
    details: str


@dataclass(frozen=True)
class ClassInfo:
    subject_name: str
    day: str


@dataclass(frozen=True)
class WeeklySummary:
    """Input of the weekly debrief; the percentage is final and must be echoed."""

    week_start: date
    week_end: date
    attended_classes: tuple[ClassInfo, ...]
    missed_classes: tuple[ClassInfo, ...]
    cancelled_classes: tuple[ClassInfo, ...]
    attendance_percentage: float
    user_name: Optional[str] = None
