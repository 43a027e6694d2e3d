from __future__ import annotations

from enum import Enum


class SubjectType(str, Enum):
    LECTURE = "Lecture"
    LAB = "Lab"


class DayOfWeek(str, Enum):
    """Weekdays a recurring class may be scheduled on (Sunday is never a class day)."""

    MON = "Mon"
    TUE = "Tue"
    WED = "Wed"
    THU = "Thu"
    FRI = "Fri"
    SAT = "Sat"


class AttendanceStatus(str, Enum):
    """Status of one class occurrence stored in the ledger."""

    ATTENDED = "Attended"
    ABSENT = "Absent"
    CANCELLED = "Cancelled"
    POSTPONED = "Postponed"


class ProjectionKind(str, Enum):
    """Outcome of the safe-to-miss projection."""

    CAN_MISS = "can_miss"
    MUST_ATTEND = "must_attend"
    UNBOUNDED = "unbounded"
    NOT_ACHIEVABLE = "not_achievable"


class DayStatus(str, Enum):
    """Calendar colouring of a single date."""

    HOLIDAY = "holiday"
    WEEKEND = "weekend"
    NO_CLASS = "no-class"
    NO_DATA = "no-data"
    ATTENDED = "attended"
    ABSENT = "absent"
    MIXED = "mixed"
    CANCELLED = "cancelled"


class SyncStatus(str, Enum):
    """State of the persistence collaborator, never of the core."""

    IDLE = "idle"
    SYNCING = "syncing"
    SYNCED = "synced"
    OFFLINE = "offline"
    ERROR = "error"
