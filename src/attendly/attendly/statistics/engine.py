from __future__ import annotations

import math
from fractions import Fraction
from typing import Iterator

from ..attendance.model import AttendanceRecord
from ..core.enums import AttendanceStatus, ProjectionKind
from ..store.state import AppState
from ..timetable.resolver import is_non_counting_day
from .model import AttendanceStats, SafeToMiss, SubjectStats

_CONDUCTED = (AttendanceStatus.ATTENDED, AttendanceStatus.ABSENT)


def counted_records(state: AppState) -> Iterator[AttendanceRecord]:
    """Daily records that belong to the tracked window.

    Records before the tracking start date are covered by historical data;
    Sundays and holidays never count.
    """

    for record in state.attendance.values():
        if state.is_before_tracking(record.date):
            continue
        if is_non_counting_day(state, record.date):
            continue
        yield record


def _percentage(attended: int, conducted: int) -> float:
    if conducted <= 0:
        return 100.0
    return attended / conducted * 100


def project_safe_to_miss(attended: int, conducted: int, min_percentage: float) -> SafeToMiss:
    """How many credits may still be missed, or must still be attended.

    With r = m/100: below the threshold the answer is the smallest x with
    (a + x)/(c + x) >= r; otherwise the largest y with a/(c + y) >= r.
    Exact rationals keep ceil/floor off float noise.
    """

    r = Fraction(str(min_percentage)) / 100
    a = Fraction(attended)
    c = Fraction(conducted)

    below = c > 0 and a < r * c
    if below:
        if r >= 1:
            return SafeToMiss(ProjectionKind.NOT_ACHIEVABLE)
        needed = math.ceil((r * c - a) / (1 - r))
        return SafeToMiss(ProjectionKind.MUST_ATTEND, max(needed, 0))

    if r <= 0:
        return SafeToMiss(ProjectionKind.UNBOUNDED)
    spare = math.floor((a - r * c) / r)
    return SafeToMiss(ProjectionKind.CAN_MISS, max(spare, 0))


def compute_stats(state: AppState) -> AttendanceStats:
    attended = 0
    conducted = 0

    for historical in state.historical_data:
        subject = state.subject_by_id(historical.subject_id)
        if subject is None:
            continue
        conducted += historical.conducted * subject.credits
        attended += historical.attended * subject.credits

    cancelled = 0
    for record in counted_records(state):
        if record.status == AttendanceStatus.CANCELLED:
            cancelled += 1
        elif record.status in _CONDUCTED:
            conducted += record.credits
            if record.status == AttendanceStatus.ATTENDED:
                attended += record.credits

    return AttendanceStats(
        attended_credits=attended,
        conducted_credits=conducted,
        cancelled_count=cancelled,
        attendance_percentage=_percentage(attended, conducted),
        safe_to_miss=project_safe_to_miss(attended, conducted, state.min_attendance_percentage),
    )


def compute_subject_stats(state: AppState) -> dict[str, SubjectStats]:
    """Per-subject class counts (not credits), historical baseline included."""

    totals = {s.id: [0, 0] for s in state.subjects}
    for historical in state.historical_data:
        if historical.subject_id in totals:
            totals[historical.subject_id][0] += historical.attended
            totals[historical.subject_id][1] += historical.conducted

    for record in counted_records(state):
        if record.status not in _CONDUCTED:
            continue
        subject = state.subject_for_slot(record.slot_id)
        if subject is None:
            continue
        totals[subject.id][1] += 1
        if record.status == AttendanceStatus.ATTENDED:
            totals[subject.id][0] += 1

    return {
        subject_id: SubjectStats(
            subject_id=subject_id,
            attended_classes=attended,
            conducted_classes=conducted,
            percentage=_percentage(attended, conducted),
        )
        for subject_id, (attended, conducted) in totals.items()
    }
