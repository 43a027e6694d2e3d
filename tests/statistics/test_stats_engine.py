from __future__ import annotations

from datetime import date, time, timedelta

import pytest

from src.attendly.attendly.attendance.model import AttendanceRecord
from src.attendly.attendly.core.enums import AttendanceStatus, DayOfWeek, ProjectionKind, SubjectType
from src.attendly.attendly.statistics.engine import compute_stats, compute_subject_stats, project_safe_to_miss
from src.attendly.attendly.store.state import AppState
from src.attendly.attendly.subjects.model import HistoricalRecord, Subject
from src.attendly.attendly.timetable.model import TimeSlot

FIRST_MONDAY = date(2024, 1, 1)


def _records(statuses, *, slot_id="t1", credits=3, start=FIRST_MONDAY):
    records = {}
    for week, status in enumerate(statuses):
        record = AttendanceRecord(slot_id=slot_id, date=start + timedelta(weeks=week), status=status, credits=credits)
        records[record.key] = record
    return records


def _state(attendance, *, credits=3, **kwargs) -> AppState:
    return AppState(
        subjects=(Subject(id="s1", name="Physics", type=SubjectType.LECTURE, credits=credits),),
        timetable=(TimeSlot(id="t1", day=DayOfWeek.MON, start_time=time(9, 0), end_time=time(10, 0), subject_id="s1"),),
        attendance=attendance,
        **kwargs,
    )


SEVEN_OF_TEN = [AttendanceStatus.ATTENDED] * 7 + [AttendanceStatus.ABSENT] * 3


def test_credit_weighted_percentage_and_required_credits():
    stats = compute_stats(_state(_records(SEVEN_OF_TEN)))

    assert stats.attended_credits == 21
    assert stats.conducted_credits == 30
    assert stats.attendance_percentage == pytest.approx(70.0)
    assert stats.safe_to_miss.kind == ProjectionKind.MUST_ATTEND
    assert stats.safe_to_miss.credits == 6


def test_holidays_and_sundays_do_not_count():
    attendance = _records(SEVEN_OF_TEN)
    sunday = AttendanceRecord(slot_id="t1", date=date(2024, 1, 7), status=AttendanceStatus.ABSENT, credits=3)
    attendance[sunday.key] = sunday
    # the 10th Monday was an absence
    holiday = FIRST_MONDAY + timedelta(weeks=9)

    stats = compute_stats(_state(attendance, holidays=frozenset({holiday})))

    assert stats.conducted_credits == 27
    assert stats.attended_credits == 21


def test_cancelled_and_postponed_are_not_conducted():
    statuses = [AttendanceStatus.ATTENDED, AttendanceStatus.CANCELLED, AttendanceStatus.POSTPONED]

    stats = compute_stats(_state(_records(statuses)))

    assert stats.conducted_credits == 3
    assert stats.attended_credits == 3
    assert stats.cancelled_count == 1


def test_nothing_conducted_is_full_attendance():
    stats = compute_stats(_state({}))

    assert stats.attendance_percentage == 100.0
    assert stats.safe_to_miss.kind == ProjectionKind.CAN_MISS
    assert stats.safe_to_miss.credits == 0


def test_historical_counts_are_weighted_by_subject_credits():
    history = (HistoricalRecord(subject_id="s1", conducted=10, attended=8),)
    before_start = AttendanceRecord(slot_id="t1", date=date(2024, 1, 29), status=AttendanceStatus.ABSENT, credits=2)
    after_start = AttendanceRecord(slot_id="t1", date=date(2024, 2, 5), status=AttendanceStatus.ATTENDED, credits=2)
    state = _state(
        {before_start.key: before_start, after_start.key: after_start},
        credits=2,
        historical_data=history,
        tracking_start_date=date(2024, 2, 1),
    )

    stats = compute_stats(state)

    assert stats.conducted_credits == 22
    assert stats.attended_credits == 18


def test_record_credits_are_kept_after_subject_credit_change():
    stats = compute_stats(_state(_records([AttendanceStatus.ATTENDED], credits=3), credits=5))

    assert stats.conducted_credits == 3


def test_attended_never_exceeds_conducted():
    statuses = [AttendanceStatus.ATTENDED, AttendanceStatus.ABSENT, AttendanceStatus.CANCELLED] * 5
    stats = compute_stats(_state(_records(statuses)))

    assert 0 <= stats.attended_credits <= stats.conducted_credits
    assert 0 <= stats.attendance_percentage <= 100


@pytest.mark.parametrize(
    "attended, conducted, minimum, kind, credits",
    [
        (21, 30, 75, ProjectionKind.MUST_ATTEND, 6),
        (30, 30, 75, ProjectionKind.CAN_MISS, 10),
        (9, 10, 100, ProjectionKind.NOT_ACHIEVABLE, None),
        (10, 10, 100, ProjectionKind.CAN_MISS, 0),
        (0, 10, 0, ProjectionKind.UNBOUNDED, None),
        (7, 10, 70, ProjectionKind.CAN_MISS, 0),
    ],
)
def test_safe_to_miss_projection(attended, conducted, minimum, kind, credits):
    result = project_safe_to_miss(attended, conducted, minimum)

    assert result.kind == kind
    assert result.credits == credits


def test_projection_messages():
    assert project_safe_to_miss(21, 30, 75).describe() == "Attend 6 more credits to reach the minimum"
    assert project_safe_to_miss(4, 4, 75).describe() == "You can miss 1 more credit"


def test_subject_stats_count_classes_not_credits():
    history = (HistoricalRecord(subject_id="s1", conducted=4, attended=2),)
    state = _state(_records([AttendanceStatus.ATTENDED, AttendanceStatus.ABSENT]), historical_data=history)

    stats = compute_subject_stats(state)["s1"]

    assert stats.conducted_classes == 6
    assert stats.attended_classes == 3
    assert stats.percentage == pytest.approx(50.0)
