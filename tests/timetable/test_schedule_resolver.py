from __future__ import annotations

from datetime import date, time

from src.attendly.attendly.attendance.model import AttendanceKey, AttendanceRecord
from src.attendly.attendly.core.enums import AttendanceStatus, DayOfWeek, SubjectType
from src.attendly.attendly.store.state import AppState
from src.attendly.attendly.subjects.model import Subject
from src.attendly.attendly.timetable.model import OneOffSlot, TimeSlot
from src.attendly.attendly.timetable.resolver import get_schedule_for_date

MONDAY = date(2024, 1, 1)
SUNDAY = date(2024, 1, 7)


def _state(**kwargs) -> AppState:
    subjects = (
        Subject(id="s1", name="Physics", type=SubjectType.LECTURE, credits=3),
        Subject(id="s2", name="Chem Lab", type=SubjectType.LAB, credits=2),
    )
    timetable = (
        TimeSlot(id="t-late", day=DayOfWeek.MON, start_time=time(11, 0), end_time=time(12, 0), subject_id="s2"),
        TimeSlot(id="t-early", day=DayOfWeek.MON, start_time=time(9, 0), end_time=time(10, 0), subject_id="s1"),
        TimeSlot(id="t-tue", day=DayOfWeek.TUE, start_time=time(9, 0), end_time=time(10, 0), subject_id="s1"),
    )
    return AppState(subjects=subjects, timetable=timetable, **kwargs)


def test_weekday_slots_are_sorted_by_start_time():
    schedule = get_schedule_for_date(_state(), MONDAY)

    assert [c.slot_id for c in schedule] == ["t-early", "t-late"]
    assert all(not c.is_one_off for c in schedule)


def test_one_off_slots_on_the_date_are_merged_in_order():
    extra = OneOffSlot(id="o1", date=MONDAY, start_time=time(10, 0), end_time=time(11, 0), subject_id="s1")
    other_day = OneOffSlot(id="o2", date=date(2024, 1, 2), start_time=time(8, 0), end_time=time(9, 0), subject_id="s1")

    schedule = get_schedule_for_date(_state(one_off_slots=(extra, other_day)), MONDAY)

    assert [c.slot_id for c in schedule] == ["t-early", "o1", "t-late"]
    assert schedule[1].is_one_off is True


def test_postponed_occurrence_is_hidden_only_on_that_date():
    postponed = AttendanceRecord(slot_id="t-early", date=MONDAY, status=AttendanceStatus.POSTPONED, credits=3)
    state = _state(attendance={postponed.key: postponed})

    assert [c.slot_id for c in get_schedule_for_date(state, MONDAY)] == ["t-late"]
    assert [c.slot_id for c in get_schedule_for_date(state, date(2024, 1, 8))] == ["t-early", "t-late"]


def test_other_statuses_keep_the_class_visible():
    cancelled = AttendanceRecord(slot_id="t-early", date=MONDAY, status=AttendanceStatus.CANCELLED, credits=3)
    state = _state(attendance={AttendanceKey(MONDAY, "t-early"): cancelled})

    assert len(get_schedule_for_date(state, MONDAY)) == 2


def test_sunday_is_always_empty_even_with_legacy_sunday_slot():
    legacy = TimeSlot(id="t-sun", day="Sun", start_time=time(9, 0), end_time=time(10, 0), subject_id="s1")
    one_off = OneOffSlot(id="o1", date=SUNDAY, start_time=time(9, 0), end_time=time(10, 0), subject_id="s1")
    state = AppState(subjects=_state().subjects, timetable=(legacy,), one_off_slots=(one_off,))

    assert get_schedule_for_date(state, SUNDAY) == []


def test_holiday_has_no_classes():
    one_off = OneOffSlot(id="o1", date=MONDAY, start_time=time(13, 0), end_time=time(14, 0), subject_id="s1")
    state = _state(holidays=frozenset({MONDAY}), one_off_slots=(one_off,))

    assert get_schedule_for_date(state, MONDAY) == []
