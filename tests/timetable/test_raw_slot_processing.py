from __future__ import annotations

from datetime import time

from src.attendly.attendly.core.enums import DayOfWeek
from src.attendly.attendly.timetable.importer import process_raw_slots
from src.attendly.attendly.timetable.model import RawExtractedSlot


def _raw(day, hh, mm, name):
    return RawExtractedSlot(day=day, start_time=time(hh, mm), subject_name=name)


def _summary(slots):
    return [(s.day.value, s.start_time.strftime("%H:%M"), s.end_time.strftime("%H:%M"), s.subject_name) for s in slots]


def test_consecutive_blocks_of_one_subject_become_a_double_class():
    slots = process_raw_slots(
        [
            _raw(DayOfWeek.MON, 12, 0, "LUNCH"),
            _raw(DayOfWeek.MON, 9, 0, "Maths"),
            _raw(DayOfWeek.MON, 9, 50, "Maths"),
            _raw(DayOfWeek.MON, 11, 0, "Physics"),
        ]
    )

    assert _summary(slots) == [
        ("Mon", "09:00", "10:40", "Maths"),
        ("Mon", "11:00", "12:00", "Physics"),
        ("Mon", "12:00", "12:50", "LUNCH"),
    ]


def test_short_gap_is_not_merged():
    slots = process_raw_slots([_raw(DayOfWeek.TUE, 9, 0, "Maths"), _raw(DayOfWeek.TUE, 9, 30, "Maths")])

    assert _summary(slots) == [
        ("Tue", "09:00", "09:30", "Maths"),
        ("Tue", "09:30", "10:20", "Maths"),
    ]


def test_days_are_processed_independently():
    slots = process_raw_slots([_raw(DayOfWeek.MON, 9, 0, "Maths"), _raw(DayOfWeek.TUE, 9, 45, "Maths")])

    assert _summary(slots) == [
        ("Mon", "09:00", "09:50", "Maths"),
        ("Tue", "09:45", "10:35", "Maths"),
    ]
