from __future__ import annotations

from datetime import date

from ..common.datetime_utils import is_sunday, weekday_code
from ..core.enums import AttendanceStatus
from ..store.state import AppState
from .model import ScheduledClass


def is_non_counting_day(state: AppState, day: date) -> bool:
    """Sundays and holidays never accrue attendance."""
    return is_sunday(day) or day in state.holidays


def takes_place_on(state: AppState, slot_id: str, day: date) -> bool:
    """Whether `slot_id` is a real occurrence on `day`.

    A postponed recurring occurrence still counts, so it can be moved again.
    A one-off only takes place on its own date.
    """

    slot = state.time_slot_by_id(slot_id)
    if slot is not None:
        return slot.day == weekday_code(day) and not is_non_counting_day(state, day)
    one_off = state.one_off_by_id(slot_id)
    return one_off is not None and one_off.date == day


def get_schedule_for_date(state: AppState, day: date) -> list[ScheduledClass]:
    """Effective classes on `day`, ordered by start time.

    Recurring slots for the weekday minus the ones postponed on that date,
    plus every one-off slot dated on it. Ties keep timetable order, recurring
    slots before one-offs.
    """

    if is_non_counting_day(state, day):
        return []

    code = weekday_code(day)
    occurrences: list[ScheduledClass] = []

    for slot in state.timetable:
        if slot.day != code:
            continue
        record = state.record_for(day, slot.id)
        if record and record.status == AttendanceStatus.POSTPONED:
            continue
        occurrences.append(
            ScheduledClass(
                slot_id=slot.id,
                subject_id=slot.subject_id,
                start_time=slot.start_time,
                end_time=slot.end_time,
                is_one_off=False,
            )
        )

    for one_off in state.one_off_slots:
        if one_off.date != day:
            continue
        occurrences.append(
            ScheduledClass(
                slot_id=one_off.id,
                subject_id=one_off.subject_id,
                start_time=one_off.start_time,
                end_time=one_off.end_time,
                is_one_off=True,
            )
        )

    occurrences.sort(key=lambda o: o.start_time)
    return occurrences
