from __future__ import annotations

from dataclasses import replace
from typing import Callable, Iterable

from ..core.constants import DEFAULT_SUBJECT_CREDITS
from ..core.enums import SubjectType
from ..store.state import AppState
from ..subjects.model import Subject
from .model import ExtractedSlot, OneOffSlot, TimeSlot


def add_time_slot(state: AppState, slot: TimeSlot) -> AppState:
    if state.subject_by_id(slot.subject_id) is None:
        return state
    return replace(state, timetable=state.timetable + (slot,))


def update_time_slot(state: AppState, slot: TimeSlot) -> AppState:
    if state.time_slot_by_id(slot.id) is None or state.subject_by_id(slot.subject_id) is None:
        return state
    return replace(state, timetable=tuple(slot if s.id == slot.id else s for s in state.timetable))


def cascade_delete_time_slots(state: AppState, slot_ids: set[str]) -> AppState:
    """Remove recurring slots and the attendance logged against them.

    One-off classes rescheduled out of a removed slot still happen on their
    new date, so they are kept and only lose their link back.
    """

    if not slot_ids:
        return state

    one_offs = tuple(
        replace(o, original_slot_id=None, original_date=None) if o.original_slot_id in slot_ids else o
        for o in state.one_off_slots
    )
    return replace(
        state,
        timetable=tuple(s for s in state.timetable if s.id not in slot_ids),
        one_off_slots=one_offs,
        attendance={k: r for k, r in state.attendance.items() if r.slot_id not in slot_ids},
    )


def delete_time_slot(state: AppState, slot_id: str) -> AppState:
    if state.time_slot_by_id(slot_id) is None:
        return state
    return cascade_delete_time_slots(state, {slot_id})


def clear_timetable(state: AppState) -> AppState:
    """Start a new weekly timetable from scratch."""
    return cascade_delete_time_slots(state, {s.id for s in state.timetable})


def add_one_off_slot(state: AppState, slot: OneOffSlot) -> AppState:
    if state.subject_by_id(slot.subject_id) is None:
        return state
    return replace(state, one_off_slots=state.one_off_slots + (slot,))


def import_timetable(
    state: AppState,
    extracted: Iterable[ExtractedSlot],
    new_id: Callable[[], str],
) -> AppState:
    """Merge extracted slots into the timetable.

    Unknown subject names (case-insensitive) become 1-credit lectures. A slot
    is skipped when one with the same day, start time and subject exists.
    """

    extracted = [e for e in extracted if e.subject_name and e.subject_name.strip() and e.start_time < e.end_time]
    subjects = list(state.subjects)
    by_name = {s.name.lower(): s.id for s in subjects}

    for item in extracted:
        name = item.subject_name.strip()
        if name.lower() not in by_name:
            subject = Subject(id=new_id(), name=name, type=SubjectType.LECTURE, credits=DEFAULT_SUBJECT_CREDITS)
            subjects.append(subject)
            by_name[name.lower()] = subject.id

    timetable = list(state.timetable)
    for item in extracted:
        subject_id = by_name[item.subject_name.strip().lower()]
        exists = any(
            t.day == item.day and t.start_time == item.start_time and t.subject_id == subject_id for t in timetable
        )
        if not exists:
            timetable.append(
                TimeSlot(
                    id=new_id(),
                    day=item.day,
                    start_time=item.start_time,
                    end_time=item.end_time,
                    subject_id=subject_id,
                )
            )

    return replace(state, subjects=tuple(subjects), timetable=tuple(timetable))
