from __future__ import annotations

from dataclasses import replace

from ..store.state import AppState
from .model import Subject


def add_subject(state: AppState, subject: Subject) -> AppState:
    return replace(state, subjects=state.subjects + (subject,))


def update_subject(state: AppState, subject: Subject) -> AppState:
    if state.subject_by_id(subject.id) is None:
        return state
    return replace(state, subjects=tuple(subject if s.id == subject.id else s for s in state.subjects))


def cascade_delete_subject(state: AppState, subject_id: str) -> AppState:
    """Remove a subject together with everything that depends on it.

    Drops its recurring and one-off slots, every attendance record logged
    against those slots and its historical counts.
    """

    doomed_slots = {s.id for s in state.timetable if s.subject_id == subject_id}
    doomed_slots |= {s.id for s in state.one_off_slots if s.subject_id == subject_id}

    return replace(
        state,
        subjects=tuple(s for s in state.subjects if s.id != subject_id),
        timetable=tuple(s for s in state.timetable if s.subject_id != subject_id),
        one_off_slots=tuple(s for s in state.one_off_slots if s.subject_id != subject_id),
        attendance={k: r for k, r in state.attendance.items() if r.slot_id not in doomed_slots},
        historical_data=tuple(h for h in state.historical_data if h.subject_id != subject_id),
    )


def delete_subject(state: AppState, subject_id: str) -> AppState:
    if state.subject_by_id(subject_id) is None:
        return state
    return cascade_delete_subject(state, subject_id)
