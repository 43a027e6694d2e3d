from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date, time
from typing import Optional

from ..attendance.ledger import clear_attendance_record, drop_records_for_slot, put_record
from ..attendance.model import AttendanceRecord
from ..common.datetime_utils import format_iso_date
from ..common.validators import require_time_range
from ..core.enums import AttendanceStatus
from ..store.state import AppState
from ..timetable.model import OneOffSlot
from ..timetable.resolver import takes_place_on

logger = logging.getLogger(__name__)


def _remove_one_off(state: AppState, one_off_id: str) -> AppState:
    state = replace(state, one_off_slots=tuple(o for o in state.one_off_slots if o.id != one_off_id))
    return drop_records_for_slot(state, one_off_id)


def _restore_origin(state: AppState, one_off: OneOffSlot) -> AppState:
    record = state.record_for(one_off.original_date, one_off.original_slot_id)
    if record and record.status == AttendanceStatus.POSTPONED:
        state = clear_attendance_record(state, one_off.original_slot_id, one_off.original_date)
    return state


def reschedule_class(
    state: AppState,
    slot_id: str,
    original_date: date,
    new_date: date,
    new_slot_id: str,
    new_start: Optional[time] = None,
    new_end: Optional[time] = None,
) -> AppState:
    """Move one occurrence of a class to `new_date`.

    A recurring occurrence is marked Postponed and a linked one-off slot is
    created. Moving a one-off slot replaces it and carries its link forward,
    so the new slot always points at the recurring occurrence that was first
    postponed (undo restores that one).
    """

    recurring = state.time_slot_by_id(slot_id)
    one_off = state.one_off_by_id(slot_id) if recurring is None else None
    source = recurring or one_off
    if source is None or state.subject_by_id(source.subject_id) is None:
        return state

    start = new_start or source.start_time
    end = new_end or source.end_time
    require_time_range(start, end)

    if not takes_place_on(state, slot_id, original_date):
        logger.warning("Cannot reschedule slot %s: no class on %s", slot_id, format_iso_date(original_date))
        return state

    if state.is_before_tracking(original_date):
        logger.warning(
            "Cannot reschedule class on %s: before tracking start %s",
            format_iso_date(original_date),
            format_iso_date(state.tracking_start_date),
        )
        return state

    if recurring is not None:
        for linked in state.one_off_slots:
            if linked.original_slot_id == slot_id and linked.original_date == original_date:
                state = _remove_one_off(state, linked.id)

        moved = OneOffSlot(
            id=new_slot_id,
            date=new_date,
            start_time=start,
            end_time=end,
            subject_id=recurring.subject_id,
            original_slot_id=recurring.id,
            original_date=original_date,
        )
        subject = state.subject_by_id(recurring.subject_id)
        state = replace(state, one_off_slots=state.one_off_slots + (moved,))
        return put_record(
            state,
            AttendanceRecord(
                slot_id=recurring.id,
                date=original_date,
                status=AttendanceStatus.POSTPONED,
                credits=subject.credits,
            ),
        )

    moved = OneOffSlot(
        id=new_slot_id,
        date=new_date,
        start_time=start,
        end_time=end,
        subject_id=one_off.subject_id,
        original_slot_id=one_off.original_slot_id,
        original_date=one_off.original_date,
    )
    state = _remove_one_off(state, one_off.id)
    return replace(state, one_off_slots=state.one_off_slots + (moved,))


def undo_postpone(state: AppState, one_off_id: str) -> AppState:
    """Cancel a reschedule: drop the one-off and un-postpone its origin."""

    one_off = state.one_off_by_id(one_off_id)
    if one_off is None or not one_off.is_rescheduled:
        return state
    state = _remove_one_off(state, one_off_id)
    return _restore_origin(state, one_off)


def delete_one_off_slot(state: AppState, one_off_id: str) -> AppState:
    one_off = state.one_off_by_id(one_off_id)
    if one_off is None:
        return state
    state = _remove_one_off(state, one_off_id)
    if one_off.is_rescheduled:
        state = _restore_origin(state, one_off)
    return state
