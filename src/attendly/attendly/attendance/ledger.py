from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date

from ..common.datetime_utils import format_iso_date
from ..core.enums import AttendanceStatus
from ..store.state import AppState
from .model import AttendanceKey, AttendanceRecord

logger = logging.getLogger(__name__)


def put_record(state: AppState, record: AttendanceRecord) -> AppState:
    """Upsert without policy checks (used by the reschedule flow too)."""
    attendance = dict(state.attendance)
    attendance[record.key] = record
    return replace(state, attendance=attendance)


def log_attendance(state: AppState, slot_id: str, day: date, status: AttendanceStatus) -> AppState:
    """Record `status` for the occurrence of `slot_id` on `day`.

    Last write wins. Dates before the tracking start date are rejected with a
    warning, and slots whose subject is gone are ignored.
    """

    if state.is_before_tracking(day):
        logger.warning(
            "Cannot log attendance for %s: dates before %s are covered by historical data",
            format_iso_date(day),
            format_iso_date(state.tracking_start_date),
        )
        return state

    subject = state.subject_for_slot(slot_id)
    if subject is None:
        logger.debug("Ignoring attendance for unknown slot or subject: slot=%s", slot_id)
        return state

    record = AttendanceRecord(slot_id=slot_id, date=day, status=status, credits=subject.credits)
    if state.attendance.get(record.key) == record:
        return state
    return put_record(state, record)


def clear_attendance_record(state: AppState, slot_id: str, day: date) -> AppState:
    key = AttendanceKey(day, slot_id)
    if key not in state.attendance:
        return state
    return replace(state, attendance={k: r for k, r in state.attendance.items() if k != key})


def drop_records_for_slot(state: AppState, slot_id: str) -> AppState:
    if not any(r.slot_id == slot_id for r in state.attendance.values()):
        return state
    return replace(state, attendance={k: r for k, r in state.attendance.items() if r.slot_id != slot_id})
