"""Serializable snapshot of AppState.

The same JSON shape is used for local storage, the MySQL sync row and backup
files (backups add `version` and `exportedAt`).
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Optional

from ..attendance.model import AttendanceRecord
from ..common.datetime_utils import format_hhmm, format_iso_date
from ..common.validators import (
    require_date,
    require_day,
    require_non_empty,
    require_non_negative_int,
    require_percentage,
    require_positive_int,
    require_status,
    require_subject_type,
    require_time,
)
from ..core.constants import BACKUP_VERSION, DEFAULT_MIN_ATTENDANCE_PERCENTAGE, DEFAULT_SUBJECT_CREDITS
from ..core.exceptions import BackupFormatError, ValidationError
from ..store.state import AppState
from ..subjects.model import HistoricalRecord, Subject
from ..timetable.model import OneOffSlot, TimeSlot

logger = logging.getLogger(__name__)

_REQUIRED_LISTS = ("subjects", "timetable", "attendance")
_OPTIONAL_LISTS = ("oneOffSlots", "holidays")


def _date_or_none(value) -> Optional[str]:
    return format_iso_date(value) if value else None


def to_snapshot(state: AppState) -> dict[str, Any]:
    return {
        "subjects": [
            {"id": s.id, "name": s.name, "type": s.type.value, "credits": s.credits} for s in state.subjects
        ],
        "timetable": [
            {
                "id": t.id,
                "day": t.day.value,
                "startTime": format_hhmm(t.start_time),
                "endTime": format_hhmm(t.end_time),
                "subjectId": t.subject_id,
            }
            for t in state.timetable
        ],
        "oneOffSlots": [
            {
                "id": o.id,
                "date": format_iso_date(o.date),
                "startTime": format_hhmm(o.start_time),
                "endTime": format_hhmm(o.end_time),
                "subjectId": o.subject_id,
                "originalSlotId": o.original_slot_id,
                "originalDate": _date_or_none(o.original_date),
            }
            for o in state.one_off_slots
        ],
        "attendance": [
            {
                "id": r.legacy_id,
                "slotId": r.slot_id,
                "date": format_iso_date(r.date),
                "status": r.status.value,
                "credits": r.credits,
            }
            for r in sorted(state.attendance.values(), key=lambda r: (r.date, r.slot_id))
        ],
        "holidays": [format_iso_date(d) for d in sorted(state.holidays)],
        "minAttendancePercentage": state.min_attendance_percentage,
        "historicalData": [
            {"subjectId": h.subject_id, "conducted": h.conducted, "attended": h.attended}
            for h in state.historical_data
        ],
        "trackingStartDate": _date_or_none(state.tracking_start_date),
        "userName": state.user_name,
    }


def _subject(raw: dict) -> Subject:
    credits = raw.get("credits")
    return Subject(
        id=require_non_empty(raw.get("id"), "Subject id"),
        name=require_non_empty(raw.get("name"), "Subject name"),
        type=require_subject_type(raw.get("type")),
        credits=DEFAULT_SUBJECT_CREDITS if credits is None else require_positive_int(credits, "Credits"),
    )


def _is_sunday_slot(raw: Any) -> bool:
    # legacy data may still hold "Sun" slots; Sunday never has classes
    if isinstance(raw, dict) and raw.get("day") == "Sun":
        logger.warning("Dropping legacy Sunday timetable slot %s", raw.get("id"))
        return True
    return False


def _time_slot(raw: dict) -> TimeSlot:
    return TimeSlot(
        id=require_non_empty(raw.get("id"), "Slot id"),
        day=require_day(raw.get("day")),
        start_time=require_time(raw.get("startTime"), "Start time"),
        end_time=require_time(raw.get("endTime"), "End time"),
        subject_id=require_non_empty(raw.get("subjectId"), "Subject id"),
    )


def _one_off(raw: dict) -> OneOffSlot:
    original_slot_id = raw.get("originalSlotId") or None
    original_date = raw.get("originalDate") or None
    return OneOffSlot(
        id=require_non_empty(raw.get("id"), "Slot id"),
        date=require_date(raw.get("date")),
        start_time=require_time(raw.get("startTime"), "Start time"),
        end_time=require_time(raw.get("endTime"), "End time"),
        subject_id=require_non_empty(raw.get("subjectId"), "Subject id"),
        original_slot_id=original_slot_id,
        original_date=require_date(original_date, "Original date") if original_date else None,
    )


def _record(raw: dict, credits_by_slot: dict[str, int]) -> AttendanceRecord:
    slot_id = require_non_empty(raw.get("slotId"), "Slot id")
    credits = raw.get("credits")
    return AttendanceRecord(
        slot_id=slot_id,
        date=require_date(raw.get("date")),
        status=require_status(raw.get("status")),
        credits=(
            credits_by_slot.get(slot_id, DEFAULT_SUBJECT_CREDITS)
            if credits is None
            else require_positive_int(credits, "Credits")
        ),
    )


def _historical(raw: dict) -> HistoricalRecord:
    conducted = require_non_negative_int(raw.get("conducted"), "Conducted classes")
    attended = require_non_negative_int(raw.get("attended"), "Attended classes")
    if attended > conducted:
        raise ValidationError("Attended classes cannot be more than conducted classes")
    return HistoricalRecord(
        subject_id=require_non_empty(raw.get("subjectId"), "Subject id"),
        conducted=conducted,
        attended=attended,
    )


def from_snapshot(data: Any) -> AppState:
    """Rebuild AppState from a snapshot dict.

    Missing optional fields take defaults. Subjects without credits get 1 and
    a legacy aggregate (non-list) `historicalData` is dropped.
    """

    if not isinstance(data, dict):
        raise BackupFormatError("Snapshot must be a JSON object")
    for name in _REQUIRED_LISTS:
        if not isinstance(data.get(name), list):
            raise BackupFormatError(f"Invalid backup file format: '{name}' must be a list")
    for name in _OPTIONAL_LISTS:
        if data.get(name) is not None and not isinstance(data.get(name), list):
            raise BackupFormatError(f"Invalid backup file format: '{name}' must be a list")

    historical_raw = data.get("historicalData")
    if not isinstance(historical_raw, list):
        historical_raw = []

    try:
        subjects = tuple(_subject(s) for s in data["subjects"])
        timetable = tuple(_time_slot(t) for t in data["timetable"] if not _is_sunday_slot(t))
        one_offs = tuple(_one_off(o) for o in data.get("oneOffSlots") or [])

        credits_by_subject = {s.id: s.credits for s in subjects}
        credits_by_slot = {
            slot.id: credits_by_subject.get(slot.subject_id, DEFAULT_SUBJECT_CREDITS) for slot in timetable + one_offs
        }

        attendance = {}
        for raw in data["attendance"]:
            record = _record(raw, credits_by_slot)
            attendance[record.key] = record

        holidays = frozenset(require_date(h, "Holiday") for h in data.get("holidays") or [])
        historical = tuple(_historical(h) for h in historical_raw)

        threshold = data.get("minAttendancePercentage")
        tracking_start = data.get("trackingStartDate")
        return AppState(
            subjects=subjects,
            timetable=timetable,
            one_off_slots=one_offs,
            attendance=attendance,
            holidays=holidays,
            min_attendance_percentage=(
                DEFAULT_MIN_ATTENDANCE_PERCENTAGE if threshold is None else require_percentage(threshold)
            ),
            historical_data=historical,
            tracking_start_date=require_date(tracking_start, "Tracking start date") if tracking_start else None,
            user_name=(data.get("userName") or "").strip() or None,
        )
    except (AttributeError, TypeError) as e:
        raise BackupFormatError(f"Invalid backup file format: {e}") from e
    except ValidationError as e:
        if isinstance(e, BackupFormatError):
            raise
        raise BackupFormatError(f"Invalid backup file format: {e}") from e


def export_backup(state: AppState, *, now: Optional[datetime] = None) -> dict[str, Any]:
    data = to_snapshot(state)
    data["version"] = BACKUP_VERSION
    data["exportedAt"] = (now or datetime.now()).isoformat()
    return data


def import_backup(data: Any) -> AppState:
    if not isinstance(data, dict):
        raise BackupFormatError("Backup must be a JSON object")
    if data.get("version") != BACKUP_VERSION:
        raise BackupFormatError("Invalid backup file format: unsupported version")
    return from_snapshot(data)
