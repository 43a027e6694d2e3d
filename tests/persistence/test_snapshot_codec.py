from __future__ import annotations

from datetime import date, datetime, time

import pytest

from src.attendly.attendly.attendance.model import AttendanceRecord
from src.attendly.attendly.core.enums import AttendanceStatus, DayOfWeek, SubjectType
from src.attendly.attendly.core.exceptions import BackupFormatError
from src.attendly.attendly.persistence.snapshot import export_backup, from_snapshot, import_backup, to_snapshot
from src.attendly.attendly.store.state import AppState
from src.attendly.attendly.subjects.model import HistoricalRecord, Subject
from src.attendly.attendly.timetable.model import OneOffSlot, TimeSlot


def _state() -> AppState:
    postponed = AttendanceRecord(slot_id="t1", date=date(2024, 2, 5), status=AttendanceStatus.POSTPONED, credits=3)
    attended = AttendanceRecord(slot_id="o1", date=date(2024, 2, 8), status=AttendanceStatus.ATTENDED, credits=3)
    return AppState(
        subjects=(Subject(id="s1", name="Physics", type=SubjectType.LECTURE, credits=3),),
        timetable=(TimeSlot(id="t1", day=DayOfWeek.MON, start_time=time(9, 0), end_time=time(10, 0), subject_id="s1"),),
        one_off_slots=(
            OneOffSlot(
                id="o1",
                date=date(2024, 2, 8),
                start_time=time(14, 0),
                end_time=time(15, 0),
                subject_id="s1",
                original_slot_id="t1",
                original_date=date(2024, 2, 5),
            ),
        ),
        attendance={postponed.key: postponed, attended.key: attended},
        holidays=frozenset({date(2024, 1, 26)}),
        min_attendance_percentage=80.0,
        historical_data=(HistoricalRecord(subject_id="s1", conducted=10, attended=8),),
        tracking_start_date=date(2024, 2, 1),
        user_name="Asha",
    )


def test_backup_restores_the_same_state():
    backup = export_backup(_state(), now=datetime(2024, 3, 1, 12, 0))

    assert backup["version"] == 1
    assert backup["exportedAt"] == "2024-03-01T12:00:00"
    assert import_backup(backup) == _state()


def test_snapshot_uses_camel_case_keys():
    data = to_snapshot(_state())

    assert data["attendance"][0] == {
        "id": "2024-02-05-t1",
        "slotId": "t1",
        "date": "2024-02-05",
        "status": "Postponed",
        "credits": 3,
    }
    assert data["oneOffSlots"][0]["originalSlotId"] == "t1"
    assert data["trackingStartDate"] == "2024-02-01"


def test_unsupported_version_is_rejected():
    backup = export_backup(_state())
    backup["version"] = 2

    with pytest.raises(BackupFormatError):
        import_backup(backup)


@pytest.mark.parametrize("missing", ["subjects", "timetable", "attendance"])
def test_required_lists_are_checked(missing):
    backup = export_backup(_state())
    backup[missing] = {"not": "a list"}

    with pytest.raises(BackupFormatError):
        import_backup(backup)


def test_bad_entries_raise_format_error():
    backup = export_backup(_state())
    backup["attendance"][0]["status"] = "Late"

    with pytest.raises(BackupFormatError):
        import_backup(backup)


def test_older_snapshots_get_defaults():
    data = {
        "subjects": [{"id": "s1", "name": "Physics", "type": "Lecture"}],
        "timetable": [
            {"id": "t1", "day": "Mon", "startTime": "09:00", "endTime": "10:00", "subjectId": "s1"},
            {"id": "t0", "day": "Sun", "startTime": "09:00", "endTime": "10:00", "subjectId": "s1"},
        ],
        "attendance": [{"id": "2024-01-08-t1", "slotId": "t1", "date": "2024-01-08", "status": "Attended"}],
        "historicalData": {"conducted": 10, "attended": 8},
    }

    state = from_snapshot(data)

    assert state.subjects[0].credits == 1
    assert [t.id for t in state.timetable] == ["t1"]
    assert state.record_for(date(2024, 1, 8), "t1").credits == 1
    assert state.historical_data == ()
    assert state.one_off_slots == ()
    assert state.min_attendance_percentage == 75
    assert state.tracking_start_date is None
