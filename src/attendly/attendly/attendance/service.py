from __future__ import annotations

from ..common.validators import require_date, require_manual_status
from ..core.exceptions import ValidationError
from ..store.store import Store
from .ledger import clear_attendance_record, log_attendance
from .model import AttendanceRecord


class AttendanceService:
    def __init__(self, store: Store):
        self._store = store

    def log(self, *, slot_id: str, on_date, status: str) -> bool:
        """Log a status; returns False when the tracking-start policy rejected it."""

        if self._store.state.slot_by_id(slot_id) is None:
            raise ValidationError("Class slot not found")

        day = require_date(on_date)
        status = require_manual_status(status)
        accepted = not self._store.state.is_before_tracking(day)
        self._store.apply(log_attendance, slot_id, day, status)
        return accepted

    def clear(self, *, slot_id: str, on_date) -> None:
        self._store.apply(clear_attendance_record, slot_id, require_date(on_date))

    def records_on(self, on_date) -> list[AttendanceRecord]:
        return sorted(self._store.state.records_on(require_date(on_date)), key=lambda r: r.slot_id)
