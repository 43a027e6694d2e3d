from __future__ import annotations

from typing import Optional

from ..common.validators import require_date, require_time
from ..core.exceptions import ValidationError
from ..store.store import Store
from ..timetable.model import OneOffSlot
from ..timetable.resolver import takes_place_on
from . import reducers


class RescheduleService:
    def __init__(self, store: Store):
        self._store = store

    def reschedule(
        self,
        *,
        slot_id: str,
        original_date,
        new_date,
        new_start: Optional[str] = None,
        new_end: Optional[str] = None,
    ) -> Optional[OneOffSlot]:
        """Move a class occurrence; returns the new one-off slot, or None if refused."""

        if self._store.state.slot_by_id(slot_id) is None:
            raise ValidationError("Class slot not found")

        original_date = require_date(original_date, "Original date")
        if not takes_place_on(self._store.state, slot_id, original_date):
            raise ValidationError("This class does not take place on that date")

        new_slot_id = self._store.new_id()
        self._store.apply(
            reducers.reschedule_class,
            slot_id,
            original_date,
            require_date(new_date, "New date"),
            new_slot_id,
            require_time(new_start, "New start time") if new_start else None,
            require_time(new_end, "New end time") if new_end else None,
        )
        return self._store.state.one_off_by_id(new_slot_id)

    def undo(self, *, one_off_id: str) -> None:
        one_off = self._store.state.one_off_by_id(one_off_id)
        if one_off is None:
            raise ValidationError("One-off class not found")
        if not one_off.is_rescheduled:
            raise ValidationError("This class was not created by a reschedule")
        self._store.apply(reducers.undo_postpone, one_off_id)

    def delete(self, *, one_off_id: str) -> None:
        if self._store.state.one_off_by_id(one_off_id) is None:
            raise ValidationError("One-off class not found")
        self._store.apply(reducers.delete_one_off_slot, one_off_id)
