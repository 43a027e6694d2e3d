from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import NamedTuple

from ..common.datetime_utils import format_iso_date
from ..core.enums import AttendanceStatus


class AttendanceKey(NamedTuple):
    """Identity of a class occurrence in the ledger."""

    date: date
    slot_id: str


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: status logged for one (date, slot) occurrence."""

    slot_id: str
    date: date
    status: AttendanceStatus
    credits: int

    @property
    def key(self) -> AttendanceKey:
        return AttendanceKey(self.date, self.slot_id)

    @property
    def legacy_id(self) -> str:
        """Backup-file record id ("YYYY-MM-DD-<slot id>")."""
        return f"{format_iso_date(self.date)}-{self.slot_id}"
