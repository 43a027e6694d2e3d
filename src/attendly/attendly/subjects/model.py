from __future__ import annotations

from dataclasses import dataclass

from ..core.enums import SubjectType


@dataclass(frozen=True)
class Subject:
    id: str
    name: str
    type: SubjectType
    credits: int


@dataclass(frozen=True)
class HistoricalRecord:
    """Class counts accrued for a subject before daily tracking began."""

    subject_id: str
    conducted: int
    attended: int
