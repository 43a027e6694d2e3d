from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ExtractedQuestion:
    question_number: str
    question_text: str
    marks: float


@dataclass(frozen=True)
class WeeklyDebrief:
    headline: str
    summary: str
    attendance_percentage: float
