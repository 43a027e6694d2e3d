from __future__ import annotations

import logging
from typing import Any

from ..common.validators import require_day, require_time
from ..core.exceptions import ExtractionError, ValidationError
from ..statistics.model import WeeklySummary
from ..timetable.importer import process_raw_slots
from ..timetable.model import ExtractedSlot, RawExtractedSlot
from .client import LLMClient
from .model import ExtractedQuestion, WeeklyDebrief
from .prompts import QUESTIONS_PROMPT, TIMETABLE_PROMPT, weekly_debrief_prompt

logger = logging.getLogger(__name__)


def _items(payload: Any, key: str) -> list:
    if not isinstance(payload, dict) or not isinstance(payload.get(key), list):
        raise ExtractionError(f"AI answer is missing the '{key}' list")
    return payload[key]


class AIService:
    """Image/document extraction and weekly debrief on top of an LLM client."""

    def __init__(self, client: LLMClient):
        self._client = client

    def extract_timetable(self, data_uri: str) -> list[ExtractedSlot]:
        payload = self._client.generate_json(TIMETABLE_PROMPT, media_data_uri=data_uri)

        raw: list[RawExtractedSlot] = []
        for item in _items(payload, "slots"):
            try:
                raw.append(
                    RawExtractedSlot(
                        day=require_day(item.get("day")),
                        start_time=require_time(item.get("startTime"), "Start time"),
                        subject_name=str(item.get("subjectName") or "").strip(),
                    )
                )
            except (ValidationError, AttributeError) as e:
                raise ExtractionError(f"AI returned an invalid timetable block: {item!r}") from e

        raw = [r for r in raw if r.subject_name]
        logger.info("Extracted %d timetable blocks", len(raw))
        return process_raw_slots(raw)

    def extract_questions(self, data_uri: str) -> list[ExtractedQuestion]:
        payload = self._client.generate_json(QUESTIONS_PROMPT, media_data_uri=data_uri)

        questions: list[ExtractedQuestion] = []
        for item in _items(payload, "questions"):
            try:
                questions.append(
                    ExtractedQuestion(
                        question_number=str(item["questionNumber"]).strip(),
                        question_text=str(item["questionText"]).strip(),
                        marks=float(item["marks"]),
                    )
                )
            except (KeyError, TypeError, ValueError) as e:
                raise ExtractionError(f"AI returned an invalid question: {item!r}") from e
        return questions

    def generate_weekly_debrief(self, summary: WeeklySummary) -> WeeklyDebrief:
        payload = self._client.generate_json(weekly_debrief_prompt(summary))
        if not isinstance(payload, dict):
            raise ExtractionError("AI returned an invalid weekly debrief")

        headline = str(payload.get("headline") or "").strip()
        text = str(payload.get("summary") or "").strip()
        if not headline or not text:
            raise ExtractionError("AI returned an incomplete weekly debrief")

        # percentage always comes from the attendance records
        return WeeklyDebrief(headline=headline, summary=text, attendance_percentage=summary.attendance_percentage)
