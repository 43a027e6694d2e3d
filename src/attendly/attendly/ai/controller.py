from __future__ import annotations

import logging

from flask import Flask

from ..common.responses import fail, json_body, ok
from ..core.exceptions import ExtractionError, ValidationError
from ..container import Container
from ..timetable.controller import extracted_slot_to_dict

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    def _service():
        if container.ai_service is None:
            raise ExtractionError("AI features are disabled, set GEMINI_API_KEY to enable them")
        return container.ai_service

    def _data_uri() -> str:
        data_uri = json_body().get("data_uri")
        if not isinstance(data_uri, str) or not data_uri.strip():
            raise ValidationError("data_uri is required")
        return data_uri

    @app.route("/api/ai/timetable", methods=["POST"], endpoint="ai_extract_timetable")
    def ai_extract_timetable():
        try:
            slots = _service().extract_timetable(_data_uri())
            return ok([extracted_slot_to_dict(s) for s in slots])
        except ValidationError as e:
            return fail(str(e))
        except ExtractionError as e:
            logger.warning("Timetable extraction failed: %s", e)
            return fail(str(e), 502)

    @app.route("/api/ai/questions", methods=["POST"], endpoint="ai_extract_questions")
    def ai_extract_questions():
        try:
            questions = _service().extract_questions(_data_uri())
            return ok(
                [
                    {"question_number": q.question_number, "question_text": q.question_text, "marks": q.marks}
                    for q in questions
                ]
            )
        except ValidationError as e:
            return fail(str(e))
        except ExtractionError as e:
            logger.warning("Question extraction failed: %s", e)
            return fail(str(e), 502)

    @app.route("/api/ai/weekly-debrief", methods=["POST"], endpoint="ai_weekly_debrief")
    def ai_weekly_debrief():
        summary = container.statistics_service.weekly_summary()
        if summary is None:
            return ok(None)
        try:
            debrief = _service().generate_weekly_debrief(summary)
        except ExtractionError as e:
            logger.warning("Weekly debrief failed: %s", e)
            return fail(str(e), 502)
        return ok(
            {
                "headline": debrief.headline,
                "summary": debrief.summary,
                "attendance_percentage": debrief.attendance_percentage,
            }
        )
