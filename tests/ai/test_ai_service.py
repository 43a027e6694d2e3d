from __future__ import annotations

import json
from datetime import date

import httpx
import pytest

from src.attendly.attendly.ai.client import GeminiClient, split_data_uri
from src.attendly.attendly.ai.service import AIService
from src.attendly.attendly.core.exceptions import ExtractionError
from src.attendly.attendly.statistics.model import ClassInfo, WeeklySummary

IMAGE = "data:image/png;base64,aGVsbG8="


def _gemini_reply(payload) -> dict:
    text = payload if isinstance(payload, str) else json.dumps(payload)
    return {"candidates": [{"content": {"role": "model", "parts": [{"text": text}]}}]}


def _client(handler) -> GeminiClient:
    http = httpx.Client(transport=httpx.MockTransport(handler))
    return GeminiClient(api_key="test-key", model="gemini-test", http_client=http)


def test_request_carries_key_image_and_json_mode():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = request.url
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json=_gemini_reply({"slots": []}))

    AIService(_client(handler)).extract_timetable(IMAGE)

    assert seen["url"].path == "/v1beta/models/gemini-test:generateContent"
    assert seen["url"].params["key"] == "test-key"
    parts = seen["body"]["contents"][0]["parts"]
    assert parts[1] == {"inline_data": {"mime_type": "image/png", "data": "aGVsbG8="}}
    assert seen["body"]["generationConfig"]["responseMimeType"] == "application/json"


def test_timetable_blocks_are_merged_into_classes():
    reply = {
        "slots": [
            {"day": "Mon", "startTime": "9:00", "subjectName": "Maths"},
            {"day": "Mon", "startTime": "09:50", "subjectName": "Maths"},
            {"day": "Mon", "startTime": "13:30", "subjectName": "LUNCH"},
        ]
    }
    service = AIService(_client(lambda request: httpx.Response(200, json=_gemini_reply(reply))))

    slots = service.extract_timetable(IMAGE)

    assert [(s.subject_name, s.start_time.strftime("%H:%M"), s.end_time.strftime("%H:%M")) for s in slots] == [
        ("Maths", "09:00", "10:40"),
        ("LUNCH", "13:30", "14:20"),
    ]


def test_fenced_json_is_accepted():
    fenced = "```json\n" + json.dumps({"questions": [{"questionNumber": "1a", "questionText": "Define work.", "marks": 2}]}) + "\n```"
    service = AIService(_client(lambda request: httpx.Response(200, json=_gemini_reply(fenced))))

    questions = service.extract_questions("data:application/pdf;base64,JVBERi0=")

    assert [(q.question_number, q.marks) for q in questions] == [("1a", 2.0)]


@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(500, json={"error": {"message": "boom"}}),
        httpx.Response(200, json={"candidates": []}),
        httpx.Response(200, json=_gemini_reply("not json")),
        httpx.Response(200, json=_gemini_reply({"slots": [{"day": "Sun", "startTime": "09:00", "subjectName": "X"}]})),
        httpx.Response(200, json=_gemini_reply({"nothing": []})),
    ],
)
def test_bad_answers_raise_extraction_error(response):
    service = AIService(_client(lambda request: response))

    with pytest.raises(ExtractionError):
        service.extract_timetable(IMAGE)


def test_data_uri_is_required():
    with pytest.raises(ExtractionError):
        split_data_uri("https://example.com/timetable.png")


def test_debrief_keeps_computed_percentage():
    summary = WeeklySummary(
        week_start=date(2024, 1, 1),
        week_end=date(2024, 1, 7),
        attended_classes=(ClassInfo("Physics", "Monday"),),
        missed_classes=(ClassInfo("Maths", "Wednesday"),),
        cancelled_classes=(),
        attendance_percentage=50.0,
        user_name="Asha",
    )
    prompts = []

    def handler(request: httpx.Request) -> httpx.Response:
        prompts.append(json.loads(request.content)["contents"][0]["parts"][0]["text"])
        return httpx.Response(
            200,
            json=_gemini_reply({"headline": "Let's Bounce Back!", "summary": "Catch Maths next week.", "attendancePercentage": 99}),
        )

    debrief = AIService(_client(handler)).generate_weekly_debrief(summary)

    assert debrief.attendance_percentage == 50.0
    assert debrief.headline == "Let's Bounce Back!"
    assert "Asha" in prompts[0]
    assert "- Maths on Wednesday" in prompts[0]


def test_own_http_client_is_opened_and_closed_per_request(monkeypatch):
    opened = []
    real_client = httpx.Client

    def make_client(**kwargs):
        transport = httpx.MockTransport(lambda request: httpx.Response(200, json=_gemini_reply({"slots": []})))
        http = real_client(transport=transport, **kwargs)
        opened.append(http)
        return http

    monkeypatch.setattr(httpx, "Client", make_client)
    client = GeminiClient(api_key="test-key")

    assert client.generate_json("first") == {"slots": []}
    assert client.generate_json("second") == {"slots": []}

    assert len(opened) == 2
    assert all(http.is_closed for http in opened)


def test_injected_http_client_is_left_open():
    http = httpx.Client(transport=httpx.MockTransport(lambda request: httpx.Response(200, json=_gemini_reply([]))))
    client = GeminiClient(api_key="test-key", http_client=http)

    client.generate_json("prompt")

    assert http.is_closed is False
    http.close()
