from __future__ import annotations

import json
from datetime import date

import pytest

from src.attendly.attendly.container import build_container
from src.attendly.attendly.main import create_app
from src.attendly.attendly.persistence.json_file_repository import JsonFileSnapshotRepository


@pytest.fixture
def data_file(tmp_path):
    return tmp_path / "attendly.json"


@pytest.fixture
def client(monkeypatch, data_file):
    monkeypatch.setenv("APP_ENV", "testing")
    container = build_container(repository=JsonFileSnapshotRepository(data_file), today=lambda: date(2024, 1, 7))
    app = create_app(container)
    return app.test_client()


def _create_class(client) -> tuple[str, str]:
    subject = client.post("/api/subjects", json={"name": "Physics", "type": "Lecture", "credits": 3}).get_json()["data"]
    slot = client.post(
        "/api/timetable",
        json={"day": "Mon", "start_time": "09:00", "end_time": "10:00", "subject_id": subject["id"]},
    ).get_json()["data"]
    return subject["id"], slot["id"]


def test_logging_attendance_updates_stats_and_storage(client, data_file):
    _, slot_id = _create_class(client)

    resp = client.post("/api/attendance", json={"slot_id": slot_id, "date": "2024-01-01", "status": "Attended"})
    assert resp.status_code == 200

    stats = client.get("/api/stats").get_json()["data"]
    assert stats["attended_credits"] == 3
    assert stats["conducted_credits"] == 3
    assert stats["attendance_percentage"] == 100.0
    assert stats["safe_to_miss"]["kind"] == "can_miss"

    schedule = client.get("/api/schedule/2024-01-01").get_json()["data"]
    assert [(row["slot_id"], row["status"]) for row in schedule] == [(slot_id, "Attended")]

    stored = json.loads(data_file.read_text(encoding="utf-8"))
    assert stored["attendance"][0]["slotId"] == slot_id
    assert client.get("/api/sync-status").get_json()["data"]["status"] == "synced"


def test_validation_errors_are_400(client):
    subject_id, _ = _create_class(client)

    resp = client.post(
        "/api/timetable",
        json={"day": "Mon", "start_time": "11:00", "end_time": "10:00", "subject_id": subject_id},
    )

    assert resp.status_code == 400
    assert resp.get_json() == {"success": False, "message": "Start time must be before end time"}
    assert client.post("/api/subjects", data="not json").status_code == 400


def test_tracking_start_rejection_is_409(client):
    _, slot_id = _create_class(client)
    client.put("/api/historical", json={"tracking_start_date": "2024-02-01", "records": []})

    resp = client.post("/api/attendance", json={"slot_id": slot_id, "date": "2024-01-15", "status": "Attended"})

    assert resp.status_code == 409
    assert client.get("/api/attendance?date=2024-01-15").get_json()["data"] == []


def test_reschedule_and_undo(client):
    _, slot_id = _create_class(client)

    resp = client.post(
        "/api/reschedule",
        json={"slot_id": slot_id, "original_date": "2024-01-08", "new_date": "2024-01-11", "new_start_time": "14:00", "new_end_time": "15:00"},
    )
    assert resp.status_code == 201
    one_off = resp.get_json()["data"]
    assert one_off["original_slot_id"] == slot_id
    assert client.get("/api/schedule/2024-01-08").get_json()["data"] == []

    assert client.post(f"/api/one-off-slots/{one_off['id']}/undo").status_code == 200
    assert len(client.get("/api/schedule/2024-01-08").get_json()["data"]) == 1
    assert client.get("/api/one-off-slots").get_json()["data"] == []


def test_backup_export_and_restore(client):
    _create_class(client)
    backup = client.get("/api/backup").get_json()["data"]
    assert backup["version"] == 1

    client.delete("/api/timetable")
    assert client.get("/api/timetable").get_json()["data"] == []

    assert client.post("/api/backup", json=backup).status_code == 200
    assert len(client.get("/api/timetable").get_json()["data"]) == 1

    backup["version"] = 9
    assert client.post("/api/backup", json=backup).status_code == 400


def test_calendar_and_settings(client):
    client.put("/api/settings", json={"min_attendance_percentage": 80, "user_name": "Asha"})
    client.post("/api/holidays", json={"date": "2024-01-26"})

    settings = client.get("/api/settings").get_json()["data"]
    assert settings["min_attendance_percentage"] == 80.0
    assert settings["holidays"] == ["2024-01-26"]

    months = client.get("/api/calendar").get_json()["data"]
    assert list(months) == ["2024-01"]
    assert months["2024-01"][25]["status"] == "holiday"

    assert client.get("/api/calendar?start=2024-02-02&end=2024-02-01").status_code == 400


def test_calendar_range_must_be_closed_and_bounded(client):
    assert client.get("/api/calendar?start=2024-01-01").status_code == 400
    assert client.get("/api/calendar?end=2024-01-31").status_code == 400

    resp = client.get("/api/calendar?start=2000-01-01&end=2030-12-31")
    assert resp.status_code == 400
    assert "731 days" in resp.get_json()["message"]

    months = client.get("/api/calendar?start=2024-01-01&end=2025-12-31").get_json()["data"]
    assert len(months) == 24


def test_postponed_status_is_not_accepted_from_clients(client):
    _, slot_id = _create_class(client)

    resp = client.post("/api/attendance", json={"slot_id": slot_id, "date": "2024-01-15", "status": "Postponed"})

    assert resp.status_code == 400
    assert client.get("/api/attendance?date=2024-01-15").get_json()["data"] == []


def test_ai_endpoints_without_key(client):
    resp = client.post("/api/ai/timetable", json={"data_uri": "data:image/png;base64,aGVsbG8="})

    assert resp.status_code == 502
    assert client.post("/api/ai/weekly-debrief").get_json()["data"] is None
