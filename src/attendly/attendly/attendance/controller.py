from __future__ import annotations

from flask import Flask, request

from ..common.datetime_utils import format_iso_date
from ..common.responses import fail, json_body, ok
from ..core.exceptions import ValidationError
from ..container import Container
from .model import AttendanceRecord


def record_to_dict(r: AttendanceRecord) -> dict:
    return {
        "id": r.legacy_id,
        "slot_id": r.slot_id,
        "date": format_iso_date(r.date),
        "status": r.status.value,
        "credits": r.credits,
    }


def register(app: Flask, container: Container) -> None:
    @app.route("/api/attendance", methods=["GET"], endpoint="list_attendance")
    def list_attendance():
        try:
            records = container.attendance_service.records_on(request.args.get("date"))
            return ok([record_to_dict(r) for r in records])
        except ValidationError as e:
            return fail(str(e))

    @app.route("/api/attendance", methods=["POST"], endpoint="log_attendance")
    def log_attendance():
        try:
            data = json_body()
            accepted = container.attendance_service.log(
                slot_id=data.get("slot_id", ""),
                on_date=data.get("date"),
                status=data.get("status", ""),
            )
        except ValidationError as e:
            return fail(str(e))

        if not accepted:
            return fail("Attendance cannot be logged before the tracking start date", 409)
        return ok()

    @app.route("/api/attendance", methods=["DELETE"], endpoint="clear_attendance")
    def clear_attendance():
        try:
            data = json_body()
            container.attendance_service.clear(slot_id=data.get("slot_id", ""), on_date=data.get("date"))
            return ok()
        except ValidationError as e:
            return fail(str(e))
