from __future__ import annotations

from flask import Flask

from ..common.datetime_utils import format_hhmm, format_iso_date
from ..common.responses import fail, json_body, ok
from ..common.validators import require_date, require_day, require_non_empty, require_time, require_time_range
from ..core.exceptions import ValidationError
from ..container import Container
from .model import ExtractedSlot, OneOffSlot, TimeSlot


def time_slot_to_dict(s: TimeSlot) -> dict:
    return {
        "id": s.id,
        "day": s.day.value,
        "start_time": format_hhmm(s.start_time),
        "end_time": format_hhmm(s.end_time),
        "subject_id": s.subject_id,
    }


def one_off_to_dict(s: OneOffSlot) -> dict:
    return {
        "id": s.id,
        "date": format_iso_date(s.date),
        "start_time": format_hhmm(s.start_time),
        "end_time": format_hhmm(s.end_time),
        "subject_id": s.subject_id,
        "original_slot_id": s.original_slot_id,
        "original_date": format_iso_date(s.original_date) if s.original_date else None,
    }


def extracted_slot_to_dict(s: ExtractedSlot) -> dict:
    return {
        "day": s.day.value,
        "start_time": format_hhmm(s.start_time),
        "end_time": format_hhmm(s.end_time),
        "subject_name": s.subject_name,
    }


def extracted_slot_from_dict(data: dict) -> ExtractedSlot:
    if not isinstance(data, dict):
        raise ValidationError("Each imported slot must be an object")
    start = require_time(data.get("start_time"), "Start time")
    end = require_time(data.get("end_time"), "End time")
    require_time_range(start, end)
    return ExtractedSlot(
        day=require_day(data.get("day")),
        start_time=start,
        end_time=end,
        subject_name=require_non_empty(data.get("subject_name", ""), "Subject name"),
    )


def register(app: Flask, container: Container) -> None:
    @app.route("/api/timetable", methods=["GET"], endpoint="list_timetable")
    def list_timetable():
        return ok([time_slot_to_dict(s) for s in container.timetable_service.list_slots()])

    @app.route("/api/timetable", methods=["POST"], endpoint="create_time_slot")
    def create_time_slot():
        try:
            data = json_body()
            slot = container.timetable_service.add_slot(
                day=data.get("day", ""),
                start_time=data.get("start_time"),
                end_time=data.get("end_time"),
                subject_id=data.get("subject_id", ""),
            )
            return ok(time_slot_to_dict(slot), 201)
        except ValidationError as e:
            return fail(str(e))

    @app.route("/api/timetable/<slot_id>", methods=["PUT"], endpoint="update_time_slot")
    def update_time_slot(slot_id: str):
        try:
            data = json_body()
            slot = container.timetable_service.update_slot(
                slot_id=slot_id,
                day=data.get("day", ""),
                start_time=data.get("start_time"),
                end_time=data.get("end_time"),
                subject_id=data.get("subject_id", ""),
            )
            return ok(time_slot_to_dict(slot))
        except ValidationError as e:
            return fail(str(e))

    @app.route("/api/timetable/<slot_id>", methods=["DELETE"], endpoint="delete_time_slot")
    def delete_time_slot(slot_id: str):
        try:
            container.timetable_service.delete_slot(slot_id=slot_id)
            return ok()
        except ValidationError as e:
            return fail(str(e), 404)

    @app.route("/api/timetable", methods=["DELETE"], endpoint="clear_timetable")
    def clear_timetable():
        container.timetable_service.clear()
        return ok()

    @app.route("/api/timetable/import", methods=["POST"], endpoint="import_timetable")
    def import_timetable():
        try:
            data = json_body()
            rows = data.get("slots")
            if not isinstance(rows, list):
                raise ValidationError("slots must be a list")
            added = container.timetable_service.import_extracted([extracted_slot_from_dict(r) for r in rows])
            return ok({"added": added})
        except ValidationError as e:
            return fail(str(e))

    @app.route("/api/one-off-slots", methods=["GET"], endpoint="list_one_off_slots")
    def list_one_off_slots():
        slots = sorted(container.store.state.one_off_slots, key=lambda s: (s.date, s.start_time))
        return ok([one_off_to_dict(s) for s in slots])

    @app.route("/api/one-off-slots", methods=["POST"], endpoint="create_one_off_slot")
    def create_one_off_slot():
        try:
            data = json_body()
            slot = container.timetable_service.add_one_off(
                on_date=data.get("date"),
                start_time=data.get("start_time"),
                end_time=data.get("end_time"),
                subject_id=data.get("subject_id", ""),
            )
            return ok(one_off_to_dict(slot), 201)
        except ValidationError as e:
            return fail(str(e))

    @app.route("/api/schedule/<day>", methods=["GET"], endpoint="schedule_for_date")
    def schedule_for_date(day: str):
        try:
            return ok(container.timetable_service.schedule_for(require_date(day)))
        except ValidationError as e:
            return fail(str(e))
