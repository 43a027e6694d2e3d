from __future__ import annotations

import logging

from flask import Flask

from ..common.responses import fail, json_body, ok
from ..core.exceptions import ValidationError
from ..container import Container
from ..timetable.controller import one_off_to_dict

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    @app.route("/api/reschedule", methods=["POST"], endpoint="reschedule_class")
    def reschedule_class():
        try:
            data = json_body()
            one_off = container.reschedule_service.reschedule(
                slot_id=data.get("slot_id", ""),
                original_date=data.get("original_date"),
                new_date=data.get("new_date"),
                new_start=data.get("new_start_time"),
                new_end=data.get("new_end_time"),
            )
        except ValidationError as e:
            return fail(str(e))

        if one_off is None:
            return fail("Classes before the tracking start date cannot be rescheduled", 409)
        return ok(one_off_to_dict(one_off), 201)

    @app.route("/api/one-off-slots/<one_off_id>/undo", methods=["POST"], endpoint="undo_postpone")
    def undo_postpone(one_off_id: str):
        try:
            container.reschedule_service.undo(one_off_id=one_off_id)
            return ok()
        except ValidationError as e:
            return fail(str(e))

    @app.route("/api/one-off-slots/<one_off_id>", methods=["DELETE"], endpoint="delete_one_off_slot")
    def delete_one_off_slot(one_off_id: str):
        try:
            container.reschedule_service.delete(one_off_id=one_off_id)
            return ok()
        except ValidationError as e:
            logger.info("Delete of one-off %s refused: %s", one_off_id, e)
            return fail(str(e), 404)
