from __future__ import annotations

import logging

from flask import Flask, request

from ..common.responses import fail, json_body, ok
from ..core.exceptions import ValidationError
from ..container import Container

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    @app.route("/api/settings", methods=["GET"], endpoint="view_settings")
    def view_settings():
        return ok(container.settings_service.view())

    @app.route("/api/settings", methods=["PUT"], endpoint="update_settings")
    def update_settings():
        try:
            data = json_body()
            if "min_attendance_percentage" in data:
                container.settings_service.set_min_attendance(data["min_attendance_percentage"])
            if "user_name" in data:
                container.settings_service.set_user_name(data["user_name"])
            return ok(container.settings_service.view())
        except ValidationError as e:
            return fail(str(e))

    @app.route("/api/holidays", methods=["POST"], endpoint="add_holiday")
    def add_holiday():
        try:
            container.settings_service.add_holiday(json_body().get("date"))
            return ok(container.settings_service.view()["holidays"], 201)
        except ValidationError as e:
            return fail(str(e))

    @app.route("/api/holidays/<day>", methods=["DELETE"], endpoint="remove_holiday")
    def remove_holiday(day: str):
        try:
            container.settings_service.remove_holiday(day)
            return ok(container.settings_service.view()["holidays"])
        except ValidationError as e:
            return fail(str(e))

    @app.route("/api/historical", methods=["PUT"], endpoint="save_historical")
    def save_historical():
        try:
            data = json_body()
            rows = data.get("records")
            if not isinstance(rows, list) or not all(isinstance(r, dict) for r in rows):
                raise ValidationError("records must be a list of objects")
            container.settings_service.save_historical_data(start_date=data.get("tracking_start_date"), rows=rows)
            return ok(container.settings_service.view())
        except ValidationError as e:
            return fail(str(e))

    @app.route("/api/historical", methods=["DELETE"], endpoint="clear_historical")
    def clear_historical():
        container.settings_service.clear_historical_data()
        return ok()

    @app.route("/api/backup", methods=["GET"], endpoint="export_backup")
    def export_backup():
        return ok(container.backup_service.export())

    @app.route("/api/backup", methods=["POST"], endpoint="import_backup")
    def import_backup():
        try:
            container.backup_service.restore(request.get_json(silent=True))
            logger.info("Backup restored, all previous data replaced")
            return ok()
        except ValidationError as e:
            return fail(str(e))

    @app.route("/api/sync-status", methods=["GET"], endpoint="sync_status")
    def sync_status():
        return ok({"status": container.sync_service.status.value, "last_error": container.sync_service.last_error})
