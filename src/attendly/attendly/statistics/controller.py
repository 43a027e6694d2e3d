from __future__ import annotations

from flask import Flask, request

from ..common.responses import fail, ok
from ..common.validators import require_date
from ..core.exceptions import ValidationError
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/stats", methods=["GET"], endpoint="stats_overview")
    def stats_overview():
        return ok(container.statistics_service.overview())

    @app.route("/api/stats/subjects", methods=["GET"], endpoint="stats_by_subject")
    def stats_by_subject():
        return ok(container.statistics_service.by_subject())

    @app.route("/api/calendar", methods=["GET"], endpoint="calendar_view")
    def calendar_view():
        try:
            start_s = request.args.get("start")
            end_s = request.args.get("end")
            start = require_date(start_s, "Start date") if start_s else None
            end = require_date(end_s, "End date") if end_s else None
            return ok(container.statistics_service.calendar(start=start, end=end))
        except ValidationError as e:
            return fail(str(e))
