from __future__ import annotations

import logging

from flask import Flask

from ..common.responses import fail, json_body, ok
from ..core.exceptions import ValidationError
from ..container import Container
from .model import Subject

logger = logging.getLogger(__name__)


def subject_to_dict(s: Subject) -> dict:
    return {"id": s.id, "name": s.name, "type": s.type.value, "credits": s.credits}


def register(app: Flask, container: Container) -> None:
    @app.route("/api/subjects", methods=["GET"], endpoint="list_subjects")
    def list_subjects():
        return ok([subject_to_dict(s) for s in container.subject_service.list()])

    @app.route("/api/subjects", methods=["POST"], endpoint="create_subject")
    def create_subject():
        try:
            data = json_body()
            subject = container.subject_service.add(
                name=data.get("name", ""),
                subject_type=data.get("type", ""),
                credits=data.get("credits"),
            )
            return ok(subject_to_dict(subject), 201)
        except ValidationError as e:
            return fail(str(e))

    @app.route("/api/subjects/<subject_id>", methods=["PUT"], endpoint="update_subject")
    def update_subject(subject_id: str):
        try:
            data = json_body()
            subject = container.subject_service.update(
                subject_id=subject_id,
                name=data.get("name", ""),
                subject_type=data.get("type", ""),
                credits=data.get("credits"),
            )
            return ok(subject_to_dict(subject))
        except ValidationError as e:
            return fail(str(e))

    @app.route("/api/subjects/<subject_id>", methods=["DELETE"], endpoint="delete_subject")
    def delete_subject(subject_id: str):
        try:
            container.subject_service.delete(subject_id=subject_id)
            logger.info("Deleted subject %s with its slots and records", subject_id)
            return ok()
        except ValidationError as e:
            return fail(str(e), 404)
