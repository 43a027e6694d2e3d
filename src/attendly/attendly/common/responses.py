from __future__ import annotations

from typing import Any

from flask import jsonify, request

from ..core.exceptions import ValidationError


def ok(data: Any = None, status: int = 200):
    return jsonify({"success": True, "data": data}), status


def fail(message: str, status: int = 400):
    return jsonify({"success": False, "message": message}), status


def json_body() -> dict:
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data
