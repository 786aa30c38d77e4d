from __future__ import annotations

import logging
from datetime import date
from functools import wraps
from typing import Any, Optional

from flask import Flask, jsonify, request, session
from werkzeug.exceptions import HTTPException

from ..core.enums import Role
from ..core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    DeviceMismatchError,
    DomainError,
    LocationError,
    NotFoundError,
    SystemCategoryError,
    ValidationError,
)
from .datetime_utils import parse_iso_date

logger = logging.getLogger(__name__)

_STATUS_BY_ERROR = (
    (AuthenticationError, 401),
    (AuthorizationError, 403),
    (DeviceMismatchError, 403),
    (SystemCategoryError, 403),
    (NotFoundError, 404),
    (LocationError, 400),
    (ValidationError, 400),
)


def error_response(message: str, status: int):
    return jsonify({"success": False, "message": message}), status


def status_for(error: DomainError) -> int:
    for error_type, status in _STATUS_BY_ERROR:
        if isinstance(error, error_type):
            return status
    return 400


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(DomainError)
    def handle_domain_error(error: DomainError):
        return error_response(str(error), status_for(error))

    @app.errorhandler(404)
    def handle_not_found(_error):
        return error_response("Not found", 404)

    @app.errorhandler(405)
    def handle_method_not_allowed(_error):
        return error_response("Method not allowed", 405)

    @app.errorhandler(Exception)
    def handle_unexpected(error: Exception):
        if isinstance(error, HTTPException):
            return error_response(error.description or error.name, error.code or 500)
        logger.exception("Unhandled error on %s %s", request.method, request.path)
        if bool(app.config.get("DEBUG", False)):
            return error_response(f"Internal error: {error}", 500)
        return error_response("Internal server error", 500)


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return error_response("Please log in to continue", 401)
        return view(*args, **kwargs)

    return wrapper


def _role_required(role: Role):
    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            if "user_id" not in session:
                return error_response("Please log in to continue", 401)
            if session.get("role") != role.value:
                return error_response("You do not have access to this page", 403)
            return view(*args, **kwargs)

        return wrapper

    return decorator


teacher_required = _role_required(Role.TEACHER)
student_required = _role_required(Role.STUDENT)


def json_body() -> dict:
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


def optional_date(value: Any, field: str = "date") -> Optional[date]:
    if value in (None, ""):
        return None
    try:
        return parse_iso_date(str(value))
    except ValueError:
        raise ValidationError(f"Invalid {field}, expected YYYY-MM-DD")


def optional_float(value: Any, field: str) -> Optional[float]:
    if value in (None, ""):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field} must be a number")


def csv_response(app: Flask, *, content: str, filename: str):
    return app.response_class(
        content.encode("utf-8-sig"),
        mimetype="text/csv",
        headers={"Content-Disposition": f"attachment; filename={filename}"},
    )


def ok(payload: Optional[dict] = None, status: int = 200):
    body = {"success": True}
    if payload:
        body.update(payload)
    return jsonify(body), status


def optional_int(value: Any, field: str) -> Optional[int]:
    if value in (None, ""):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field} must be a whole number")
