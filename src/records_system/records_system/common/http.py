"""JSON helpers shared by the feature controllers.

Domain errors become ``{"status": "error", "message": ...}`` responses; the
argument helpers raise ValidationError so bad input surfaces as a 400.
"""
from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Any, Iterable, Mapping, Optional

from flask import Flask, jsonify, request
from werkzeug.exceptions import HTTPException

from ..core.exceptions import ConflictError, DomainError, NotFoundError, ValidationError
from .datetime_utils import parse_iso_date

logger = logging.getLogger(__name__)

_STATUS_BY_ERROR = (
    (ValidationError, 400),
    (NotFoundError, 404),
    (ConflictError, 409),
)


def error_response(message: str, status: int):
    return jsonify({"status": "error", "message": message}), status


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(DomainError)
    def handle_domain_error(exc: DomainError):
        for error_type, status in _STATUS_BY_ERROR:
            if isinstance(exc, error_type):
                return error_response(str(exc), status)
        return error_response(str(exc), 400)

    @app.errorhandler(HTTPException)
    def handle_http_error(exc: HTTPException):
        return error_response(exc.description or exc.name, exc.code or 500)

    @app.errorhandler(Exception)
    def handle_unexpected(exc: Exception):
        logger.error("Unhandled error on %s %s", request.method, request.path, exc_info=exc, extra={"path": request.path})
        return error_response("Internal server error", 500)


def register_cors(app: Flask) -> None:
    @app.after_request
    def add_cors_headers(response):
        origins = app.config.get("CORS_ORIGINS") or ""
        if origins:
            response.headers["Access-Control-Allow-Origin"] = origins
            response.headers["Access-Control-Allow-Methods"] = "GET, POST, PUT, DELETE, OPTIONS"
            response.headers["Access-Control-Allow-Headers"] = "Content-Type"
        return response


def iso(value: Optional[date]) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.isoformat(timespec="seconds")
    return value.isoformat()


def pairs(rows: Iterable[tuple]) -> list[list[Any]]:
    """Group results as ``[[key, value], ...]``."""
    return [list(row) for row in rows]


def json_body() -> Mapping[str, Any]:
    payload = request.get_json(silent=True)
    if not isinstance(payload, dict):
        raise ValidationError("Request body must be a JSON object")
    return payload


def str_arg(name: str, *, required: bool = False) -> Optional[str]:
    value = request.args.get(name)
    if value is None or value == "":
        if required:
            raise ValidationError(f"{name} is required")
        return None
    return value


def int_arg(name: str, *, required: bool = False, default: Optional[int] = None) -> Optional[int]:
    raw = str_arg(name, required=required)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValidationError(f"{name} must be an integer") from None


def date_arg(name: str, *, required: bool = False) -> Optional[date]:
    raw = str_arg(name, required=required)
    if raw is None:
        return None
    return _parse_date(raw, name)


def payload_str(payload: Mapping[str, Any], key: str) -> Optional[str]:
    value = payload.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValidationError(f"{key} must be a string")
    return value


def payload_int(payload: Mapping[str, Any], key: str) -> Optional[int]:
    value = payload.get(key)
    if value is None or value == "":
        return None
    if isinstance(value, bool):
        raise ValidationError(f"{key} must be an integer")
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            pass
    raise ValidationError(f"{key} must be an integer")


def payload_date(payload: Mapping[str, Any], key: str) -> Optional[date]:
    value = payload.get(key)
    if value is None or value == "":
        return None
    if not isinstance(value, str):
        raise ValidationError(f"{key} must be a YYYY-MM-DD string")
    return _parse_date(value, key)


def _parse_date(raw: str, name: str) -> date:
    try:
        return parse_iso_date(raw.strip()[:10])
    except ValueError:
        raise ValidationError(f"{name} must be a YYYY-MM-DD date") from None
