from __future__ import annotations

import logging
from datetime import date
from decimal import Decimal
from typing import Any, Mapping, Optional

from flask import Flask, jsonify, request
from werkzeug.exceptions import HTTPException

from ..core.exceptions import (
    AlreadyAssignedError,
    AlreadyExistsError,
    AuthenticationError,
    AuthorizationError,
    DomainError,
    DuplicateLoginError,
    NotFoundError,
    TimeCollisionError,
    ValidationError,
)
from .datetime_utils import parse_iso_date
from .money import format_money, parse_money

logger = logging.getLogger(__name__)

STATUS_BY_ERROR = (
    (ValidationError, 400),
    (AuthenticationError, 401),
    (AuthorizationError, 403),
    (NotFoundError, 404),
    (TimeCollisionError, 409),
    (AlreadyAssignedError, 409),
    (DuplicateLoginError, 409),
    (AlreadyExistsError, 409),
)


def status_for(error: DomainError) -> int:
    for error_type, status in STATUS_BY_ERROR:
        if isinstance(error, error_type):
            return status
    return 400


def error_response(message: str, status: int):
    return jsonify({"success": False, "message": message}), status


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(DomainError)
    def handle_domain_error(e: DomainError):
        status = status_for(e)
        if status == 401:
            response, status = error_response(str(e), status)
            response.headers["WWW-Authenticate"] = 'Basic realm="car-rental"'
            return response, status
        return error_response(str(e), status)

    @app.errorhandler(HTTPException)
    def handle_http_error(e: HTTPException):
        return error_response(e.description or e.name, e.code or 500)

    @app.errorhandler(Exception)
    def handle_unexpected(e: Exception):
        logger.exception("unhandled error on %s %s", request.method, request.path)
        if bool(app.config.get("DEBUG", False)):
            return error_response(f"Internal server error: {e}", 500)
        return error_response("Internal server error", 500)


def json_body() -> Mapping[str, Any]:
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


def field_str(data: Mapping[str, Any], name: str, *, required: bool = True) -> Optional[str]:
    value = data.get(name)
    if value is None:
        if required:
            raise ValidationError(f"{name} is required")
        return None
    if not isinstance(value, str):
        raise ValidationError(f"{name} must be a string")
    return value


def field_int(data: Mapping[str, Any], name: str, *, required: bool = True) -> Optional[int]:
    value = data.get(name)
    if value is None or value == "":
        if required:
            raise ValidationError(f"{name} is required")
        return None
    if isinstance(value, bool):
        raise ValidationError(f"{name} must be an integer")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{name} must be an integer")


def field_float(data: Mapping[str, Any], name: str) -> float:
    value = data.get(name)
    if value is None or isinstance(value, bool):
        raise ValidationError(f"{name} must be a number")
    try:
        return float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{name} must be a number")


def field_date(data: Mapping[str, Any], name: str) -> date:
    value = data.get(name)
    if not isinstance(value, str):
        raise ValidationError(f"{name} is required (YYYY-MM-DD)")
    return parse_iso_date(value)


def field_money(data: Mapping[str, Any], name: str, *, default: Optional[Decimal] = None) -> Decimal:
    if data.get(name) is None and default is not None:
        return default
    return parse_money(data.get(name), name)


def money(value: Optional[Decimal]) -> Optional[str]:
    return None if value is None else format_money(value)


def iso(value: Optional[date]) -> Optional[str]:
    return None if value is None else value.isoformat()
