"""Shared helpers for the thin Flask controllers.

The session (``user_id``, ``role``) is issued by the authentication layer; the
controllers only read it.
"""

from __future__ import annotations

import logging
from functools import wraps
from typing import Any, Optional

from flask import jsonify, request, session

from ..core.enums import Role
from ..core.exceptions import (
    AuthorizationError,
    ConflictError,
    DomainError,
    InfrastructureError,
    NotFoundError,
    ValidationError,
)

logger = logging.getLogger(__name__)

_STATUS_BY_FAMILY = (
    (NotFoundError, 404),
    (ConflictError, 409),
    (AuthorizationError, 403),
    (ValidationError, 400),
)


def status_for(error: DomainError) -> int:
    for family, status in _STATUS_BY_FAMILY:
        if isinstance(error, family):
            return status
    return 400


def error_response(error: DomainError):
    return jsonify(error.to_dict()), status_for(error)


def server_error(action: str, error: Exception):
    if isinstance(error, InfrastructureError):
        logger.error("%s failed: %s", action, error)
    else:
        logger.exception("%s failed", action)
    return jsonify({"error": "server_error", "message": "Server error"}), 500


def current_actor_id() -> int:
    return int(session["user_id"])


def role_required(role: Role):
    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            if "user_id" not in session:
                return jsonify({"error": "unauthorized", "message": "Please log in to continue"}), 401
            if session.get("role") != role.value:
                return jsonify({"error": "forbidden", "message": "Access denied"}), 403
            return view(*args, **kwargs)

        return wrapper

    return decorator


def json_body() -> dict:
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


def optional_float(data: dict, key: str) -> Optional[float]:
    value: Any = data.get(key)
    if value is None or value == "":
        return None
    if isinstance(value, bool):
        raise ValidationError(f"{key} must be numeric", field=key)
    try:
        return float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{key} must be numeric", field=key) from None


def optional_str(data: dict, key: str) -> Optional[str]:
    value = data.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValidationError(f"{key} must be a string", field=key)
    return value


def optional_bool(data: dict, key: str) -> Optional[bool]:
    value = data.get(key)
    if value is None:
        return None
    if not isinstance(value, bool):
        raise ValidationError(f"{key} must be a boolean", field=key)
    return value


def query_limit() -> Optional[int]:
    raw = request.args.get("limit")
    if not raw:
        return None
    try:
        limit = int(raw)
    except ValueError:
        raise ValidationError("limit must be an integer", field="limit") from None
    if limit <= 0:
        raise ValidationError("limit must be positive", field="limit")
    return limit
