from __future__ import annotations

import logging
from functools import wraps

from flask import Flask, jsonify, session

from ..core.enums import Role
from ..core.exceptions import (
    AccessDeniedError,
    AuthenticationError,
    DomainError,
    DuplicateRecordError,
    InvalidDurationError,
    NoActiveCheckInError,
    ValidationError,
)
from ..users.model import CallerContext

logger = logging.getLogger(__name__)

_STATUS_BY_ERROR = (
    (ValidationError, 400),
    (AuthenticationError, 401),
    (AccessDeniedError, 403),
    (DuplicateRecordError, 409),
    (NoActiveCheckInError, 409),
    (InvalidDurationError, 422),
)


def http_status_for(error: DomainError) -> int:
    for cls, code in _STATUS_BY_ERROR:
        if isinstance(error, cls):
            return code
    return 400


def error_response(message: str, code: int):
    return jsonify({"success": False, "message": message}), code


def current_caller() -> CallerContext:
    """Build the caller from the session; only the id and role are stored there."""
    return CallerContext(user_id=int(session["user_id"]), role=Role(session["role"]))


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session or "role" not in session:
            return error_response("Please sign in to continue", 401)
        return view(*args, **kwargs)

    return wrapper


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(DomainError)
    def handle_domain_error(e: DomainError):
        return error_response(str(e), http_status_for(e))

    @app.errorhandler(500)
    def handle_unexpected(e):
        original = getattr(e, "original_exception", None) or e
        logger.error("Unhandled error", exc_info=original)
        return error_response("Internal server error", 500)
