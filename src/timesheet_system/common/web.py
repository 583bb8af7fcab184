from __future__ import annotations

import logging
from functools import wraps
from typing import Any, Dict, Optional

from flask import jsonify, request, session

from ..core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    ConnectivityError,
    DomainError,
    NotFoundError,
    ValidationError,
)
from ..users.model import CurrentUser

logger = logging.getLogger(__name__)

_STATUS_BY_ERROR = (
    (ValidationError, 400),
    (ConflictError, 400),
    (AuthenticationError, 401),
    (AuthorizationError, 403),
    (NotFoundError, 404),
    (ConnectivityError, 503),
)


def status_for(error: DomainError) -> int:
    for error_type, status in _STATUS_BY_ERROR:
        if isinstance(error, error_type):
            return status
    return 400


def error_response(error: Exception):
    """JSON error body with the status mapped from the domain error type."""
    if isinstance(error, DomainError):
        return jsonify({"error": str(error)}), status_for(error)
    logger.exception("Unexpected error on %s %s", request.method, request.path)
    return jsonify({"error": "Internal server error"}), 500


def json_body() -> Dict[str, Any]:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def current_user() -> Optional[CurrentUser]:
    data = session.get("user")
    if not data:
        return None
    return CurrentUser.from_dict(data)


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if current_user() is None:
            return jsonify({"error": "Please log in to continue"}), 401
        return view(*args, **kwargs)

    return wrapper


def admin_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        user = current_user()
        if user is None:
            return jsonify({"error": "Please log in to continue"}), 401
        if not user.is_admin:
            return jsonify({"error": "Admin access required"}), 403
        return view(*args, **kwargs)

    return wrapper


def ensure_can_edit(user: Optional[CurrentUser], employee_id: str) -> None:
    """Admins edit any row; employees only their own."""
    if user is None:
        raise AuthenticationError("Please log in to continue")
    if user.is_admin or user.employee_id == employee_id:
        return
    raise AuthorizationError("You can only edit your own timesheet")
