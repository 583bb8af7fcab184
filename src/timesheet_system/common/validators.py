from __future__ import annotations

from datetime import datetime

from ..core.constants import DATE_KEY_FORMAT
from ..core.exceptions import ValidationError


def require_non_empty(value: str | None, field_name: str) -> str:
    if value is None or not str(value).strip():
        raise ValidationError(f"{field_name} is required")
    return str(value).strip()


def require_date_key(value: str | None) -> str:
    """Validate a YYYY-MM-DD date key and return it unchanged."""
    v = require_non_empty(value, "dateKey")
    try:
        datetime.strptime(v, DATE_KEY_FORMAT)
    except ValueError:
        raise ValidationError(f"Invalid dateKey {v!r} (expected YYYY-MM-DD)")
    return v


def optional_int(value, field_name: str) -> int | None:
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be a number")
