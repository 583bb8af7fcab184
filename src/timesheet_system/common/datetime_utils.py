from __future__ import annotations

from datetime import date, datetime, timezone

from ..core.constants import DATE_KEY_FORMAT


def to_date_key(value: date) -> str:
    """Format a date as the canonical YYYY-MM-DD key."""
    return value.strftime(DATE_KEY_FORMAT)


def now_iso() -> str:
    """Current UTC instant as ISO-8601 text.

    Note: Wrapped so tests can patch it.
    """
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")
