from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Sequence

from ..common.datetime_utils import now_iso
from ..common.validators import require_non_empty
from ..core.constants import DEFAULT_EDITED_BY, DEFAULT_LOG_LIMIT
from ..core.enums import LogAction
from ..core.exceptions import AuthorizationError, ConnectivityError, ValidationError
from ..users.model import CurrentUser
from .model import ActivityLogEntry
from .repository import ActivityLogRepository

logger = logging.getLogger(__name__)


class ActivityLogService:
    """Use case: audit trail of cell writes/clears."""

    def __init__(self, log: ActivityLogRepository, *, default_limit: int = DEFAULT_LOG_LIMIT):
        self._log = log
        self._default_limit = int(default_limit)

    def record(
        self,
        *,
        employee_name: str,
        activity_type: str,
        description: str,
        time_slot: str,
        action: LogAction,
        edited_by: Optional[str] = None,
        date_key: Optional[str] = None,
    ) -> Optional[int]:
        """Append one entry. A failing log write never undoes the cell write it describes."""
        entry = ActivityLogEntry(
            employee_name=employee_name,
            activity_type=activity_type,
            description=description or "",
            time_slot=time_slot,
            action=action,
            edited_by=edited_by or DEFAULT_EDITED_BY,
            timestamp=now_iso(),
            date_key=date_key,
        )
        try:
            return self._log.append(entry)
        except ConnectivityError as e:
            logger.warning("Could not save activity log for %s/%s: %s", employee_name, time_slot, e)
            return None

    def append_from_payload(self, payload: Dict[str, Any]) -> int:
        try:
            action = LogAction(str(payload.get("action") or LogAction.UPDATED.value))
        except ValueError:
            raise ValidationError(f"Unknown log action {payload.get('action')!r}")

        entry = ActivityLogEntry(
            employee_name=require_non_empty(payload.get("employeeName"), "employeeName"),
            activity_type=require_non_empty(payload.get("activityType"), "activityType"),
            description=str(payload.get("description") or ""),
            time_slot=require_non_empty(payload.get("timeSlot"), "timeSlot"),
            action=action,
            edited_by=payload.get("editedBy") or DEFAULT_EDITED_BY,
            timestamp=payload.get("timestamp") or now_iso(),
            date_key=payload.get("dateKey"),
        )
        return self._log.append(entry)

    def list_recent(self, *, current_user: Optional[CurrentUser], limit: Optional[int] = None) -> Sequence[ActivityLogEntry]:
        """Admins see every entry; employees only entries about themselves."""
        limit = int(limit) if limit and int(limit) > 0 else self._default_limit
        entries = self._log.list_recent(limit)
        if current_user is None or current_user.is_admin:
            return entries
        return [e for e in entries if e.employee_name == current_user.username]

    def clear_all(self, *, current_user: Optional[CurrentUser]) -> int:
        if current_user is None or not current_user.is_admin:
            raise AuthorizationError("Only admins can clear the activity history")
        return self._log.clear()
