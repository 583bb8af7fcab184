from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

from ..core.enums import LogAction


@dataclass(frozen=True)
class ActivityLogEntry:
    """Bản ghi audit chỉ thêm (append-only) cho mỗi lần ghi/xoá ô hoạt động."""

    employee_name: str
    activity_type: str
    description: str
    time_slot: str
    action: LogAction
    edited_by: str
    timestamp: str
    date_key: Optional[str] = None
    id: Optional[int] = None
    created_at: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "dateKey": self.date_key,
            "employeeName": self.employee_name,
            "activityType": self.activity_type,
            "description": self.description,
            "timeSlot": self.time_slot,
            "action": self.action.value,
            "editedBy": self.edited_by,
            "timestamp": self.timestamp,
            "createdAt": self.created_at,
        }
