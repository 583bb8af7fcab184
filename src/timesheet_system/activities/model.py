from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Dict, Optional, Union

from ..common.validators import optional_int
from ..core.enums import ActivityType
from ..core.exceptions import MissingTypeError, ValidationError

PagesValue = Union[int, str, None]


def pages_between(start_page: Optional[int], end_page: Optional[int]) -> Optional[int]:
    """Inclusive page count, never negative. None unless both bounds are known."""
    if start_page is None or end_page is None:
        return None
    return max(0, end_page - start_page + 1)


def parse_activity_type(value: Any) -> ActivityType:
    if isinstance(value, ActivityType):
        return value
    if value is None or not str(value).strip():
        raise MissingTypeError("Please select an activity type")
    try:
        return ActivityType(str(value).strip().lower())
    except ValueError:
        raise ValidationError(f"Unknown activity type {value!r}")


@dataclass(frozen=True)
class ActivityCell:
    """Thực thể miền (domain): hoạt động của một nhân viên trong một ô thời gian.

    pages_done keeps the value as stored; rows written by older clients may hold
    free text there, so readers must parse it leniently.
    """

    type: ActivityType
    description: str = ""
    start_page: Optional[int] = None
    end_page: Optional[int] = None
    pages_done: PagesValue = None
    timestamp: Optional[str] = None

    @classmethod
    def build(
        cls,
        *,
        activity_type: ActivityType,
        description: str = "",
        start_page: Optional[int] = None,
        end_page: Optional[int] = None,
        timestamp: Optional[str] = None,
    ) -> "ActivityCell":
        traits = activity_type.traits
        description = (description or "").strip()
        if traits.fixed_description is not None:
            description = traits.fixed_description

        if not traits.requires_page_range:
            return cls(type=activity_type, description=description, timestamp=timestamp)

        pages_done = pages_between(start_page, end_page)
        if pages_done is None:
            return cls(type=activity_type, description=description, timestamp=timestamp)

        if "Pages:" not in description:
            description += f" (Pages: {start_page} - {end_page}, Total: {pages_done})"
        return cls(
            type=activity_type,
            description=description,
            start_page=start_page,
            end_page=end_page,
            pages_done=pages_done,
            timestamp=timestamp,
        )

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "ActivityCell":
        """Cell from a raw REST body (camelCase keys), stored as given."""
        activity_type = parse_activity_type(payload.get("type"))
        start_page = optional_int(payload.get("startPage"), "startPage")
        end_page = optional_int(payload.get("endPage"), "endPage")
        pages_done = payload.get("pagesDone")
        if not activity_type.is_paginated:
            start_page = end_page = pages_done = None
        elif pages_done is None:
            pages_done = pages_between(start_page, end_page)
        return cls(
            type=activity_type,
            description=str(payload.get("description") or ""),
            start_page=start_page,
            end_page=end_page,
            pages_done=pages_done,
            timestamp=payload.get("timestamp"),
        )

    def stamped(self, timestamp: str) -> "ActivityCell":
        return replace(self, timestamp=timestamp)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "type": self.type.value,
            "description": self.description,
            "timestamp": self.timestamp,
        }
        if self.type.is_paginated:
            data["startPage"] = self.start_page
            data["endPage"] = self.end_page
            data["pagesDone"] = self.pages_done
        return data


@dataclass(frozen=True)
class ActivityKey:
    date_key: str
    employee_id: str
    time_slot: str


# date_key -> employee_id -> time_slot -> ActivityCell
DayActivityMap = Dict[str, Dict[str, Dict[str, ActivityCell]]]


def activity_map_to_dict(activities: DayActivityMap) -> Dict[str, Any]:
    return {
        date_key: {
            employee_id: {slot: cell.to_dict() for slot, cell in slots.items()}
            for employee_id, slots in employees.items()
        }
        for date_key, employees in activities.items()
    }
