from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Role(str, Enum):
    """Vai trò người dùng dùng cho phân quyền."""

    ADMIN = "admin"
    EMPLOYEE = "employee"


class ActivityType(str, Enum):
    """Loại hoạt động trong một ô thời gian (closed set)."""

    WORK = "work"
    BREAK = "break"
    LUNCH = "lunch"
    MEETING = "meeting"
    PROOF = "proof"
    EPUB = "epub"
    CALIBR = "calibr"
    LEAVE = "leave"
    PERMISSION = "permission"

    @property
    def traits(self) -> "ActivityTraits":
        return ACTIVITY_TRAITS[self]

    @property
    def is_paginated(self) -> bool:
        return self.traits.requires_page_range


class LogAction(str, Enum):
    UPDATED = "updated"
    CLEARED = "cleared"
    ADDED = "added"


@dataclass(frozen=True)
class ActivityTraits:
    requires_description: bool
    requires_page_range: bool
    contributes_to_totals: bool
    # Literal description stored instead of user input (break/lunch).
    fixed_description: str | None = None


ACTIVITY_TRAITS: dict[ActivityType, ActivityTraits] = {
    ActivityType.WORK: ActivityTraits(True, False, False),
    ActivityType.BREAK: ActivityTraits(False, False, False, fixed_description="BREAK"),
    ActivityType.LUNCH: ActivityTraits(False, False, False, fixed_description="LUNCH"),
    ActivityType.MEETING: ActivityTraits(True, False, False),
    ActivityType.PROOF: ActivityTraits(False, True, True),
    ActivityType.EPUB: ActivityTraits(False, True, True),
    ActivityType.CALIBR: ActivityTraits(False, True, True),
    ActivityType.LEAVE: ActivityTraits(False, False, False),
    ActivityType.PERMISSION: ActivityTraits(True, False, False),
}
