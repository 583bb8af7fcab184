from __future__ import annotations

from dataclasses import replace
from typing import Sequence

from ..common.datetime_utils import now_iso
from .model import ActivityLogEntry
from .repository import ActivityLogRepository


class InMemoryActivityLogRepository(ActivityLogRepository):
    def __init__(self):
        self._entries: list[ActivityLogEntry] = []
        self._next_id = 1

    def append(self, entry: ActivityLogEntry) -> int:
        entry_id = self._next_id
        self._next_id += 1
        self._entries.append(replace(entry, id=entry_id, created_at=now_iso()))
        return entry_id

    def list_recent(self, limit: int) -> Sequence[ActivityLogEntry]:
        return list(reversed(self._entries))[: int(limit)]

    def clear(self) -> int:
        count = len(self._entries)
        self._entries.clear()
        return count
