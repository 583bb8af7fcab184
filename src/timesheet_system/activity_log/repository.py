from __future__ import annotations

from typing import Protocol, Sequence

from .model import ActivityLogEntry


class ActivityLogRepository(Protocol):
    def append(self, entry: ActivityLogEntry) -> int:
        raise NotImplementedError

    def list_recent(self, limit: int) -> Sequence[ActivityLogEntry]:
        """Newest first."""

        raise NotImplementedError

    def clear(self) -> int:
        raise NotImplementedError
