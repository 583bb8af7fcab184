from __future__ import annotations

from typing import Optional

from .model import ActivityCell, ActivityKey, DayActivityMap
from .repository import ActivityStore


class InMemoryActivityStore(ActivityStore):
    """Dict-backed store for tests and for running without MySQL."""

    def __init__(self):
        self._cells: dict[ActivityKey, ActivityCell] = {}
        self.archived: list[tuple[ActivityKey, ActivityCell]] = []

    def get(self, date_key: str, employee_id: str, time_slot: str) -> Optional[ActivityCell]:
        return self._cells.get(ActivityKey(date_key, employee_id, time_slot))

    def set(self, date_key: str, employee_id: str, time_slot: str, cell: ActivityCell) -> bool:
        self._cells[ActivityKey(date_key, employee_id, time_slot)] = cell
        return True

    def delete(self, date_key: str, employee_id: str, time_slot: str) -> bool:
        key = ActivityKey(date_key, employee_id, time_slot)
        cell = self._cells.pop(key, None)
        if cell is None:
            return False
        self.archived.append((key, cell))
        return True

    def delete_for_employee(self, employee_id: str) -> int:
        keys = [k for k in self._cells if k.employee_id == employee_id]
        for k in keys:
            self.archived.append((k, self._cells.pop(k)))
        return len(keys)

    def list_for_date(self, date_key: str) -> DayActivityMap:
        return self._group(k for k in self._cells if k.date_key == date_key)

    def list_all(self) -> DayActivityMap:
        return self._group(self._cells)

    def _group(self, keys) -> DayActivityMap:
        out: DayActivityMap = {}
        for k in keys:
            out.setdefault(k.date_key, {}).setdefault(k.employee_id, {})[k.time_slot] = self._cells[k]
        return out
