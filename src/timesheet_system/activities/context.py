from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Optional, Sequence

from ..employees.model import Employee
from ..users.model import CurrentUser
from .model import ActivityCell


@dataclass
class TimesheetContext:
    """Snapshot one operation works against: one date, its cells and the roster.

    Built per request and passed explicitly to every TimesheetService call.
    The service updates `cells` only after the store confirmed a write.
    """

    date_key: str
    cells: Dict[str, Dict[str, ActivityCell]] = field(default_factory=dict)
    roster: Sequence[Employee] = ()
    current_user: Optional[CurrentUser] = None

    def get(self, employee_id: str, time_slot: str) -> Optional[ActivityCell]:
        return self.cells.get(employee_id, {}).get(time_slot)

    def put(self, employee_id: str, time_slot: str, cell: ActivityCell) -> None:
        self.cells.setdefault(employee_id, {})[time_slot] = cell

    def drop(self, employee_id: str, time_slot: str) -> None:
        slots = self.cells.get(employee_id)
        if slots is not None:
            slots.pop(time_slot, None)

    def employee(self, employee_id: str) -> Optional[Employee]:
        for emp in self.roster:
            if emp.id == employee_id:
                return emp
        return None

    @property
    def edited_by(self) -> Optional[str]:
        return self.current_user.username if self.current_user else None
