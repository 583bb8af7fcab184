from __future__ import annotations

import logging
import uuid
from typing import Optional, Sequence

from werkzeug.security import generate_password_hash

from ..common.datetime_utils import now_iso
from ..common.validators import require_non_empty
from ..core.exceptions import AuthorizationError, NotFoundError
from ..users.model import CurrentUser, role_for_username
from .model import Employee
from .repository import EmployeeRepository

logger = logging.getLogger(__name__)


def new_employee_id() -> str:
    return uuid.uuid4().hex


def visible_employees(roster: Sequence[Employee], current_user: Optional[CurrentUser]) -> list[Employee]:
    """Admins see the whole roster; employees see only their own row."""
    if current_user is None:
        return []
    if current_user.is_admin:
        return list(roster)
    return [
        e
        for e in roster
        if (current_user.employee_id and e.id == current_user.employee_id) or e.name == current_user.username
    ]


class EmployeeService:
    """Use case: manage the employee roster."""

    def __init__(self, employees: EmployeeRepository):
        self._employees = employees

    def list_roster(self) -> Sequence[Employee]:
        return self._employees.list_all()

    def get(self, employee_id: str) -> Employee:
        employee = self._employees.get_by_id(employee_id)
        if not employee:
            raise NotFoundError(f"Employee {employee_id!r} not found")
        return employee

    def save_employee(
        self,
        *,
        name: str,
        employee_id: Optional[str] = None,
        email: str = "",
        created_at: Optional[str] = None,
        username: Optional[str] = None,
        password: Optional[str] = None,
    ) -> Employee:
        """Create or update an employee, optionally bundling login credentials."""
        employee = Employee(
            id=(employee_id or "").strip() or new_employee_id(),
            name=require_non_empty(name, "Employee name"),
            email=(email or "").strip(),
            created_at=created_at or now_iso(),
        )

        username = (username or "").strip() or None
        if username and password:
            return self._employees.save(
                employee,
                username=username,
                password_hash=generate_password_hash(password),
                role=role_for_username(username),
            )
        return self._employees.save(employee)

    def delete_employee(self, employee_id: str, *, current_user: Optional[CurrentUser] = None) -> int:
        if current_user is not None and not current_user.is_admin:
            raise AuthorizationError("Only admins can delete employees")
        removed = self._employees.delete_cascade(employee_id)
        logger.info("Deleted employee %s (%d activities archived)", employee_id, removed)
        return removed
