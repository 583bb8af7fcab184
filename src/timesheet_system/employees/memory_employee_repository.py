from __future__ import annotations

from typing import Optional, Sequence

from ..activities.memory_activity_repository import InMemoryActivityStore
from ..core.enums import Role
from ..core.exceptions import ConflictError
from ..users.memory_user_repository import InMemoryUserRepository
from .model import Employee
from .repository import EmployeeRepository


class InMemoryEmployeeRepository(EmployeeRepository):
    def __init__(
        self,
        activities: Optional[InMemoryActivityStore] = None,
        users: Optional[InMemoryUserRepository] = None,
    ):
        self._by_id: dict[str, Employee] = {}
        self._activities = activities
        self._users = users

    def list_all(self) -> Sequence[Employee]:
        # dicts keep insertion order and sorted() is stable
        return sorted(self._by_id.values(), key=lambda e: e.name)

    def get_by_id(self, employee_id: str) -> Optional[Employee]:
        return self._by_id.get(employee_id)

    def get_by_name(self, name: str) -> Optional[Employee]:
        return next((e for e in self._by_id.values() if e.name == name), None)

    def save(
        self,
        employee: Employee,
        *,
        username: Optional[str] = None,
        password_hash: Optional[str] = None,
        role: Optional[Role] = None,
    ) -> Employee:
        if any(e.name == employee.name and e.id != employee.id for e in self._by_id.values()):
            raise ConflictError(f'Employee "{employee.name}" already exists')

        existing = self._by_id.get(employee.id)
        if existing:
            employee = Employee(id=existing.id, name=employee.name, email=employee.email, created_at=existing.created_at)
        self._by_id[employee.id] = employee

        if username and password_hash and self._users is not None:
            self._users.upsert(username=username, password_hash=password_hash, role=role or Role.EMPLOYEE)
        return employee

    def insert_if_absent(self, employee: Employee) -> bool:
        if employee.id in self._by_id:
            return False
        self._by_id[employee.id] = employee
        return True

    def delete_cascade(self, employee_id: str) -> int:
        removed = self._activities.delete_for_employee(employee_id) if self._activities else 0
        self._by_id.pop(employee_id, None)
        return removed
