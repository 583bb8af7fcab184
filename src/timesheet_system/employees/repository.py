from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import Role
from .model import Employee


class EmployeeRepository(Protocol):
    """Giao diện repository cho Employee.

    Lưu ý (DIP): tầng service phụ thuộc vào interface này, không phụ thuộc trực tiếp DB cụ thể.
    """

    def list_all(self) -> Sequence[Employee]:
        """Ordered by name; equal names keep insertion order."""

        raise NotImplementedError

    def get_by_id(self, employee_id: str) -> Optional[Employee]:
        raise NotImplementedError

    def get_by_name(self, name: str) -> Optional[Employee]:
        raise NotImplementedError

    def save(
        self,
        employee: Employee,
        *,
        username: Optional[str] = None,
        password_hash: Optional[str] = None,
        role: Optional[Role] = None,
    ) -> Employee:
        """Upsert by id in one transaction, optionally creating/updating the login.

        Raises ConflictError when another employee already has the same name.
        """

        raise NotImplementedError

    def insert_if_absent(self, employee: Employee) -> bool:
        raise NotImplementedError

    def delete_cascade(self, employee_id: str) -> int:
        """Archive and delete the employee's activities, then the employee.

        Returns the number of removed activity rows.
        """

        raise NotImplementedError
