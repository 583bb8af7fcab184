from __future__ import annotations

import logging
import re
from typing import Optional

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.datetime_utils import now_iso
from ..common.validators import require_non_empty
from ..core.enums import Role
from ..core.exceptions import AuthenticationError
from ..employees.model import Employee
from ..employees.repository import EmployeeRepository
from .model import CurrentUser, role_for_username
from .repository import UserRepository

logger = logging.getLogger(__name__)


def employee_id_for_username(username: str) -> str:
    return re.sub(r"\s+", "-", username.strip().lower())


class AuthService:
    """Use case: register and log in against the user store."""

    def __init__(self, users: UserRepository, employees: EmployeeRepository):
        self._users = users
        self._employees = employees

    def register(self, username: str, password: str) -> CurrentUser:
        username = require_non_empty(username, "Username")
        require_non_empty(password, "Password")

        user_id = self._users.create_user(
            username=username,
            password_hash=generate_password_hash(password),
            role=Role.EMPLOYEE,
        )
        return CurrentUser(user_id=user_id, username=username, role=Role.EMPLOYEE)

    def authenticate(self, username: str, password: str) -> CurrentUser:
        user = self._users.get_by_username((username or "").strip())
        if not user:
            raise AuthenticationError("Invalid credentials")

        try:
            ok = check_password_hash(user.password_hash, password or "")
        except ValueError:
            # e.g. placeholder hashes like 'CHANGE_ME' or corrupted values
            ok = False
        if not ok:
            raise AuthenticationError("Invalid credentials")

        role = role_for_username(user.username)
        if user.role != role:
            self._users.set_role(user.user_id, role)

        employee_id: Optional[str] = None
        if role == Role.EMPLOYEE:
            employee_id = self._link_employee(user.username)

        return CurrentUser(user_id=user.user_id, username=user.username, role=role, employee_id=employee_id)

    def _link_employee(self, username: str) -> str:
        existing = self._employees.get_by_name(username)
        if existing:
            return existing.id

        employee = Employee(id=employee_id_for_username(username), name=username, created_at=now_iso())
        if self._employees.insert_if_absent(employee):
            logger.info("Created employee %r for login %r", employee.id, username)
        return employee.id
