from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

from ..core.enums import Role


@dataclass(frozen=True)
class User:
    """Tài khoản đăng nhập trong user store (không chứa code truy cập DB)."""

    user_id: int
    username: str
    password_hash: str
    role: Role
    created_at: Optional[str] = None


@dataclass(frozen=True)
class CurrentUser:
    """What we store into Flask session after login."""

    user_id: int
    username: str
    role: Role
    employee_id: Optional[str] = None

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.user_id,
            "username": self.username,
            "role": self.role.value,
            "employeeId": self.employee_id,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CurrentUser":
        return cls(
            user_id=int(data["id"]),
            username=str(data["username"]),
            role=Role(data["role"]),
            employee_id=data.get("employeeId"),
        )


def role_for_username(username: str) -> Role:
    # Accounts are admins by naming convention.
    return Role.ADMIN if "admin" in username.lower() else Role.EMPLOYEE
