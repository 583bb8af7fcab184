from __future__ import annotations

from dataclasses import replace
from typing import Optional

from ..common.datetime_utils import now_iso
from ..core.enums import Role
from ..core.exceptions import ConflictError
from .model import User
from .repository import UserRepository


class InMemoryUserRepository(UserRepository):
    def __init__(self):
        self._by_username: dict[str, User] = {}
        self._next_id = 1

    def get_by_username(self, username: str) -> Optional[User]:
        return self._by_username.get(username)

    def create_user(self, *, username: str, password_hash: str, role: Role) -> int:
        if username in self._by_username:
            raise ConflictError("Username already exists")
        user_id = self._next_id
        self._next_id += 1
        self._by_username[username] = User(
            user_id=user_id, username=username, password_hash=password_hash, role=role, created_at=now_iso()
        )
        return user_id

    def upsert(self, *, username: str, password_hash: str, role: Role) -> None:
        existing = self._by_username.get(username)
        if existing:
            self._by_username[username] = replace(existing, password_hash=password_hash, role=role)
        else:
            self.create_user(username=username, password_hash=password_hash, role=role)

    def set_role(self, user_id: int, role: Role) -> bool:
        for username, user in self._by_username.items():
            if user.user_id == user_id:
                self._by_username[username] = replace(user, role=role)
                return True
        return False
