from __future__ import annotations

from typing import Optional

import mysql.connector

from ..common.datetime_utils import now_iso
from ..core.enums import Role
from ..core.exceptions import ConflictError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import DUPLICATE_ENTRY, db_cursor, fetchone
from .model import User
from .repository import UserRepository


class MySQLUserRepository(UserRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_username(self, username: str) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT id, username, password_hash, role, created_at FROM users WHERE username=%s",
                (username,),
            )
            r = fetchone(cur)
            if not r:
                return None
            return User(
                user_id=int(r["id"]),
                username=r["username"],
                password_hash=r["password_hash"],
                role=Role(r["role"]),
                created_at=r.get("created_at"),
            )

    def create_user(self, *, username: str, password_hash: str, role: Role) -> int:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    "INSERT INTO users(username, password_hash, role, created_at) VALUES(%s,%s,%s,%s)",
                    (username, password_hash, role.value, now_iso()),
                )
                return int(cur.lastrowid)
        except mysql.connector.IntegrityError as e:
            if e.errno == DUPLICATE_ENTRY:
                raise ConflictError("Username already exists") from e
            raise

    def set_role(self, user_id: int, role: Role) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE users SET role=%s WHERE id=%s", (role.value, int(user_id)))
            return cur.rowcount > 0
