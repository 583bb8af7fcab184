from __future__ import annotations

from typing import Optional, Sequence

from ..common.datetime_utils import now_iso
from ..core.enums import Role
from ..core.exceptions import ConflictError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Employee
from .repository import EmployeeRepository


def _to_employee(r) -> Employee:
    return Employee(id=r["id"], name=r["name"], email=r.get("email") or "", created_at=r.get("created_at"))


class MySQLEmployeeRepository(EmployeeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT id, name, email, created_at FROM employees ORDER BY name, created_at, id")
            return [_to_employee(r) for r in fetchall(cur)]

    def get_by_id(self, employee_id: str) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT id, name, email, created_at FROM employees WHERE id=%s", (employee_id,))
            r = fetchone(cur)
            return _to_employee(r) if r else None

    def get_by_name(self, name: str) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT id, name, email, created_at FROM employees WHERE name=%s ORDER BY created_at, id LIMIT 1",
                (name,),
            )
            r = fetchone(cur)
            return _to_employee(r) if r else None

    def save(
        self,
        employee: Employee,
        *,
        username: Optional[str] = None,
        password_hash: Optional[str] = None,
        role: Optional[Role] = None,
    ) -> Employee:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT id FROM employees WHERE name=%s AND id<>%s", (employee.name, employee.id))
            if fetchone(cur):
                raise ConflictError(f'Employee "{employee.name}" already exists')

            cur.execute(
                """
                INSERT INTO employees(id, name, email, created_at)
                VALUES(%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE name=VALUES(name), email=VALUES(email)
                """,
                (employee.id, employee.name, employee.email or "", employee.created_at),
            )

            if username and password_hash:
                role_value = (role or Role.EMPLOYEE).value
                cur.execute("SELECT id FROM users WHERE username=%s", (username,))
                if fetchone(cur):
                    cur.execute(
                        "UPDATE users SET password_hash=%s, role=%s WHERE username=%s",
                        (password_hash, role_value, username),
                    )
                else:
                    cur.execute(
                        "INSERT INTO users(username, password_hash, role, created_at) VALUES(%s,%s,%s,%s)",
                        (username, password_hash, role_value, now_iso()),
                    )
        return employee

    def insert_if_absent(self, employee: Employee) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT IGNORE INTO employees(id, name, email, created_at) VALUES(%s,%s,%s,%s)",
                (employee.id, employee.name, employee.email or "", employee.created_at),
            )
            return cur.rowcount > 0

    def delete_cascade(self, employee_id: str) -> int:
        # One transaction per employee: archive, delete activities, delete employee.
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO deleted_activities(date_key, employee_id, time_slot, type, description,
                                               start_page, end_page, pages_done, timestamp, deleted_at)
                SELECT date_key, employee_id, time_slot, type, description,
                       start_page, end_page, pages_done, timestamp, %s
                FROM activities
                WHERE employee_id=%s
                """,
                (now_iso(), employee_id),
            )
            cur.execute("DELETE FROM activities WHERE employee_id=%s", (employee_id,))
            removed = cur.rowcount
            cur.execute("DELETE FROM employees WHERE id=%s", (employee_id,))
            return removed
