from __future__ import annotations

from typing import Sequence

from ..common.datetime_utils import now_iso
from ..core.enums import LogAction
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import ActivityLogEntry
from .repository import ActivityLogRepository


class MySQLActivityLogRepository(ActivityLogRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def append(self, entry: ActivityLogEntry) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO activity_log(date_key, employee_name, activity_type, description, time_slot,
                                         action, edited_by, timestamp, created_at)
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    entry.date_key,
                    entry.employee_name,
                    entry.activity_type,
                    entry.description,
                    entry.time_slot,
                    entry.action.value,
                    entry.edited_by,
                    entry.timestamp,
                    now_iso(),
                ),
            )
            return int(cur.lastrowid)

    def list_recent(self, limit: int) -> Sequence[ActivityLogEntry]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT id, date_key, employee_name, activity_type, description, time_slot,
                       action, edited_by, timestamp, created_at
                FROM activity_log
                ORDER BY id DESC
                LIMIT %s
                """,
                (int(limit),),
            )
            return [
                ActivityLogEntry(
                    id=int(r["id"]),
                    date_key=r.get("date_key"),
                    employee_name=r["employee_name"],
                    activity_type=r["activity_type"],
                    description=r.get("description") or "",
                    time_slot=r["time_slot"],
                    action=LogAction(r["action"]),
                    edited_by=r.get("edited_by") or "",
                    timestamp=r["timestamp"],
                    created_at=r.get("created_at"),
                )
                for r in fetchall(cur)
            ]

    def clear(self) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM activity_log")
            return cur.rowcount
