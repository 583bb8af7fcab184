from __future__ import annotations

from typing import Any, Dict, Optional

import mysql.connector

from ..common.datetime_utils import now_iso
from ..core.exceptions import NotFoundError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import ActivityCell, DayActivityMap, parse_activity_type
from .repository import ActivityStore

_COLUMNS = "date_key, employee_id, time_slot, type, description, start_page, end_page, pages_done, timestamp"


def _pages_value(raw):
    # VARCHAR column: numeric text reads back as int, free text as is
    if isinstance(raw, str) and raw.strip().isdigit():
        return int(raw.strip())
    return raw


def _to_cell(r: Dict[str, Any]) -> ActivityCell:
    return ActivityCell(
        type=parse_activity_type(r["type"]),
        description=r.get("description") or "",
        start_page=r.get("start_page"),
        end_page=r.get("end_page"),
        pages_done=_pages_value(r.get("pages_done")),
        timestamp=r.get("timestamp"),
    )


def _group(rows) -> DayActivityMap:
    out: DayActivityMap = {}
    for r in rows:
        out.setdefault(r["date_key"], {}).setdefault(r["employee_id"], {})[r["time_slot"]] = _to_cell(r)
    return out


class MySQLActivityRepository(ActivityStore):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get(self, date_key: str, employee_id: str, time_slot: str) -> Optional[ActivityCell]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM activities
                WHERE date_key=%s AND employee_id=%s AND time_slot=%s
                """,
                (date_key, employee_id, time_slot),
            )
            r = fetchone(cur)
            return _to_cell(r) if r else None

    def set(self, date_key: str, employee_id: str, time_slot: str, cell: ActivityCell) -> bool:
        pages_done = None if cell.pages_done is None else str(cell.pages_done)
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                self._upsert(cur, date_key, employee_id, time_slot, cell, pages_done)
                return True
        except mysql.connector.IntegrityError as e:
            raise NotFoundError(f"Employee {employee_id!r} not found") from e

    @staticmethod
    def _upsert(cur, date_key: str, employee_id: str, time_slot: str, cell: ActivityCell, pages_done) -> None:
        cur.execute(
            f"""
            INSERT INTO activities({_COLUMNS})
            VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s)
            ON DUPLICATE KEY UPDATE
                type=VALUES(type),
                description=VALUES(description),
                start_page=VALUES(start_page),
                end_page=VALUES(end_page),
                pages_done=VALUES(pages_done),
                timestamp=VALUES(timestamp)
            """,
            (
                date_key,
                employee_id,
                time_slot,
                cell.type.value,
                cell.description,
                cell.start_page,
                cell.end_page,
                pages_done,
                cell.timestamp,
            ),
        )

    def delete(self, date_key: str, employee_id: str, time_slot: str) -> bool:
        # Archive then delete in the same transaction.
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                INSERT INTO deleted_activities({_COLUMNS}, deleted_at)
                SELECT {_COLUMNS}, %s
                FROM activities
                WHERE date_key=%s AND employee_id=%s AND time_slot=%s
                """,
                (now_iso(), date_key, employee_id, time_slot),
            )
            cur.execute(
                "DELETE FROM activities WHERE date_key=%s AND employee_id=%s AND time_slot=%s",
                (date_key, employee_id, time_slot),
            )
            return cur.rowcount > 0

    def list_for_date(self, date_key: str) -> DayActivityMap:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM activities WHERE date_key=%s", (date_key,))
            return _group(fetchall(cur))

    def list_all(self) -> DayActivityMap:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM activities")
            return _group(fetchall(cur))
