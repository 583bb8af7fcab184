from __future__ import annotations

from typing import Optional, Protocol

from .model import ActivityCell, DayActivityMap


class ActivityStore(Protocol):
    """Giao diện lưu trữ ô hoạt động, khoá theo (date_key, employee_id, time_slot).

    Lưu ý: store không ghi nhật ký; service ghi ActivityLogEntry sau mỗi thao tác thành công.
    Backend failures surface as ConnectivityError.
    """

    def get(self, date_key: str, employee_id: str, time_slot: str) -> Optional[ActivityCell]:
        raise NotImplementedError

    def set(self, date_key: str, employee_id: str, time_slot: str, cell: ActivityCell) -> bool:
        """Upsert: replaces any existing cell for the key."""

        raise NotImplementedError

    def delete(self, date_key: str, employee_id: str, time_slot: str) -> bool:
        """Remove the cell; returns False (no error) when nothing was there."""

        raise NotImplementedError

    def list_for_date(self, date_key: str) -> DayActivityMap:
        raise NotImplementedError

    def list_all(self) -> DayActivityMap:
        raise NotImplementedError
