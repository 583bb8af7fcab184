from __future__ import annotations

from timesheet_system.activities.model import ActivityCell
from timesheet_system.core.enums import ActivityType


def test_delete_archives_and_is_noop_when_absent(store):
    cell = ActivityCell(type=ActivityType.WORK, description="w")
    store.set("2025-01-10", "e1", "9:00-10:00", cell)

    assert store.delete("2025-01-10", "e1", "9:00-10:00") is True
    assert store.delete("2025-01-10", "e1", "9:00-10:00") is False
    assert store.get("2025-01-10", "e1", "9:00-10:00") is None
    assert [c for _, c in store.archived] == [cell]


def test_list_for_date_slices_one_day(store):
    store.set("2025-01-10", "e1", "9:00-10:00", ActivityCell(type=ActivityType.BREAK, description="BREAK"))
    store.set("2025-01-11", "e1", "9:00-10:00", ActivityCell(type=ActivityType.LUNCH, description="LUNCH"))

    assert list(store.list_for_date("2025-01-10")) == ["2025-01-10"]
    assert set(store.list_all()) == {"2025-01-10", "2025-01-11"}


def test_employee_delete_cascades_to_activities(store, employees_repo):
    store.set("2025-01-10", "e1", "9:00-10:00", ActivityCell(type=ActivityType.BREAK, description="BREAK"))
    store.set("2025-01-11", "e1", "9:00-10:00", ActivityCell(type=ActivityType.BREAK, description="BREAK"))
    store.set("2025-01-10", "e2", "9:00-10:00", ActivityCell(type=ActivityType.BREAK, description="BREAK"))

    assert employees_repo.delete_cascade("e1") == 2
    assert employees_repo.get_by_id("e1") is None
    assert list(store.list_for_date("2025-01-10")["2025-01-10"]) == ["e2"]
