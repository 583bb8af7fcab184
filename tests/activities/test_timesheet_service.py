from __future__ import annotations

import pytest

from timesheet_system.activities.memory_activity_repository import InMemoryActivityStore
from timesheet_system.activities.model import ActivityCell
from timesheet_system.activities.service import TimesheetService
from timesheet_system.core.constants import FULL_DAY_LEAVE
from timesheet_system.core.enums import ActivityType, LogAction, Role
from timesheet_system.core.exceptions import (
    ConnectivityError,
    InvalidRangeError,
    MissingDescriptionError,
    MissingReasonError,
    MissingTypeError,
    NotFoundError,
    OnFullDayLeaveError,
    SlotNotFoundError,
    ValidationError,
)
from timesheet_system.employees.model import Employee
from timesheet_system.users.model import CurrentUser

DATE_KEY = "2025-01-10"
FIRST = "9:00-10:00"
SECOND = "10:00-11:00"
LAST = "07:00-08:00"


def _cells(store, employee_id):
    return store.list_for_date(DATE_KEY).get(DATE_KEY, {}).get(employee_id, {})


class FailingStore(InMemoryActivityStore):
    """Raises on the n-th store call (1-based)."""

    def __init__(self, fail_on: int, error: Exception):
        super().__init__()
        self.calls = 0
        self._fail_on = fail_on
        self._error = error

    def _tick(self):
        self.calls += 1
        if self.calls == self._fail_on:
            raise self._error

    def set(self, date_key, employee_id, time_slot, cell):
        self._tick()
        return super().set(date_key, employee_id, time_slot, cell)

    def delete(self, date_key, employee_id, time_slot):
        self._tick()
        return super().delete(date_key, employee_id, time_slot)


@pytest.fixture()
def ctx(timesheet):
    return timesheet.load_context(DATE_KEY, current_user=CurrentUser(user_id=1, username="admin", role=Role.ADMIN))


def test_set_then_get_returns_written_cell(timesheet, store, ctx):
    cell = timesheet.set_activity(ctx, "e1", FIRST, activity_type="meeting", description="Standup")

    assert store.get(DATE_KEY, "e1", FIRST) == cell
    assert ctx.get("e1", FIRST) == cell
    assert cell.timestamp == "2025-01-10T09:15:00.000Z"


def test_proof_ten_pages_scenario(timesheet, store, ctx):
    timesheet.set_activity(ctx, "e1", FIRST, activity_type="proof", description="Book", start_page=10, end_page=19)

    assert store.get(DATE_KEY, "e1", FIRST).pages_done == 10
    totals = timesheet.compute_totals(ctx, "e1")
    assert (totals.proof_total, totals.epub_total, totals.calibr_total) == (10, 0, 0)


def test_last_write_wins(timesheet, store, ctx):
    timesheet.set_activity(ctx, "e1", FIRST, activity_type="work", description="first")
    timesheet.set_activity(ctx, "e1", FIRST, activity_type="work", description="second")

    cells = _cells(store, "e1")
    assert len(cells) == 1
    assert cells[FIRST].description == "second"


def test_set_activity_validation_happens_before_any_write(timesheet, store, ctx):
    with pytest.raises(MissingTypeError):
        timesheet.set_activity(ctx, "e1", FIRST, activity_type="")
    with pytest.raises(MissingDescriptionError):
        timesheet.set_activity(ctx, "e1", FIRST, activity_type="work", description="  ")
    with pytest.raises(SlotNotFoundError):
        timesheet.set_activity(ctx, "e1", "08:00-09:00", activity_type="break")
    with pytest.raises(NotFoundError):
        timesheet.set_activity(ctx, "ghost", FIRST, activity_type="break")

    assert store.list_all() == {}


def test_set_and_clear_append_log_entries(timesheet, log_repo, ctx):
    timesheet.set_activity(ctx, "e1", FIRST, activity_type="lunch")
    assert timesheet.clear_activity(ctx, "e1", FIRST) is True
    assert timesheet.clear_activity(ctx, "e1", FIRST) is False

    entries = log_repo.list_recent(10)
    assert [e.action for e in entries] == [LogAction.CLEARED, LogAction.UPDATED]
    assert entries[0].employee_name == "Anitha"
    assert entries[0].edited_by == "admin"
    assert entries[1].description == "LUNCH"


def test_mark_full_day_leave_clears_every_other_slot(timesheet, store, ctx):
    timesheet.set_activity(ctx, "e1", SECOND, activity_type="proof", description="p", start_page=1, end_page=5)
    timesheet.set_activity(ctx, "e1", LAST, activity_type="work", description="late")

    result = timesheet.mark_full_day_leave(ctx, "e1")

    cells = _cells(store, "e1")
    assert list(cells) == [FIRST]
    assert cells[FIRST].type == ActivityType.LEAVE
    assert cells[FIRST].description == FULL_DAY_LEAVE
    assert timesheet.is_on_full_day_leave(ctx, "e1")
    assert timesheet.compute_totals(ctx, "e1").proof_total == 0
    assert len(result.steps) == 13
    assert result.steps[0].action == LogAction.UPDATED


def test_clear_full_day_leave_returns_to_normal(timesheet, store, ctx):
    timesheet.mark_full_day_leave(ctx, "e1")
    result = timesheet.clear_full_day_leave(ctx, "e1")

    assert [s.time_slot for s in result.steps] == [FIRST]
    assert not timesheet.is_on_full_day_leave(ctx, "e1")
    assert store.list_for_date(DATE_KEY) == {}


def test_clear_full_day_leave_leaves_normal_cells_alone(timesheet, store, ctx):
    timesheet.set_activity(ctx, "e1", FIRST, activity_type="work", description="w")

    result = timesheet.clear_full_day_leave(ctx, "e1")

    assert result.steps == []
    assert store.get(DATE_KEY, "e1", FIRST) is not None


def test_mark_range_writes_identical_cells_in_order(timesheet, store, ctx):
    result = timesheet.mark_range(
        ctx, "e2", start_slot=SECOND, end_slot="11:10-12:00", activity_type="permission", description="Doctor"
    )

    assert [s.time_slot for s in result.steps] == [SECOND, "11:00-11:10", "11:10-12:00"]
    cells = _cells(store, "e2")
    assert {c.description for c in cells.values()} == {"Doctor"}
    assert {c.type for c in cells.values()} == {ActivityType.PERMISSION}


def test_mark_range_leave_default_description(timesheet, store, ctx):
    timesheet.mark_range(ctx, "e1", start_slot=FIRST, end_slot=SECOND, activity_type="leave")

    assert store.get(DATE_KEY, "e1", SECOND).description == f"{FIRST} to {SECOND}"
    assert not timesheet.is_on_full_day_leave(ctx, "e1")


def test_mark_range_full_day_leave_ignores_bounds(timesheet, store, ctx):
    timesheet.mark_range(ctx, "e1", start_slot=LAST, end_slot=FIRST, activity_type="leave", full_day=True)

    assert timesheet.is_on_full_day_leave(ctx, "e1")
    assert list(_cells(store, "e1")) == [FIRST]


def test_permission_without_reason_writes_nothing(timesheet, store, ctx):
    with pytest.raises(MissingReasonError):
        timesheet.mark_range(ctx, "e1", start_slot=FIRST, end_slot="04:00-05:00", activity_type="permission", description="")
    assert store.list_all() == {}


def test_reversed_range_writes_nothing(timesheet, store, ctx):
    with pytest.raises(InvalidRangeError):
        timesheet.mark_range(ctx, "e1", start_slot="04:00-05:00", end_slot=FIRST, activity_type="leave", description="x")
    assert store.list_all() == {}


def test_range_only_for_leave_or_permission(timesheet, ctx):
    with pytest.raises(ValidationError):
        timesheet.mark_range(ctx, "e1", start_slot=FIRST, end_slot=SECOND, activity_type="work", description="x")


def test_range_failure_leaves_committed_prefix(employees_repo, log_service):
    store = FailingStore(fail_on=3, error=ConnectivityError("database unavailable"))
    service = TimesheetService(store, employees_repo, log_service, clock=lambda: "t")
    ctx = service.load_context(DATE_KEY)

    with pytest.raises(ConnectivityError):
        service.mark_range(ctx, "e1", start_slot=FIRST, end_slot="11:10-12:00", activity_type="leave", description="sick")

    assert list(_cells(store, "e1")) == [FIRST, SECOND]
    # the snapshot only reflects confirmed writes
    assert set(ctx.cells["e1"]) == {FIRST, SECOND}


def test_log_failure_does_not_undo_cell_write(store, employees_repo):
    from timesheet_system.activity_log.service import ActivityLogService

    class DownLog:
        def append(self, entry):
            raise ConnectivityError("log table unavailable")

    service = TimesheetService(store, employees_repo, ActivityLogService(DownLog()), clock=lambda: "t")
    ctx = service.load_context(DATE_KEY)

    service.set_activity(ctx, "e1", FIRST, activity_type="break")

    assert store.get(DATE_KEY, "e1", FIRST) is not None


def test_context_roster_resolves_employee_added_after_load(timesheet, employees_repo, ctx, log_repo):
    employees_repo.save(Employee(id="e3", name="Kamal"))

    timesheet.set_activity(ctx, "e3", FIRST, activity_type="break")

    assert ctx.get("e3", FIRST) is not None
    entries = log_repo.list_recent(10)
    assert [(e.employee_name, e.action) for e in entries] == [("Kamal", LogAction.UPDATED)]


def test_load_context_rejects_bad_date_key(timesheet):
    with pytest.raises(ValidationError):
        timesheet.load_context("10/01/2025")


def test_other_slots_are_locked_during_full_day_leave(timesheet, store, ctx):
    timesheet.mark_full_day_leave(ctx, "e1")

    with pytest.raises(OnFullDayLeaveError):
        timesheet.set_activity(ctx, "e1", SECOND, activity_type="work", description="w")
    with pytest.raises(OnFullDayLeaveError):
        timesheet.mark_range(ctx, "e1", start_slot=SECOND, end_slot=LAST, activity_type="permission", description="x")

    assert list(_cells(store, "e1")) == [FIRST]
    assert timesheet.is_on_full_day_leave(ctx, "e1")


def test_writing_the_leave_marker_clears_other_slots(timesheet, store, ctx):
    timesheet.set_activity(ctx, "e1", LAST, activity_type="work", description="late")

    cell = timesheet.set_activity(ctx, "e1", FIRST, activity_type="leave", description=FULL_DAY_LEAVE)

    assert cell.description == FULL_DAY_LEAVE
    assert list(_cells(store, "e1")) == [FIRST]
    assert timesheet.is_on_full_day_leave(ctx, "e1")


def test_range_with_marker_description_enters_full_day_leave(timesheet, store, ctx):
    timesheet.set_activity(ctx, "e1", LAST, activity_type="work", description="late")

    timesheet.mark_range(ctx, "e1", start_slot=FIRST, end_slot=SECOND, activity_type="leave", description=FULL_DAY_LEAVE)

    assert list(_cells(store, "e1")) == [FIRST]


def test_overwriting_the_marker_returns_to_normal(timesheet, store, ctx):
    timesheet.mark_full_day_leave(ctx, "e1")

    timesheet.set_activity(ctx, "e1", FIRST, activity_type="work", description="back early")

    assert not timesheet.is_on_full_day_leave(ctx, "e1")
    timesheet.set_activity(ctx, "e1", SECOND, activity_type="lunch")
    assert list(_cells(store, "e1")) == [FIRST, SECOND]


def test_full_day_leave_failure_keeps_cleared_prefix(employees_repo, log_service):
    store = FailingStore(fail_on=5, error=ConnectivityError("database unavailable"))
    for slot in (SECOND, "11:00-11:10", "12:00-01:00", LAST):
        # seeded without counting store calls
        InMemoryActivityStore.set(store, DATE_KEY, "e1", slot, ActivityCell(type=ActivityType.WORK, description="w"))
    service = TimesheetService(store, employees_repo, log_service, clock=lambda: "t")
    ctx = service.load_context(DATE_KEY)

    # calls: marker, clear slot 2, clear slot 3, clear slot 4, clear slot 5 (fails)
    with pytest.raises(ConnectivityError):
        service.mark_full_day_leave(ctx, "e1")

    cells = _cells(store, "e1")
    assert cells[FIRST].description == FULL_DAY_LEAVE
    assert SECOND not in cells
    assert "11:00-11:10" not in cells
    assert "12:00-01:00" in cells
    assert LAST in cells
    assert "12:00-01:00" in ctx.cells["e1"]
