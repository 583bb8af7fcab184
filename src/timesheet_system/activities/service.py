from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Optional

from ..activity_log.service import ActivityLogService
from ..common.datetime_utils import now_iso
from ..common.validators import require_date_key, require_non_empty
from ..core.constants import FULL_DAY_LEAVE
from ..core.enums import ActivityType, LogAction
from ..core.exceptions import (
    InvalidRangeError,
    MissingDescriptionError,
    MissingReasonError,
    NotFoundError,
    OnFullDayLeaveError,
    ValidationError,
)
from ..employees.repository import EmployeeRepository
from ..timeslots.catalog import DEFAULT_CATALOG, SlotCatalog
from ..users.model import CurrentUser
from . import aggregation
from .context import TimesheetContext
from .model import ActivityCell, DayActivityMap, parse_activity_type
from .repository import ActivityStore

logger = logging.getLogger(__name__)

RANGE_TYPES = (ActivityType.LEAVE, ActivityType.PERMISSION)


@dataclass(frozen=True)
class SagaStep:
    action: LogAction
    time_slot: str


@dataclass
class SagaResult:
    """Ordered single-slot steps a multi-slot operation committed.

    The steps are independent: if one fails, the error propagates and the
    steps listed so far stay committed.
    """

    employee_id: str
    date_key: str
    steps: list[SagaStep] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "employeeId": self.employee_id,
            "dateKey": self.date_key,
            "steps": [{"action": s.action.value, "timeSlot": s.time_slot} for s in self.steps],
        }


class TimesheetService:
    """Activity cells of one day: single-cell edits, full-day leave and range marking.

    States per (date, employee): Normal, or FullDayLeave when the first slot holds
    the leave/FULL_DAY_LEAVE marker and every other slot is empty.
    """

    def __init__(
        self,
        store: ActivityStore,
        employees: EmployeeRepository,
        activity_log: ActivityLogService,
        *,
        catalog: SlotCatalog = DEFAULT_CATALOG,
        clock: Callable[[], str] = now_iso,
    ):
        self._store = store
        self._employees = employees
        self._log = activity_log
        self._catalog = catalog
        self._clock = clock

    @property
    def catalog(self) -> SlotCatalog:
        return self._catalog

    def load_context(self, date_key: str, *, current_user: Optional[CurrentUser] = None) -> TimesheetContext:
        date_key = require_date_key(date_key)
        day = self._store.list_for_date(date_key)
        return TimesheetContext(
            date_key=date_key,
            cells=day.get(date_key, {}),
            roster=list(self._employees.list_all()),
            current_user=current_user,
        )

    # Store passthrough (raw REST surface; callers append their own log entries)

    def list_activities(self, date_key: Optional[str] = None) -> DayActivityMap:
        if date_key:
            return self._store.list_for_date(require_date_key(date_key))
        return self._store.list_all()

    def put_cell(self, date_key: str, employee_id: str, time_slot: str, cell: ActivityCell) -> None:
        self._catalog.index_of(time_slot)
        self._store.set(require_date_key(date_key), require_non_empty(employee_id, "employeeId"), time_slot, cell)

    def remove_cell(self, date_key: str, employee_id: str, time_slot: str) -> bool:
        self._catalog.index_of(time_slot)
        return self._store.delete(require_date_key(date_key), require_non_empty(employee_id, "employeeId"), time_slot)

    # Queries

    def is_on_full_day_leave(self, ctx: TimesheetContext, employee_id: str) -> bool:
        return aggregation.is_on_full_day_leave(ctx.cells, employee_id, self._catalog)

    def compute_totals(self, ctx: TimesheetContext, employee_id: str) -> aggregation.PageTotals:
        return aggregation.compute_totals(ctx.cells, employee_id, self._catalog)

    def day_summary(self, ctx: TimesheetContext, roster=None) -> list[aggregation.DaySummaryRow]:
        return aggregation.build_day_summary(ctx.cells, ctx.roster if roster is None else roster, self._catalog)

    # Single-cell operations

    def set_activity(
        self,
        ctx: TimesheetContext,
        employee_id: str,
        time_slot: str,
        *,
        activity_type,
        description: str = "",
        start_page: Optional[int] = None,
        end_page: Optional[int] = None,
    ) -> ActivityCell:
        """Write one cell.

        The first-slot leave marker is routed to mark_full_day_leave so the other
        slots get cleared; other slots cannot be written while the day is on leave.
        """
        self._catalog.index_of(time_slot)
        activity_type = parse_activity_type(activity_type)
        if activity_type.traits.requires_description and not (description or "").strip():
            raise MissingDescriptionError(f"Please enter a description for {activity_type.value}")
        self._require_employee(ctx, employee_id)

        first = self._catalog.first()
        if time_slot == first and activity_type == ActivityType.LEAVE and (description or "").strip() == FULL_DAY_LEAVE:
            self.mark_full_day_leave(ctx, employee_id)
            return ctx.get(employee_id, first)
        if time_slot != first and self.is_on_full_day_leave(ctx, employee_id):
            raise OnFullDayLeaveError("Employee is on full day leave; clear the leave before editing other slots")

        cell = ActivityCell.build(
            activity_type=activity_type,
            description=description,
            start_page=start_page,
            end_page=end_page,
            timestamp=self._clock(),
        )
        self._write(ctx, employee_id, time_slot, cell)
        return cell

    def clear_activity(self, ctx: TimesheetContext, employee_id: str, time_slot: str) -> bool:
        self._catalog.index_of(time_slot)
        return self._clear(ctx, employee_id, time_slot)

    # Leave / permission

    def mark_full_day_leave(self, ctx: TimesheetContext, employee_id: str) -> SagaResult:
        """Normal -> FullDayLeave: marker on the first slot, then clear the rest in order.

        Leave always wins over whatever the other slots held.
        """
        self._require_employee(ctx, employee_id)
        result = SagaResult(employee_id=employee_id, date_key=ctx.date_key)

        first = self._catalog.first()
        marker = ActivityCell(type=ActivityType.LEAVE, description=FULL_DAY_LEAVE, timestamp=self._clock())
        self._write(ctx, employee_id, first, marker)
        result.steps.append(SagaStep(LogAction.UPDATED, first))

        for slot in self._catalog.slots()[1:]:
            self._clear(ctx, employee_id, slot)
            result.steps.append(SagaStep(LogAction.CLEARED, slot))

        logger.info("Marked %s as full day leave on %s", employee_id, ctx.date_key)
        return result

    def clear_full_day_leave(self, ctx: TimesheetContext, employee_id: str) -> SagaResult:
        """FullDayLeave -> Normal: only the first-slot marker needs removing."""
        result = SagaResult(employee_id=employee_id, date_key=ctx.date_key)
        first = self._catalog.first()
        if self.is_on_full_day_leave(ctx, employee_id):
            self._clear(ctx, employee_id, first)
            result.steps.append(SagaStep(LogAction.CLEARED, first))
        return result

    def mark_range(
        self,
        ctx: TimesheetContext,
        employee_id: str,
        *,
        start_slot: Optional[str],
        end_slot: Optional[str],
        activity_type,
        description: str = "",
        full_day: bool = False,
    ) -> SagaResult:
        activity_type = parse_activity_type(activity_type)
        if activity_type not in RANGE_TYPES:
            raise ValidationError("Only leave or permission can be marked over a range")

        if activity_type == ActivityType.LEAVE and full_day:
            return self.mark_full_day_leave(ctx, employee_id)

        start_slot = start_slot or self._catalog.first()
        end_slot = end_slot or self._catalog.last()
        start_index = self._catalog.index_of(start_slot)
        end_index = self._catalog.index_of(end_slot)
        if start_index > end_index:
            raise InvalidRangeError("End time must be after start time")

        description = (description or "").strip()
        if activity_type == ActivityType.PERMISSION and not description:
            raise MissingReasonError("Please enter a reason for permission")
        if not description:
            description = f"{start_slot} to {end_slot}"
        if activity_type == ActivityType.LEAVE and description == FULL_DAY_LEAVE:
            return self.mark_full_day_leave(ctx, employee_id)
        if self.is_on_full_day_leave(ctx, employee_id):
            raise OnFullDayLeaveError("Employee is on full day leave; clear the leave before marking a range")

        self._require_employee(ctx, employee_id)
        result = SagaResult(employee_id=employee_id, date_key=ctx.date_key)
        for slot in self._catalog.span(start_index, end_index):
            cell = ActivityCell(type=activity_type, description=description, timestamp=self._clock())
            self._write(ctx, employee_id, slot, cell)
            result.steps.append(SagaStep(LogAction.UPDATED, slot))

        logger.info(
            "Marked %s %s..%s as %s on %s", employee_id, start_slot, end_slot, activity_type.value, ctx.date_key
        )
        return result

    # Internals: every store call goes through these two.

    def _write(self, ctx: TimesheetContext, employee_id: str, time_slot: str, cell: ActivityCell) -> None:
        logger.debug("set %s/%s/%s -> %s", ctx.date_key, employee_id, time_slot, cell.type.value)
        self._store.set(ctx.date_key, employee_id, time_slot, cell)
        ctx.put(employee_id, time_slot, cell)
        self._record(ctx, employee_id, time_slot, cell, LogAction.UPDATED)

    def _clear(self, ctx: TimesheetContext, employee_id: str, time_slot: str) -> bool:
        previous = ctx.get(employee_id, time_slot)
        logger.debug("delete %s/%s/%s", ctx.date_key, employee_id, time_slot)
        removed = self._store.delete(ctx.date_key, employee_id, time_slot)
        ctx.drop(employee_id, time_slot)
        if previous is not None:
            self._record(ctx, employee_id, time_slot, previous, LogAction.CLEARED)
        return removed

    def _record(
        self, ctx: TimesheetContext, employee_id: str, time_slot: str, cell: ActivityCell, action: LogAction
    ) -> None:
        employee = ctx.employee(employee_id) or self._employees.get_by_id(employee_id)
        if employee is None:
            logger.warning("No employee %s to log %s of %s", employee_id, action.value, time_slot)
            return
        self._log.record(
            employee_name=employee.name,
            activity_type=cell.type.value,
            description=cell.description,
            time_slot=time_slot,
            action=action,
            edited_by=ctx.edited_by,
            date_key=ctx.date_key,
        )

    def _require_employee(self, ctx: TimesheetContext, employee_id: str) -> None:
        if ctx.employee(employee_id) is None and self._employees.get_by_id(employee_id) is None:
            raise NotFoundError(f"Employee {employee_id!r} not found")
