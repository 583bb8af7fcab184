from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Sequence

from ..core.constants import FULL_DAY_LEAVE
from ..core.enums import ActivityType
from ..timeslots.catalog import DEFAULT_CATALOG, SlotCatalog
from .model import ActivityCell, PagesValue

# employee_id -> time_slot -> ActivityCell, for one date.
EmployeeDay = Mapping[str, Mapping[str, ActivityCell]]


@dataclass(frozen=True)
class PageTotals:
    proof_total: int = 0
    epub_total: int = 0
    calibr_total: int = 0

    def to_dict(self) -> Dict[str, int]:
        return {
            "proofTotal": self.proof_total,
            "epubTotal": self.epub_total,
            "calibrTotal": self.calibr_total,
        }


@dataclass(frozen=True)
class DaySummaryRow:
    employee_id: str
    name: str
    totals: PageTotals
    on_full_day_leave: bool
    cells: Dict[str, Optional[ActivityCell]] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "employeeId": self.employee_id,
            "name": self.name,
            "totals": self.totals.to_dict(),
            "onFullDayLeave": self.on_full_day_leave,
            "cells": {slot: (c.to_dict() if c else None) for slot, c in self.cells.items()},
        }


def _pages(value: PagesValue) -> int:
    """Lenient page count: anything unparseable or negative counts as 0."""
    if value is None or isinstance(value, bool):
        return 0
    try:
        pages = int(str(value).strip())
    except ValueError:
        return 0
    return max(0, pages)


def is_on_full_day_leave(day: EmployeeDay, employee_id: str, catalog: SlotCatalog = DEFAULT_CATALOG) -> bool:
    cell = day.get(employee_id, {}).get(catalog.first())
    return cell is not None and cell.type == ActivityType.LEAVE and cell.description == FULL_DAY_LEAVE


def compute_totals(day: EmployeeDay, employee_id: str, catalog: SlotCatalog = DEFAULT_CATALOG) -> PageTotals:
    if is_on_full_day_leave(day, employee_id, catalog):
        return PageTotals()

    buckets = {ActivityType.PROOF: 0, ActivityType.EPUB: 0, ActivityType.CALIBR: 0}
    slots = day.get(employee_id, {})
    for slot in catalog.slots():
        cell = slots.get(slot)
        if cell is None or not cell.type.traits.contributes_to_totals:
            continue
        buckets[cell.type] += _pages(cell.pages_done)

    return PageTotals(
        proof_total=buckets[ActivityType.PROOF],
        epub_total=buckets[ActivityType.EPUB],
        calibr_total=buckets[ActivityType.CALIBR],
    )


def build_day_summary(
    day: EmployeeDay,
    roster: Sequence[Any],
    catalog: SlotCatalog = DEFAULT_CATALOG,
) -> list[DaySummaryRow]:
    """One row per employee (roster order): totals, leave flag and cells by slot.

    Residual cells of an employee on full-day leave are hidden.
    """

    rows = []
    for emp in roster:
        on_leave = is_on_full_day_leave(day, emp.id, catalog)
        slots = day.get(emp.id, {})
        if on_leave:
            cells = {slot: None for slot in catalog.slots()}
            cells[catalog.first()] = slots.get(catalog.first())
        else:
            cells = {slot: slots.get(slot) for slot in catalog.slots()}
        rows.append(
            DaySummaryRow(
                employee_id=emp.id,
                name=emp.name,
                totals=compute_totals(day, emp.id, catalog),
                on_full_day_leave=on_leave,
                cells=cells,
            )
        )
    return rows
