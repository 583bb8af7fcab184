from __future__ import annotations

from timesheet_system.activities.aggregation import (
    PageTotals,
    build_day_summary,
    compute_totals,
    is_on_full_day_leave,
)
from timesheet_system.activities.model import ActivityCell
from timesheet_system.core.constants import FULL_DAY_LEAVE
from timesheet_system.core.enums import ActivityType
from timesheet_system.employees.model import Employee


def _proof(pages):
    return ActivityCell(type=ActivityType.PROOF, description="p", pages_done=pages)


def test_totals_sum_paginated_cells_per_type():
    day = {
        "e1": {
            "9:00-10:00": _proof(10),
            "10:00-11:00": ActivityCell(type=ActivityType.EPUB, pages_done=4),
            "11:10-12:00": ActivityCell(type=ActivityType.CALIBR, pages_done=2),
            "12:00-01:00": _proof(5),
            "01:00-01:40": ActivityCell(type=ActivityType.WORK, description="w"),
        }
    }
    assert compute_totals(day, "e1") == PageTotals(proof_total=15, epub_total=4, calibr_total=2)


def test_unparseable_pages_count_as_zero():
    day = {"e1": {"9:00-10:00": _proof("abc"), "10:00-11:00": _proof("7"), "11:00-11:10": _proof(-3)}}
    assert compute_totals(day, "e1") == PageTotals(proof_total=7)


def test_full_day_leave_zeroes_totals_regardless_of_other_cells():
    day = {
        "e1": {
            "9:00-10:00": ActivityCell(type=ActivityType.LEAVE, description=FULL_DAY_LEAVE),
            "10:00-11:00": _proof(10),
        }
    }
    assert is_on_full_day_leave(day, "e1")
    assert compute_totals(day, "e1") == PageTotals()


def test_leave_with_other_description_is_not_full_day():
    day = {"e1": {"9:00-10:00": ActivityCell(type=ActivityType.LEAVE, description="9:00-10:00 to 10:00-11:00")}}
    assert not is_on_full_day_leave(day, "e1")


def test_unknown_employee_has_zero_totals():
    assert compute_totals({}, "nobody") == PageTotals()


def test_day_summary_hides_residual_cells_on_leave():
    day = {
        "e1": {
            "9:00-10:00": ActivityCell(type=ActivityType.LEAVE, description=FULL_DAY_LEAVE),
            "10:00-11:00": _proof(10),
        },
        "e2": {"10:00-11:00": _proof(3)},
    }
    roster = [Employee(id="e1", name="Anitha"), Employee(id="e2", name="Balaji")]

    rows = build_day_summary(day, roster)

    assert [r.name for r in rows] == ["Anitha", "Balaji"]
    assert rows[0].on_full_day_leave
    assert rows[0].cells["10:00-11:00"] is None
    assert rows[1].totals.proof_total == 3
    assert rows[1].to_dict()["totals"] == {"proofTotal": 3, "epubTotal": 0, "calibrTotal": 0}
