from __future__ import annotations

import io

import pandas as pd

from timesheet_system.activities.aggregation import build_day_summary
from timesheet_system.activities.model import ActivityCell
from timesheet_system.core.constants import FULL_DAY_LEAVE
from timesheet_system.core.enums import ActivityType
from timesheet_system.employees.model import Employee
from timesheet_system.export.service import XLSX_MIMETYPE, TimesheetExporter, cell_text

ROSTER = [Employee(id="e1", name="Anitha"), Employee(id="e2", name="Balaji")]
DAY = {
    "e1": {
        "9:00-10:00": ActivityCell(type=ActivityType.PROOF, description="Book", pages_done=10),
        "12:00-01:00": ActivityCell(type=ActivityType.LUNCH, description="LUNCH"),
    },
    "e2": {"9:00-10:00": ActivityCell(type=ActivityType.LEAVE, description=FULL_DAY_LEAVE)},
}


def test_cell_text():
    assert cell_text(None) == ""
    assert cell_text(DAY["e1"]["9:00-10:00"]) == "PROOF: Book (10 pages)"
    assert cell_text(DAY["e1"]["12:00-01:00"]) == "LUNCH"


def test_build_frame_layout():
    df = TimesheetExporter().build_frame(build_day_summary(DAY, ROSTER))

    assert list(df.columns[:4]) == ["Employee Name", "Proof", "Epub", "Calibr"]
    assert len(df.columns) == 4 + 13
    anitha, balaji = df.iloc[0], df.iloc[1]
    assert anitha["Proof"] == 10
    assert anitha["9:00-10:00"] == "PROOF: Book (10 pages)"
    assert balaji["9:00-10:00"] == "FULL DAY LEAVE"
    assert balaji["Proof"] == ""


def test_to_xlsx_is_readable():
    output = TimesheetExporter().to_xlsx(build_day_summary(DAY, ROSTER))

    df = pd.read_excel(io.BytesIO(output.getvalue()), engine="openpyxl")
    assert list(df["Employee Name"]) == ["Anitha", "Balaji"]


def test_export_endpoint(admin_client):
    admin_client.post("/api/timesheet/2025-01-10/e1/slots/9:00-10:00", json={"type": "break"})

    resp = admin_client.get("/api/export?dateKey=2025-01-10")

    assert resp.status_code == 200
    assert resp.mimetype == XLSX_MIMETYPE
    assert "Timesheet_2025-01-10.xlsx" in resp.headers["Content-Disposition"]


def test_export_requires_date_key(admin_client):
    assert admin_client.get("/api/export").status_code == 400
