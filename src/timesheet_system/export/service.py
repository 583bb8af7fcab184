from __future__ import annotations

import io
from typing import Optional, Sequence

import pandas as pd

from ..activities.aggregation import DaySummaryRow
from ..activities.model import ActivityCell
from ..core.enums import ActivityType
from ..timeslots.catalog import DEFAULT_CATALOG, SlotCatalog

XLSX_MIMETYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def cell_text(cell: Optional[ActivityCell]) -> str:
    if cell is None:
        return ""
    text = cell.type.value.upper()
    if cell.description and cell.type not in (ActivityType.BREAK, ActivityType.LUNCH):
        text += f": {cell.description}"
    if cell.type.is_paginated and cell.pages_done not in (None, ""):
        text += f" ({cell.pages_done} pages)"
    return text


class TimesheetExporter:
    """Render one day's grid (one row per employee) as an xlsx workbook."""

    def __init__(self, catalog: SlotCatalog = DEFAULT_CATALOG):
        self._catalog = catalog

    def build_frame(self, rows: Sequence[DaySummaryRow]) -> pd.DataFrame:
        columns = ["Employee Name", "Proof", "Epub", "Calibr", *self._catalog.slots()]
        data = []
        for row in rows:
            if row.on_full_day_leave:
                totals = ["", "", ""]
                slots = ["FULL DAY LEAVE"] + [""] * (len(self._catalog) - 1)
            else:
                totals = [
                    row.totals.proof_total or "",
                    row.totals.epub_total or "",
                    row.totals.calibr_total or "",
                ]
                slots = [cell_text(row.cells.get(slot)) for slot in self._catalog.slots()]
            data.append([row.name, *totals, *slots])
        return pd.DataFrame(data, columns=columns)

    def to_xlsx(self, rows: Sequence[DaySummaryRow]) -> io.BytesIO:
        df = self.build_frame(rows)

        # Ghi vào file Excel trong bộ nhớ (không lưu ra ổ cứng)
        output = io.BytesIO()
        with pd.ExcelWriter(output, engine="openpyxl") as writer:
            df.to_excel(writer, index=False, sheet_name="Timesheet")
        output.seek(0)
        return output
