from __future__ import annotations
from typing import Any, Dict, List, Optional
from io import BytesIO
import re
from collections import Counter
from datetime import datetime

from openpyxl import Workbook
from openpyxl.utils import get_column_letter
from openpyxl.styles import Font, Alignment, PatternFill

# (row key, header label, column width)
ROSTER_COLUMNS = [
    ("full_name", "Student", 28),
    ("email", "Email", 32),
    ("student_id", "Student ID", 14),
    ("user_id", "User ID", 34),
    ("batch", "Batch", 8),
    ("section", "Section", 9),
    ("status", "Status", 11),
    ("progress_percentage", "Progress (%)", 13),
    ("enrollment_date", "Enrolled", 18),
    ("last_accessed", "Last accessed", 18),
]

HEADER_ROW = 4
DATE_FORMAT = "yyyy-mm-dd hh:mm"

_header_fill = PatternFill("solid", fgColor="DDEBF7")
_dropped_font = Font(color="808080")


def enrollment_roster_xlsx(
    course_code: str,
    course_title: str,
    section: Optional[str],
    rows: List[Dict[str, Any]],
) -> bytes:
    """
    One sheet per course:
      row 1   course code and title
      row 2   section, export time, status counts
      row 4   column headers, students below (dropped students greyed out)
    """
    wb = Workbook()
    ws = wb.active
    ws.title = re.sub(r"[\\/*?:\[\]]", "_", course_code or "Roster")[:31]

    last_col = get_column_letter(len(ROSTER_COLUMNS))

    ws["A1"] = f"{course_code} {course_title}".strip()
    ws["A1"].font = Font(bold=True, size=14)
    ws.merge_cells(f"A1:{last_col}1")

    counts = Counter(r.get("status") for r in rows)
    summary = " | ".join(f"{status}: {n}" for status, n in sorted(counts.items())) or "no enrollments"
    ws["A2"] = f"Section {section or '-'} | exported {datetime.now():%Y-%m-%d %H:%M} | {summary}"
    ws["A2"].font = Font(italic=True)
    ws.merge_cells(f"A2:{last_col}2")

    for col_idx, (_key, label, width) in enumerate(ROSTER_COLUMNS, start=1):
        cell = ws.cell(row=HEADER_ROW, column=col_idx, value=label)
        cell.font = Font(bold=True)
        cell.fill = _header_fill
        cell.alignment = Alignment(horizontal="center", vertical="center")
        ws.column_dimensions[get_column_letter(col_idx)].width = width

    for row_idx, r in enumerate(rows, start=HEADER_ROW + 1):
        for col_idx, (key, _label, _width) in enumerate(ROSTER_COLUMNS, start=1):
            cell = ws.cell(row=row_idx, column=col_idx, value=_cell_value(r.get(key)))
            if isinstance(cell.value, datetime):
                cell.number_format = DATE_FORMAT
            elif key == "progress_percentage":
                cell.number_format = "0.0"
            if r.get("status") == "dropped":
                cell.font = _dropped_font

    ws.freeze_panes = ws.cell(row=HEADER_ROW + 1, column=1)
    if rows:
        ws.auto_filter.ref = f"A{HEADER_ROW}:{last_col}{HEADER_ROW + len(rows)}"

    buf = BytesIO()
    wb.save(buf)
    return buf.getvalue()


def _cell_value(v):
    # openpyxl rejects tz-aware datetimes
    if isinstance(v, datetime) and v.tzinfo is not None:
        return v.replace(tzinfo=None)
    return v


def make_filename(prefix: str = "enrollments") -> str:
    ts = datetime.now().strftime("%Y%m%d_%H%M%S")
    return f"{prefix}_{ts}.xlsx"
