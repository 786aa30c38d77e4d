from __future__ import annotations

import csv
import io
from datetime import date
from typing import Sequence

from ..categories.model import Category
from ..core.enums import Period
from .model import MonthlyAttendanceRow, StudentRecap

RECAP_HEADERS = ["Student Name", "Total Points", "Overall Rating Avg.", "Total Ratings", "Attendance (%)"]
MONTHLY_ATTENDANCE_HEADERS = ["Student Name", "Present", "Late", "Sick", "Permit", "Absent", "Effective Days"]


def _writer(out: io.StringIO):
    # Fields containing commas or quotes (e.g. "Putri, A.") are quoted.
    return csv.writer(out, lineterminator="\n")


def _quoted(value: str) -> str:
    return '"' + value.replace('"', '""') + '"'


def render_recap_csv(recaps: Sequence[StudentRecap], categories: Sequence[Category]) -> str:
    out = io.StringIO()
    writer = _writer(out)
    writer.writerow(RECAP_HEADERS + [f"{c.name} Avg." for c in categories])

    # The name column is always quoted; the numeric columns never need it.
    for r in recaps:
        category_values = []
        for c in categories:
            avg = r.category_averages.get(c.key)
            category_values.append(f"{avg.average:.2f}" if avg else "N/A")

        out.write(_quoted(r.student_name) + ",")
        writer.writerow(
            [
                r.total_points,
                f"{r.overall_average:.2f}",
                r.total_ratings,
                f"{r.attendance_percentage:.1f}",
                *category_values,
            ]
        )
    return out.getvalue()


def recap_filename(period: Period, today: date) -> str:
    return f"gradewise_recap_{period.value.lower()}_{today.isoformat()}.csv"


def render_monthly_attendance_csv(rows: Sequence[MonthlyAttendanceRow]) -> str:
    out = io.StringIO()
    writer = _writer(out)
    writer.writerow(MONTHLY_ATTENDANCE_HEADERS)
    for row in rows:
        writer.writerow([row.student_name, row.present, row.late, row.sick, row.permit, row.absent, row.effective_days])
    return out.getvalue()


def monthly_attendance_filename(month_of: date) -> str:
    return f"attendance_recap_{month_of.strftime('%Y-%m')}.csv"
