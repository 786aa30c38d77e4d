from __future__ import annotations

import calendar
from datetime import date
from typing import Iterable, List

from ..attendance.model import AttendanceRecord
from ..core.enums import AttendanceStatus
from ..students.model import Student
from .model import MonthlyAttendanceRow


def effective_days_in_month(month_of: date) -> int:
    """Number of Monday-Friday days in the month containing ``month_of``."""
    _, last_day = calendar.monthrange(month_of.year, month_of.month)
    return sum(1 for d in range(1, last_day + 1) if date(month_of.year, month_of.month, d).weekday() < 5)


def build_monthly_attendance_recap(
    students: Iterable[Student],
    attendance: Iterable[AttendanceRecord],
    month_of: date,
) -> List[MonthlyAttendanceRow]:
    in_month = [a for a in attendance if a.day.year == month_of.year and a.day.month == month_of.month]
    effective_days = effective_days_in_month(month_of)

    rows = []
    for student in students:
        statuses = [a.status for a in in_month if a.student_id == student.student_id]
        rows.append(
            MonthlyAttendanceRow(
                student_id=student.student_id,
                student_name=student.name,
                present=statuses.count(AttendanceStatus.PRESENT),
                late=statuses.count(AttendanceStatus.LATE),
                sick=statuses.count(AttendanceStatus.SICK),
                permit=statuses.count(AttendanceStatus.PERMIT),
                absent=statuses.count(AttendanceStatus.ABSENT),
                effective_days=effective_days,
            )
        )
    return rows
