from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import List, Optional

from ..attendance.service import AttendanceService
from ..categories.service import CategoryService
from ..common.datetime_utils import now_local
from ..core.enums import Period
from ..points.service import PointService
from ..ratings.service import RatingService
from ..students.service import StudentService
from .attendance_recap import build_monthly_attendance_recap
from .engine import build_recap, build_weekly_leaderboard
from .exporter import monthly_attendance_filename, recap_filename, render_monthly_attendance_csv, render_recap_csv
from .model import MonthlyAttendanceRow, StudentRecap


@dataclass(frozen=True)
class CsvExport:
    filename: str
    content: str


class RecapService:
    """Reads every collection and delegates to the pure recap functions."""

    def __init__(
        self,
        students: StudentService,
        categories: CategoryService,
        ratings: RatingService,
        attendance: AttendanceService,
        points: PointService,
    ):
        self._students = students
        self._categories = categories
        self._ratings = ratings
        self._attendance = attendance
        self._points = points

    def build_recap(self, period: Period, *, today: Optional[date] = None) -> List[StudentRecap]:
        today = today or now_local().date()
        # Attendance first: the no_checkout rewrite may refresh ratings.
        attendance = self._attendance.list_attendance(today=today)
        return build_recap(
            students=self._students.list_students(),
            categories=self._categories.list_categories(),
            ratings=self._ratings.list_ratings(),
            attendance=attendance,
            points=self._points.list_point_records(),
            period=period,
            today=today,
        )

    def weekly_leaderboard(self, *, today: Optional[date] = None) -> List[StudentRecap]:
        today = today or now_local().date()
        attendance = self._attendance.list_attendance(today=today)
        return build_weekly_leaderboard(
            students=self._students.list_students(),
            categories=self._categories.list_categories(),
            ratings=self._ratings.list_ratings(),
            attendance=attendance,
            points=self._points.list_point_records(),
            today=today,
        )

    def export_recap_csv(self, period: Period, *, today: Optional[date] = None) -> CsvExport:
        today = today or now_local().date()
        recaps = self.build_recap(period, today=today)
        return CsvExport(
            filename=recap_filename(period, today),
            content=render_recap_csv(recaps, self._categories.list_categories()),
        )

    def monthly_attendance(self, *, month_of: Optional[date] = None) -> List[MonthlyAttendanceRow]:
        month_of = month_of or now_local().date()
        return build_monthly_attendance_recap(
            self._students.list_students(),
            self._attendance.list_attendance(),
            month_of,
        )

    def export_monthly_attendance_csv(self, *, month_of: Optional[date] = None) -> CsvExport:
        month_of = month_of or now_local().date()
        return CsvExport(
            filename=monthly_attendance_filename(month_of),
            content=render_monthly_attendance_csv(self.monthly_attendance(month_of=month_of)),
        )
