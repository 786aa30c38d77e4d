from __future__ import annotations

import logging
from datetime import date
from typing import Optional, Protocol

from ..attendance.service import AttendanceService
from ..categories.service import CategoryService
from ..common.datetime_utils import now_local
from ..core.enums import Period
from ..core.exceptions import ValidationError
from ..points.service import PointService
from ..ratings.service import RatingService
from ..recap.engine import period_start
from ..students.service import StudentService
from .model import (
    AnalysisInput,
    AnalysisResult,
    AttendanceEntry,
    CategoryEntry,
    PointEntry,
    RatingEntry,
    StudentInfo,
)
from .prompt import render_analysis_prompt

logger = logging.getLogger(__name__)

PERIOD_LABELS = {
    Period.WEEKLY: "This week",
    Period.MONTHLY: "This month",
    Period.ALL_TIME: "All time",
}


class StudentAnalyzer(Protocol):
    """External narrative-analysis collaborator (e.g. an LLM endpoint)."""

    def analyze(self, prompt: str, payload: dict) -> str:
        raise NotImplementedError


def _fmt(day: date) -> str:
    return day.strftime("%d %b %Y")


class AnalysisService:
    def __init__(
        self,
        students: StudentService,
        categories: CategoryService,
        ratings: RatingService,
        attendance: AttendanceService,
        points: PointService,
        analyzer: Optional[StudentAnalyzer] = None,
    ):
        self._students = students
        self._categories = categories
        self._ratings = ratings
        self._attendance = attendance
        self._points = points
        self._analyzer = analyzer

    @property
    def available(self) -> bool:
        return self._analyzer is not None

    def build_input(self, student_id: str, period: Period = Period.ALL_TIME, *, today: Optional[date] = None) -> AnalysisInput:
        today = today or now_local().date()
        start = period_start(period, today)
        student = self._students.get_student(student_id)

        def in_period(day: date) -> bool:
            return start is None or day >= start

        attendance = self._attendance.list_for_student(student_id, today=today)
        ratings = sorted(self._ratings.list_for_student(student_id), key=lambda r: r.day)
        points = sorted(self._points.list_for_student(student_id), key=lambda p: p.day)

        return AnalysisInput(
            student=StudentInfo(id=student.student_id, name=student.name, email=student.email),
            period=PERIOD_LABELS[period],
            ratings=[
                RatingEntry(
                    date=_fmt(r.day),
                    ratings={k.to_storage(): v for k, v in r.scores.items()},
                    average=round(r.average, 2),
                )
                for r in ratings
                if in_period(r.day)
            ],
            attendance=[
                AttendanceEntry(date=_fmt(a.day), status=a.status.value)
                for a in sorted(attendance, key=lambda a: a.day)
                if in_period(a.day)
            ],
            point_records=[
                PointEntry(date=_fmt(p.day), type=p.point_type.value, description=p.description, points=p.points)
                for p in points
                if in_period(p.day)
            ],
            categories=[
                CategoryEntry(id=c.key.to_storage(), name=c.name, is_system=c.is_system)
                for c in self._categories.list_categories()
            ],
        )

    def analyze_student(self, student_id: str, period: Period = Period.ALL_TIME, *, today: Optional[date] = None) -> AnalysisResult:
        if self._analyzer is None:
            raise ValidationError("Student analysis is not configured")

        payload = self.build_input(student_id, period, today=today)
        logger.info("Requesting analysis for student %s (%s)", student_id, payload.period)
        text = self._analyzer.analyze(render_analysis_prompt(payload), payload.to_dict())
        return AnalysisResult(analysis=(text or "").strip())
