from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Dict, List, Optional

from ..categories.model import CategoryKey


@dataclass(frozen=True)
class CategoryAverage:
    name: str
    average: float


@dataclass(frozen=True)
class DailyAverage:
    day: date
    average: float


@dataclass(frozen=True)
class StudentRecap:
    """Per-student rollup of ratings, attendance and points over a period."""

    student_id: str
    student_name: str
    photo_url: Optional[str] = None
    overall_average: float = 0.0
    total_points: int = 0
    total_ratings: int = 0
    category_averages: Dict[CategoryKey, CategoryAverage] = field(default_factory=dict)
    attendance_percentage: float = 0.0
    days_present: int = 0
    daily_averages: List[DailyAverage] = field(default_factory=list)

    @property
    def leaderboard_score(self) -> float:
        return self.overall_average + self.total_points


@dataclass(frozen=True)
class MonthlyAttendanceRow:
    """Read-model for the monthly attendance recap (one row per student)."""

    student_id: str
    student_name: str
    present: int
    late: int
    sick: int
    permit: int
    absent: int
    effective_days: int
