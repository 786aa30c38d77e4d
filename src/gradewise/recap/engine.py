"""Recap aggregation.

Pure functions over in-memory collections: every call is a full scan, nothing
is cached between calls.
"""

from __future__ import annotations

from collections import defaultdict
from datetime import date
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from ..attendance.model import AttendanceRecord
from ..categories.model import Category, CategoryKey
from ..common.datetime_utils import start_of_month, start_of_week
from ..core.enums import ATTENDED_STATUSES, Period
from ..points.model import PointRecord
from ..ratings.model import Rating
from ..students.model import Student
from .model import CategoryAverage, DailyAverage, StudentRecap


def period_start(period: Period, today: date) -> Optional[date]:
    """First day included in ``period``; None means unbounded."""

    if period == Period.WEEKLY:
        return start_of_week(today)
    if period == Period.MONTHLY:
        return start_of_month(today)
    return None


def _since(items, start: Optional[date]):
    if start is None:
        return list(items)
    return [i for i in items if i.day >= start]


def _group_by_student(items) -> Dict[str, list]:
    grouped: Dict[str, list] = defaultdict(list)
    for item in items:
        grouped[item.student_id].append(item)
    return grouped


def _mean(values: Sequence[float]) -> float:
    return sum(values) / len(values) if values else 0.0


def summarize_student(
    student: Student,
    categories: Sequence[Category],
    ratings: Sequence[Rating],
    attendance: Sequence[AttendanceRecord],
    points: Sequence[PointRecord],
) -> StudentRecap:
    """Rollup for one student; inputs must already be restricted to that student and period."""

    names = {c.key: c.name for c in categories}
    sums: Dict[CategoryKey, Tuple[float, int]] = {}
    for rating in ratings:
        if not isinstance(rating.scores, Mapping):
            continue
        for key, score in rating.scores.items():
            if key not in names:
                continue
            total, count = sums.get(key, (0.0, 0))
            sums[key] = (total + score, count + 1)

    category_averages = {
        c.key: CategoryAverage(name=c.name, average=sums[c.key][0] / sums[c.key][1])
        for c in categories
        if c.key in sums
    }

    days_present = sum(1 for a in attendance if a.status in ATTENDED_STATUSES)
    attendance_percentage = days_present / len(attendance) * 100 if attendance else 0.0

    return StudentRecap(
        student_id=student.student_id,
        student_name=student.name,
        photo_url=student.photo_url,
        overall_average=_mean([r.average for r in ratings]),
        total_points=sum(p.points for p in points),
        total_ratings=len(ratings),
        category_averages=category_averages,
        attendance_percentage=attendance_percentage,
        days_present=days_present,
        daily_averages=sorted(
            (DailyAverage(day=r.day, average=r.average) for r in ratings),
            key=lambda d: d.day,
        ),
    )


def build_recap(
    *,
    students: Iterable[Student],
    categories: Sequence[Category],
    ratings: Iterable[Rating],
    attendance: Iterable[AttendanceRecord],
    points: Iterable[PointRecord],
    period: Period,
    today: date,
) -> List[StudentRecap]:
    """Per-student summaries for ``period``, best overall average first.

    Ties keep the order of ``students``.
    """

    start = period_start(period, today)
    ratings_by_student = _group_by_student(_since(ratings, start))
    attendance_by_student = _group_by_student(_since(attendance, start))
    points_by_student = _group_by_student(_since(points, start))

    recaps = [
        summarize_student(
            student,
            categories,
            ratings_by_student.get(student.student_id, []),
            attendance_by_student.get(student.student_id, []),
            points_by_student.get(student.student_id, []),
        )
        for student in students
    ]
    return sorted(recaps, key=lambda r: r.overall_average, reverse=True)


def build_weekly_leaderboard(
    *,
    students: Iterable[Student],
    categories: Sequence[Category],
    ratings: Iterable[Rating],
    attendance: Iterable[AttendanceRecord],
    points: Iterable[PointRecord],
    today: date,
) -> List[StudentRecap]:
    """This week's active students ranked by overall average plus points."""

    recaps = build_recap(
        students=students,
        categories=categories,
        ratings=ratings,
        attendance=attendance,
        points=points,
        period=Period.WEEKLY,
        today=today,
    )
    active = [r for r in recaps if r.total_ratings > 0 or r.total_points != 0]
    return sorted(active, key=lambda r: r.leaderboard_score, reverse=True)
