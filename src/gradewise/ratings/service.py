from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date, datetime, time
from typing import Dict, Mapping, Optional, Sequence

from ..attendance.deriver import derive_attendance_score
from ..attendance.repository import AttendanceRepository
from ..categories.model import CategoryKey
from ..categories.repository import CategoryRepository
from ..core.constants import MAX_SCORE, MIN_SCORE
from ..core.exceptions import NotFoundError, SystemCategoryError, ValidationError
from ..school.repository import SettingsRepository
from ..students.repository import StudentRepository
from .model import Rating, compute_average, rating_id_for
from .repository import RatingRepository

logger = logging.getLogger(__name__)


class RatingService:
    """Use case: daily star ratings with the attendance score merged in."""

    def __init__(
        self,
        ratings: RatingRepository,
        categories: CategoryRepository,
        attendance: AttendanceRepository,
        settings: SettingsRepository,
        students: StudentRepository,
    ):
        self._ratings = ratings
        self._categories = categories
        self._attendance = attendance
        self._settings = settings
        self._students = students

    def list_ratings(self) -> Sequence[Rating]:
        return self._ratings.list_all()

    def list_for_student(self, student_id: str) -> Sequence[Rating]:
        return self._ratings.list_for_student(student_id)

    def save_rating(self, student_id: str, day: date, manual_scores: Optional[Mapping[str, int]] = None) -> Rating:
        """Merge manual scores into the day's record and inject the attendance score.

        New manual values override old ones per category; categories not in
        ``manual_scores`` keep their previous value. When no attendance score
        can be derived yet, a previously stored one is left as is.
        """

        if not self._students.get_by_id(student_id):
            raise NotFoundError("Student not found")

        manual = self._validate_manual_scores(manual_scores or {})
        existing = self._ratings.get_for_student_and_date(student_id, day)

        merged: Dict[CategoryKey, int] = dict(existing.scores) if existing else {}
        merged.update(manual)

        attendance_score = derive_attendance_score(
            self._attendance.list_for_student(student_id),
            late_time=self._settings.get().late_time,
            day=day,
            student_id=student_id,
        )
        if attendance_score is not None:
            merged[CategoryKey.ATTENDANCE] = attendance_score

        rating = Rating(
            record_id=rating_id_for(student_id, day),
            student_id=student_id,
            day=day,
            scores=merged,
            average=compute_average(merged),
            created_at=existing.created_at if existing else datetime.combine(day, time()).timestamp(),
        )
        self._ratings.upsert(rating)
        return rating

    def refresh_attendance_score(self, student_id: str, day: date) -> Optional[Rating]:
        """Recompute the attendance entry of an existing rating record, if any."""

        if not self._ratings.get_for_student_and_date(student_id, day):
            return None
        return self.save_rating(student_id, day, {})

    def remove_category(self, key: CategoryKey) -> int:
        """Strip a deleted category from every rating and recompute averages."""

        changed = 0
        updated = []
        for rating in self._ratings.list_all():
            if key in rating.scores:
                scores = {k: v for k, v in rating.scores.items() if k != key}
                rating = replace(rating, scores=scores, average=compute_average(scores))
                changed += 1
            updated.append(rating)

        if changed:
            self._ratings.replace_all(updated)
            logger.info("Removed category %s from %d ratings", key, changed)
        return changed

    def _validate_manual_scores(self, manual_scores: Mapping[str, int]) -> Dict[CategoryKey, int]:
        out: Dict[CategoryKey, int] = {}
        for raw_key, value in manual_scores.items():
            try:
                key = CategoryKey.parse(str(raw_key))
            except ValueError:
                raise ValidationError(f"Unknown category: {raw_key}")

            if key.is_system:
                raise SystemCategoryError("The Attendance score is calculated automatically")
            if not self._categories.get(key):
                raise ValidationError(f"Unknown category: {raw_key}")

            if isinstance(value, bool) or not isinstance(value, int) or not MIN_SCORE <= value <= MAX_SCORE:
                raise ValidationError(f"Scores must be whole numbers from {MIN_SCORE} to {MAX_SCORE}")
            out[key] = value
        return out
