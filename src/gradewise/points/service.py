from __future__ import annotations

import time
import uuid
from datetime import date
from typing import Optional, Sequence

from ..common.datetime_utils import now_local
from ..common.validators import require_non_empty
from ..core.enums import PointType
from ..core.exceptions import NotFoundError, ValidationError
from ..students.repository import StudentRepository
from .model import PointRecord
from .repository import PointRecordRepository


class PointService:
    def __init__(self, points: PointRecordRepository, students: StudentRepository):
        self._points = points
        self._students = students

    def list_point_records(self) -> Sequence[PointRecord]:
        return self._points.list_all()

    def list_for_student(self, student_id: str) -> Sequence[PointRecord]:
        return self._points.list_for_student(student_id)

    def add_point_record(
        self,
        *,
        student_id: str,
        point_type: PointType | str,
        points: int,
        description: str,
        issued_by: str,
        day: Optional[date] = None,
    ) -> PointRecord:
        if not self._students.get_by_id(student_id):
            raise NotFoundError("Student not found")

        try:
            point_type = PointType(point_type)
        except ValueError:
            raise ValidationError("Point type must be 'award' or 'violation'")

        try:
            amount = abs(int(points))
        except (TypeError, ValueError):
            raise ValidationError("Points must be a whole number")
        if amount < 1:
            raise ValidationError("Points must be at least 1")

        record = PointRecord(
            record_id=f"pr-{uuid.uuid4().hex}",
            student_id=student_id,
            point_type=point_type,
            description=require_non_empty(description, "Description"),
            points=-amount if point_type == PointType.VIOLATION else amount,
            day=day or now_local().date(),
            issued_by=issued_by,
            created_at=time.time(),
        )
        self._points.insert(record)
        return record
