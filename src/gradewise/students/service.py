from __future__ import annotations

import logging
import time
import uuid
from dataclasses import replace
from typing import Optional, Sequence

from werkzeug.security import generate_password_hash

from ..attendance.repository import AttendanceRepository
from ..common.validators import optional_text, require_email, require_min_length
from ..core.constants import MIN_NAME_LENGTH, MIN_PASSWORD_LENGTH
from ..core.exceptions import NotFoundError, ValidationError
from ..points.repository import PointRecordRepository
from ..ratings.repository import RatingRepository
from .device import DeviceBinding
from .model import Student
from .repository import StudentRepository

logger = logging.getLogger(__name__)


class StudentService:
    """Use case: manage students (teacher) and their own profile (student)."""

    def __init__(
        self,
        students: StudentRepository,
        ratings: RatingRepository,
        attendance: AttendanceRepository,
        points: PointRecordRepository,
    ):
        self._students = students
        self._ratings = ratings
        self._attendance = attendance
        self._points = points

    def list_students(self) -> Sequence[Student]:
        return sorted(self._students.list_all(), key=lambda s: s.name.lower())

    def get_student(self, student_id: str) -> Student:
        student = self._students.get_by_id(student_id)
        if not student:
            raise NotFoundError("Student not found")
        return student

    def add_student(
        self,
        *,
        name: str,
        email: str,
        password: str,
        photo_url: Optional[str] = None,
        address: Optional[str] = None,
        phone: Optional[str] = None,
        parent_phone: Optional[str] = None,
        position_id: Optional[str] = None,
    ) -> Student:
        name = require_min_length((name or "").strip(), "Student name", MIN_NAME_LENGTH)
        email = require_email(email)
        require_min_length(password, "Password", MIN_PASSWORD_LENGTH)

        if self._students.get_by_email(email):
            raise ValidationError("Student email is already registered")

        student = Student(
            student_id=uuid.uuid4().hex,
            name=name,
            email=email,
            password_hash=generate_password_hash(password),
            photo_url=optional_text(photo_url),
            address=optional_text(address),
            phone=optional_text(phone),
            parent_phone=optional_text(parent_phone),
            position_id=optional_text(position_id),
            created_at=time.time(),
        )
        self._students.insert(student)
        return student

    def update_student(
        self,
        student_id: str,
        *,
        name: str,
        email: str,
        password: Optional[str] = None,
        photo_url: Optional[str] = None,
        address: Optional[str] = None,
        phone: Optional[str] = None,
        parent_phone: Optional[str] = None,
        position_id: Optional[str] = None,
    ) -> Student:
        student = self.get_student(student_id)
        name = require_min_length((name or "").strip(), "Student name", MIN_NAME_LENGTH)
        email = require_email(email)

        other = self._students.get_by_email(email)
        if other and other.student_id != student_id:
            raise ValidationError("Student email is already registered")

        updated = replace(
            student,
            name=name,
            email=email,
            password_hash=self._new_password_hash(password) or student.password_hash,
            photo_url=optional_text(photo_url),
            address=optional_text(address),
            phone=optional_text(phone),
            parent_phone=optional_text(parent_phone),
            position_id=optional_text(position_id),
        )
        self._students.update(updated)
        return updated

    def update_profile(
        self,
        student_id: str,
        *,
        photo_url: Optional[str] = None,
        address: Optional[str] = None,
        phone: Optional[str] = None,
        parent_phone: Optional[str] = None,
        password: Optional[str] = None,
    ) -> Student:
        """Fields a student may change on their own profile."""

        student = self.get_student(student_id)
        updated = replace(
            student,
            photo_url=optional_text(photo_url),
            address=optional_text(address),
            phone=optional_text(phone),
            parent_phone=optional_text(parent_phone),
            password_hash=self._new_password_hash(password) or student.password_hash,
        )
        self._students.update(updated)
        return updated

    def delete_student(self, student_id: str) -> None:
        if not self._students.delete(student_id):
            raise NotFoundError("Student not found")

        ratings = self._ratings.delete_for_student(student_id)
        attendance = self._attendance.delete_for_student(student_id)
        points = self._points.delete_for_student(student_id)
        logger.info(
            "Deleted student %s with %d ratings, %d attendance and %d point records",
            student_id,
            ratings,
            attendance,
            points,
        )

    def clear_position(self, position_id: str) -> None:
        for student in self._students.list_all():
            if student.position_id == position_id:
                self._students.update(replace(student, position_id=None))

    def bind_device(self, student_id: str, device_id: str) -> Student:
        student = self.get_student(student_id)
        binding = DeviceBinding(student.device_id).bind(device_id)
        if binding.device_id == student.device_id:
            return student

        updated = replace(student, device_id=binding.device_id)
        self._students.update(updated)
        logger.info("Registered device for student %s", student_id)
        return updated

    def reset_device(self, student_id: str) -> Student:
        student = self.get_student(student_id)
        updated = replace(student, device_id=DeviceBinding(student.device_id).reset().device_id)
        self._students.update(updated)
        logger.info("Reset registered device for student %s", student_id)
        return updated

    @staticmethod
    def _new_password_hash(password: Optional[str]) -> Optional[str]:
        if not password or not password.strip():
            return None
        require_min_length(password, "Password", MIN_PASSWORD_LENGTH)
        return generate_password_hash(password)
