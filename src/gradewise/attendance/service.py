from __future__ import annotations

import logging
import time
from dataclasses import replace
from datetime import date, datetime
from typing import Mapping, Optional, Sequence

from ..common.datetime_utils import at_time_of_day, format_hhmm, now_local
from ..common.geo import GeoPoint, distance_meters, geolocation_error_message
from ..common.validators import require_non_empty
from ..core.constants import MAX_REASON_LENGTH
from ..core.enums import ATTENDED_STATUSES, AttendanceStatus, EXCUSED_STATUSES
from ..core.exceptions import LocationError, ValidationError
from ..ratings.service import RatingService
from ..school.repository import SettingsRepository
from ..students.service import StudentService
from .factory import AttendanceStrategyFactory
from .model import AttendanceRecord, attendance_id_for
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)

# Statuses a teacher override sets without a check-in.
_OVERRIDE_WITHOUT_CHECKIN = frozenset({AttendanceStatus.SICK, AttendanceStatus.PERMIT, AttendanceStatus.ABSENT})


class AttendanceService:
    def __init__(
        self,
        attendance: AttendanceRepository,
        students: StudentService,
        settings: SettingsRepository,
        ratings: RatingService,
        *,
        strategy_factory: AttendanceStrategyFactory | None = None,
    ):
        self._attendance = attendance
        self._students = students
        self._settings = settings
        self._ratings = ratings
        self._factory = strategy_factory or AttendanceStrategyFactory()

    def check_in(
        self,
        student_id: str,
        *,
        latitude: float | None,
        longitude: float | None,
        device_id: str,
        accuracy: float | None = None,
        geolocation_error: int | None = None,
        now: datetime | None = None,
    ) -> AttendanceRecord:
        now = now or now_local()
        today = now.date()
        settings = self._settings.get()

        if geolocation_error is not None:
            raise LocationError(geolocation_error_message(geolocation_error))
        if latitude is None or longitude is None:
            raise LocationError("Your location is required to check in")

        distance = distance_meters(GeoPoint(float(latitude), float(longitude)), settings.location)
        if distance > settings.check_in_radius:
            raise LocationError(
                f"You are too far from school ({round(distance)} m). "
                f"Check-in is only allowed within {settings.check_in_radius:g} m."
            )

        existing = self._attendance.get_for_student_and_date(student_id, today)
        if existing and existing.status in EXCUSED_STATUSES:
            raise ValidationError("You already reported an absence for today")
        if existing and existing.check_in is not None:
            raise ValidationError("You already checked in today")

        self._students.bind_device(student_id, device_id)

        strategy = self._factory.for_checkin(now=now, late_time=settings.late_time)
        decision = strategy.decide_checkin(now=now, late_time=settings.late_time)

        record = AttendanceRecord(
            record_id=attendance_id_for(student_id, today),
            student_id=student_id,
            day=today,
            status=decision.status,
            check_in=now,
            check_out=None,
            reason=None,
            created_at=existing.created_at if existing else time.time(),
        )
        self._attendance.upsert(record)
        logger.info(
            "Student %s checked in at %s (%s, %.0f m, accuracy %s)",
            student_id,
            now.isoformat(timespec="seconds"),
            decision.note or decision.status.value,
            distance,
            accuracy,
        )

        self._ratings.save_rating(student_id, today, {})
        return record

    def can_check_out(self, now: datetime | None = None) -> bool:
        now = now or now_local()
        return now >= at_time_of_day(now, self._settings.get().check_out_time)

    def check_out(self, student_id: str, *, now: datetime | None = None) -> AttendanceRecord:
        now = now or now_local()
        settings = self._settings.get()

        if not self.can_check_out(now):
            raise ValidationError(f"Check-out opens at {format_hhmm(settings.check_out_time)}")

        record = self._attendance.get_for_student_and_date(student_id, now.date())
        if not record or record.check_in is None:
            raise ValidationError("You have not checked in today")
        if record.check_out is not None:
            raise ValidationError("You already checked out today")

        updated = replace(record, check_out=now)
        self._attendance.upsert(updated)
        logger.info("Student %s checked out at %s", student_id, now.isoformat(timespec="seconds"))
        return updated

    def report_absence(
        self,
        student_id: str,
        status: AttendanceStatus | str,
        reason: str,
        *,
        now: datetime | None = None,
    ) -> AttendanceRecord:
        now = now or now_local()
        today = now.date()

        try:
            status = AttendanceStatus(status)
        except ValueError:
            raise ValidationError("Status must be 'sick' or 'permit'")
        if status not in EXCUSED_STATUSES:
            raise ValidationError("Status must be 'sick' or 'permit'")

        reason = require_non_empty(reason, "Reason")
        if len(reason) > MAX_REASON_LENGTH:
            raise ValidationError(f"Reason must be at most {MAX_REASON_LENGTH} characters")

        self._students.get_student(student_id)
        existing = self._attendance.get_for_student_and_date(student_id, today)
        if existing and existing.check_in is not None:
            raise ValidationError("You already checked in today")

        record = AttendanceRecord(
            record_id=attendance_id_for(student_id, today),
            student_id=student_id,
            day=today,
            status=status,
            reason=reason,
            created_at=existing.created_at if existing else time.time(),
        )
        self._attendance.upsert(record)
        logger.info("Student %s reported %s for %s", student_id, status.value, today)
        self._ratings.refresh_attendance_score(student_id, today)
        return record

    def record_attendance(self, day: date, statuses: Mapping[str, AttendanceStatus | str]) -> Sequence[AttendanceRecord]:
        """Teacher override for one day. A student's own sick/permit report is never overwritten."""

        parsed = {}
        for student_id, status in statuses.items():
            try:
                parsed[student_id] = AttendanceStatus(status)
            except ValueError:
                raise ValidationError(f"Invalid attendance status: {status}")
            if parsed[student_id] == AttendanceStatus.NO_CHECKOUT:
                raise ValidationError("'no_checkout' is set automatically")
            self._students.get_student(student_id)

        saved = []
        for student_id, status in parsed.items():
            existing = self._attendance.get_for_student_and_date(student_id, day)
            if existing and existing.status in EXCUSED_STATUSES:
                continue

            if existing is None:
                record = AttendanceRecord(
                    record_id=attendance_id_for(student_id, day),
                    student_id=student_id,
                    day=day,
                    status=status,
                    created_at=time.time(),
                )
            elif status in _OVERRIDE_WITHOUT_CHECKIN:
                record = replace(existing, status=status, check_in=None, check_out=None, reason=None)
            else:
                record = replace(existing, status=status)

            self._attendance.upsert(record)
            self._ratings.refresh_attendance_score(student_id, day)
            saved.append(record)

        logger.info("Recorded attendance for %d students on %s", len(saved), day)
        return saved

    def list_attendance(self, *, today: date | None = None) -> Sequence[AttendanceRecord]:
        self._close_stale_checkins(self._attendance.list_all(), today or now_local().date())
        return self._attendance.list_all()

    def list_for_student(self, student_id: str, *, today: date | None = None) -> Sequence[AttendanceRecord]:
        self._close_stale_checkins(self._attendance.list_for_student(student_id), today or now_local().date())
        return sorted(self._attendance.list_for_student(student_id), key=lambda r: r.day, reverse=True)

    def get_today_record(self, student_id: str, today: date) -> Optional[AttendanceRecord]:
        return self._attendance.get_for_student_and_date(student_id, today)

    def _close_stale_checkins(self, records: Sequence[AttendanceRecord], today: date) -> None:
        """Past days checked in but never checked out become ``no_checkout``."""

        for record in records:
            if (
                record.day < today
                and record.check_in is not None
                and record.check_out is None
                and record.status in ATTENDED_STATUSES
            ):
                self._attendance.upsert(replace(record, status=AttendanceStatus.NO_CHECKOUT))
                logger.info("Marked %s as no_checkout for %s", record.student_id, record.day)
                self._ratings.refresh_attendance_score(record.student_id, record.day)
