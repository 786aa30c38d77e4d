from __future__ import annotations

from flask import Flask, jsonify, request, session

from ..common.datetime_utils import now_local
from ..common.web import json_body, ok, optional_date, optional_float, optional_int, student_required, teacher_required
from ..container import Container
from ..core.exceptions import ValidationError
from .model import AttendanceRecord


def attendance_to_dict(record: AttendanceRecord) -> dict:
    return {
        "id": record.record_id,
        "student_id": record.student_id,
        "date": record.day.isoformat(),
        "status": record.status.value,
        "check_in": record.check_in.isoformat(timespec="seconds") if record.check_in else None,
        "check_out": record.check_out.isoformat(timespec="seconds") if record.check_out else None,
        "reason": record.reason,
    }


def register(app: Flask, container: Container) -> None:
    @app.route("/api/attendance", methods=["GET"], endpoint="attendance_list")
    @teacher_required
    def attendance_list():
        day = optional_date(request.args.get("date"))
        records = container.attendance_service.list_attendance()
        if day:
            records = [r for r in records if r.day == day]
        records = sorted(records, key=lambda r: r.day, reverse=True)
        return jsonify([attendance_to_dict(r) for r in records])

    @app.route("/api/attendance", methods=["POST"], endpoint="attendance_record")
    @teacher_required
    def attendance_record():
        data = json_body()
        statuses = data.get("statuses") or {}
        if not isinstance(statuses, dict):
            raise ValidationError("'statuses' must be an object of student id to status")

        saved = container.attendance_service.record_attendance(
            optional_date(data.get("date")) or now_local().date(),
            statuses,
        )
        return ok({"records": [attendance_to_dict(r) for r in saved]})

    @app.route("/api/student/check-in", methods=["POST"], endpoint="student_check_in")
    @student_required
    def student_check_in():
        data = json_body()
        record = container.attendance_service.check_in(
            session["user_id"],
            latitude=optional_float(data.get("latitude"), "Latitude"),
            longitude=optional_float(data.get("longitude"), "Longitude"),
            accuracy=optional_float(data.get("accuracy"), "Accuracy"),
            device_id=str(data.get("device_id") or ""),
            geolocation_error=optional_int(data.get("geolocation_error"), "Geolocation error"),
        )
        return ok({"record": attendance_to_dict(record)})

    @app.route("/api/student/check-out", methods=["POST"], endpoint="student_check_out")
    @student_required
    def student_check_out():
        record = container.attendance_service.check_out(session["user_id"])
        return ok({"record": attendance_to_dict(record)})

    @app.route("/api/student/absence", methods=["POST"], endpoint="student_absence")
    @student_required
    def student_absence():
        data = json_body()
        record = container.attendance_service.report_absence(
            session["user_id"],
            data.get("status", ""),
            data.get("reason", ""),
        )
        return ok({"record": attendance_to_dict(record)})

    @app.route("/api/student/attendance", methods=["GET"], endpoint="student_attendance")
    @student_required
    def student_attendance():
        now = now_local()
        records = container.attendance_service.list_for_student(session["user_id"], today=now.date())
        today_record = container.attendance_service.get_today_record(session["user_id"], now.date())
        return jsonify(
            {
                "today": attendance_to_dict(today_record) if today_record else None,
                "can_check_out": container.attendance_service.can_check_out(now),
                "history": [attendance_to_dict(r) for r in records],
            }
        )
