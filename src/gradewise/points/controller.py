from __future__ import annotations

from flask import Flask, jsonify, request, session

from ..common.web import json_body, ok, optional_date, student_required, teacher_required
from ..container import Container
from .model import PointRecord


def point_record_to_dict(record: PointRecord) -> dict:
    return {
        "id": record.record_id,
        "student_id": record.student_id,
        "type": record.point_type.value,
        "description": record.description,
        "points": record.points,
        "date": record.day.isoformat(),
        "issued_by": record.issued_by,
    }


def register(app: Flask, container: Container) -> None:
    @app.route("/api/points", methods=["GET"], endpoint="points_list")
    @teacher_required
    def points_list():
        student_id = request.args.get("student_id")
        if student_id:
            records = container.point_service.list_for_student(student_id)
        else:
            records = container.point_service.list_point_records()
        records = sorted(records, key=lambda r: (r.day, r.created_at), reverse=True)
        return jsonify([point_record_to_dict(r) for r in records])

    @app.route("/api/points", methods=["POST"], endpoint="points_create")
    @teacher_required
    def points_create():
        data = json_body()
        record = container.point_service.add_point_record(
            student_id=str(data.get("student_id", "")),
            point_type=data.get("type", ""),
            points=data.get("points"),
            description=data.get("description", ""),
            issued_by=session.get("name") or session["user_id"],
            day=optional_date(data.get("date")),
        )
        return ok({"record": point_record_to_dict(record)}, 201)

    @app.route("/api/student/points", methods=["GET"], endpoint="student_points")
    @student_required
    def student_points():
        records = container.point_service.list_for_student(session["user_id"])
        records = sorted(records, key=lambda r: (r.day, r.created_at), reverse=True)
        return jsonify([point_record_to_dict(r) for r in records])
