from __future__ import annotations

from flask import Flask, jsonify, session

from ..common.web import json_body, ok, student_required, teacher_required
from ..container import Container
from .model import Student


def student_to_dict(student: Student) -> dict:
    return {
        "id": student.student_id,
        "name": student.name,
        "email": student.email,
        "photo_url": student.photo_url,
        "address": student.address,
        "phone": student.phone,
        "parent_phone": student.parent_phone,
        "position_id": student.position_id,
        "device_registered": student.device_id is not None,
    }


def _student_fields(data: dict) -> dict:
    return {
        "name": data.get("name", ""),
        "email": data.get("email", ""),
        "photo_url": data.get("photo_url"),
        "address": data.get("address"),
        "phone": data.get("phone"),
        "parent_phone": data.get("parent_phone"),
        "position_id": data.get("position_id"),
    }


def register(app: Flask, container: Container) -> None:
    @app.route("/api/students", methods=["GET"], endpoint="students_list")
    @teacher_required
    def students_list():
        return jsonify([student_to_dict(s) for s in container.student_service.list_students()])

    @app.route("/api/students/<student_id>", methods=["GET"], endpoint="students_detail")
    @teacher_required
    def students_detail(student_id: str):
        return jsonify(student_to_dict(container.student_service.get_student(student_id)))

    @app.route("/api/students", methods=["POST"], endpoint="students_create")
    @teacher_required
    def students_create():
        data = json_body()
        student = container.student_service.add_student(password=data.get("password", ""), **_student_fields(data))
        return ok({"student": student_to_dict(student)}, 201)

    @app.route("/api/students/<student_id>", methods=["PUT"], endpoint="students_update")
    @teacher_required
    def students_update(student_id: str):
        data = json_body()
        student = container.student_service.update_student(
            student_id, password=data.get("password"), **_student_fields(data)
        )
        return ok({"student": student_to_dict(student)})

    @app.route("/api/students/<student_id>", methods=["DELETE"], endpoint="students_delete")
    @teacher_required
    def students_delete(student_id: str):
        container.student_service.delete_student(student_id)
        return ok()

    @app.route("/api/students/<student_id>/reset-device", methods=["POST"], endpoint="students_reset_device")
    @teacher_required
    def students_reset_device(student_id: str):
        student = container.student_service.reset_device(student_id)
        return ok({"student": student_to_dict(student)})

    @app.route("/api/student/profile", methods=["GET"], endpoint="student_profile")
    @student_required
    def student_profile():
        return jsonify(student_to_dict(container.student_service.get_student(session["user_id"])))

    @app.route("/api/student/profile", methods=["PUT"], endpoint="student_profile_update")
    @student_required
    def student_profile_update():
        data = json_body()
        student = container.student_service.update_profile(
            session["user_id"],
            photo_url=data.get("photo_url"),
            address=data.get("address"),
            phone=data.get("phone"),
            parent_phone=data.get("parent_phone"),
            password=data.get("password"),
        )
        return ok({"student": student_to_dict(student)})
