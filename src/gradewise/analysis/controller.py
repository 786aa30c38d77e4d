from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.web import error_response, teacher_required
from ..container import Container
from ..core.enums import Period
from ..core.exceptions import ValidationError


def register(app: Flask, container: Container) -> None:
    @app.route("/api/students/<student_id>/analysis", methods=["POST"], endpoint="student_analysis")
    @teacher_required
    def student_analysis(student_id: str):
        if not container.analysis_service.available:
            return error_response("Student analysis is not configured", 503)

        try:
            period = Period(request.args.get("period") or Period.ALL_TIME.value)
        except ValueError:
            raise ValidationError("Period must be 'weekly', 'monthly' or 'all-time'")

        result = container.analysis_service.analyze_student(student_id, period)
        return jsonify({"success": True, "analysis": result.analysis})
