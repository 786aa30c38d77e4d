from __future__ import annotations

from flask import Flask, jsonify, request, session

from ..common.datetime_utils import now_local
from ..common.web import json_body, ok, optional_date, student_required, teacher_required
from ..container import Container
from ..core.exceptions import ValidationError
from .model import Rating


def rating_to_dict(rating: Rating) -> dict:
    return {
        "id": rating.record_id,
        "student_id": rating.student_id,
        "date": rating.day.isoformat(),
        "ratings": {key.to_storage(): score for key, score in rating.scores.items()},
        "average": round(rating.average, 2),
    }


def register(app: Flask, container: Container) -> None:
    @app.route("/api/ratings", methods=["GET"], endpoint="ratings_list")
    @teacher_required
    def ratings_list():
        student_id = request.args.get("student_id")
        day = optional_date(request.args.get("date"))

        if student_id:
            ratings = container.rating_service.list_for_student(student_id)
        else:
            ratings = container.rating_service.list_ratings()
        if day:
            ratings = [r for r in ratings if r.day == day]
        return jsonify([rating_to_dict(r) for r in sorted(ratings, key=lambda r: r.day, reverse=True)])

    @app.route("/api/ratings", methods=["POST"], endpoint="ratings_save")
    @teacher_required
    def ratings_save():
        data = json_body()
        scores = data.get("ratings") or {}
        if not isinstance(scores, dict):
            raise ValidationError("'ratings' must be an object of category id to score")

        rating = container.rating_service.save_rating(
            str(data.get("student_id", "")),
            optional_date(data.get("date")) or now_local().date(),
            scores,
        )
        return ok({"rating": rating_to_dict(rating)})

    @app.route("/api/student/ratings", methods=["GET"], endpoint="student_ratings")
    @student_required
    def student_ratings():
        ratings = container.rating_service.list_for_student(session["user_id"])
        return jsonify([rating_to_dict(r) for r in sorted(ratings, key=lambda r: r.day, reverse=True)])
