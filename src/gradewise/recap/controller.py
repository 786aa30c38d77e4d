from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.web import csv_response, login_required, optional_date, teacher_required
from ..container import Container
from ..core.enums import Period
from ..core.exceptions import ValidationError
from .model import MonthlyAttendanceRow, StudentRecap


def recap_to_dict(recap: StudentRecap) -> dict:
    return {
        "student_id": recap.student_id,
        "student_name": recap.student_name,
        "photo_url": recap.photo_url,
        "overall_average": round(recap.overall_average, 2),
        "total_points": recap.total_points,
        "total_ratings": recap.total_ratings,
        "attendance_percentage": round(recap.attendance_percentage, 1),
        "days_present": recap.days_present,
        "category_averages": {
            key.to_storage(): {"name": avg.name, "average": round(avg.average, 2)}
            for key, avg in recap.category_averages.items()
        },
        "daily_averages": [{"date": d.day.isoformat(), "average": round(d.average, 2)} for d in recap.daily_averages],
    }


def monthly_row_to_dict(row: MonthlyAttendanceRow) -> dict:
    return {
        "student_id": row.student_id,
        "student_name": row.student_name,
        "present": row.present,
        "late": row.late,
        "sick": row.sick,
        "permit": row.permit,
        "absent": row.absent,
        "effective_days": row.effective_days,
    }


def _period_arg() -> Period:
    raw = request.args.get("period") or Period.WEEKLY.value
    try:
        return Period(raw)
    except ValueError:
        raise ValidationError("Period must be 'weekly', 'monthly' or 'all-time'")


def register(app: Flask, container: Container) -> None:
    @app.route("/api/recap", methods=["GET"], endpoint="recap")
    @teacher_required
    def recap():
        recaps = container.recap_service.build_recap(_period_arg())
        return jsonify([recap_to_dict(r) for r in recaps])

    @app.route("/api/recap.csv", methods=["GET"], endpoint="recap_csv")
    @teacher_required
    def recap_csv():
        export = container.recap_service.export_recap_csv(_period_arg())
        return csv_response(app, content=export.content, filename=export.filename)

    @app.route("/api/recap/monthly-attendance", methods=["GET"], endpoint="recap_monthly_attendance")
    @teacher_required
    def recap_monthly_attendance():
        rows = container.recap_service.monthly_attendance(month_of=optional_date(request.args.get("month"), "month"))
        return jsonify([monthly_row_to_dict(r) for r in rows])

    @app.route("/api/recap/monthly-attendance.csv", methods=["GET"], endpoint="recap_monthly_attendance_csv")
    @teacher_required
    def recap_monthly_attendance_csv():
        export = container.recap_service.export_monthly_attendance_csv(
            month_of=optional_date(request.args.get("month"), "month")
        )
        return csv_response(app, content=export.content, filename=export.filename)

    @app.route("/api/leaderboard", methods=["GET"], endpoint="leaderboard")
    @login_required
    def leaderboard():
        board = container.recap_service.weekly_leaderboard()
        return jsonify(
            [
                {
                    "rank": rank,
                    "student_id": r.student_id,
                    "student_name": r.student_name,
                    "photo_url": r.photo_url,
                    "overall_average": round(r.overall_average, 2),
                    "total_points": r.total_points,
                    "score": round(r.leaderboard_score, 2),
                }
                for rank, r in enumerate(board, start=1)
            ]
        )
