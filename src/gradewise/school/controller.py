from __future__ import annotations

from flask import Flask, jsonify

from ..common.datetime_utils import format_hhmm
from ..common.web import json_body, login_required, ok, teacher_required
from ..container import Container
from .model import AppSettings


def settings_to_dict(settings: AppSettings) -> dict:
    return {
        "school_name": settings.school_name,
        "school_logo_url": settings.school_logo_url,
        "location": {"latitude": settings.location.latitude, "longitude": settings.location.longitude},
        "check_in_radius": settings.check_in_radius,
        "late_time": format_hhmm(settings.late_time),
        "check_out_time": format_hhmm(settings.check_out_time),
    }


def register(app: Flask, container: Container) -> None:
    @app.route("/api/settings", methods=["GET"], endpoint="settings_get")
    @login_required
    def settings_get():
        return jsonify(settings_to_dict(container.settings_service.get_settings()))

    @app.route("/api/settings", methods=["PUT"], endpoint="settings_save")
    @teacher_required
    def settings_save():
        data = json_body()
        current = container.settings_service.get_settings()
        location = data.get("location") or {}
        settings = container.settings_service.save_settings(
            school_name=data.get("school_name", current.school_name),
            school_logo_url=data.get("school_logo_url", current.school_logo_url),
            latitude=location.get("latitude", current.location.latitude),
            longitude=location.get("longitude", current.location.longitude),
            check_in_radius=data.get("check_in_radius", current.check_in_radius),
            late_time=data.get("late_time", format_hhmm(current.late_time)),
            check_out_time=data.get("check_out_time", format_hhmm(current.check_out_time)),
        )
        return ok({"settings": settings_to_dict(settings)})
