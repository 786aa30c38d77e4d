from __future__ import annotations

import logging
from datetime import timedelta

from flask import Flask, jsonify, session

from ..common.web import json_body, login_required, ok, teacher_required
from ..container import Container
from .model import User

logger = logging.getLogger(__name__)


def user_to_dict(user: User) -> dict:
    return {"id": user.user_id, "name": user.name, "email": user.email, "role": user.role.value}


def register(app: Flask, container: Container) -> None:
    @app.route("/api/login", methods=["POST"], endpoint="login")
    def login():
        data = json_body()
        s_user = container.auth_service.authenticate(data.get("email", ""), data.get("password", ""))

        session.clear()
        session.permanent = bool(data.get("remember_me"))
        app.permanent_session_lifetime = timedelta(days=7)
        session["user_id"] = s_user.user_id
        session["name"] = s_user.name
        session["email"] = s_user.email
        session["role"] = s_user.role.value

        logger.info("%s %s logged in", s_user.role.value, s_user.user_id)
        return ok({"user": {"id": s_user.user_id, "name": s_user.name, "email": s_user.email, "role": s_user.role.value}})

    @app.route("/api/logout", methods=["POST"], endpoint="logout")
    def logout():
        session.clear()
        return ok()

    @app.route("/api/me", methods=["GET"], endpoint="me")
    @login_required
    def me():
        return jsonify(
            {
                "id": session["user_id"],
                "name": session.get("name"),
                "email": session.get("email"),
                "role": session.get("role"),
            }
        )

    @app.route("/api/users", methods=["GET"], endpoint="users_list")
    @teacher_required
    def users_list():
        return jsonify([user_to_dict(u) for u in container.user_service.list_users()])

    @app.route("/api/users", methods=["POST"], endpoint="users_create")
    @teacher_required
    def users_create():
        data = json_body()
        user = container.user_service.add_user(
            name=data.get("name", ""),
            email=data.get("email", ""),
            password=data.get("password", ""),
        )
        return ok({"user": user_to_dict(user)}, 201)

    @app.route("/api/users/<user_id>", methods=["PUT"], endpoint="users_update")
    @teacher_required
    def users_update(user_id: str):
        data = json_body()
        user = container.user_service.update_user(
            user_id,
            name=data.get("name", ""),
            email=data.get("email", ""),
            password=data.get("password"),
        )
        if user_id == session.get("user_id"):
            session["name"] = user.name
            session["email"] = user.email
        return ok({"user": user_to_dict(user)})

    @app.route("/api/users/<user_id>", methods=["DELETE"], endpoint="users_delete")
    @teacher_required
    def users_delete(user_id: str):
        container.user_service.delete_user(user_id)
        return ok()
