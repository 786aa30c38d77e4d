from __future__ import annotations

from flask import Flask, jsonify

from ..common.web import json_body, ok, teacher_required
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/positions", methods=["GET"], endpoint="positions_list")
    @teacher_required
    def positions_list():
        return jsonify([{"id": p.position_id, "name": p.name} for p in container.position_service.list_positions()])

    @app.route("/api/positions", methods=["POST"], endpoint="positions_create")
    @teacher_required
    def positions_create():
        position = container.position_service.add_position(json_body().get("name", ""))
        return ok({"position": {"id": position.position_id, "name": position.name}}, 201)

    @app.route("/api/positions/<position_id>", methods=["PUT"], endpoint="positions_update")
    @teacher_required
    def positions_update(position_id: str):
        position = container.position_service.rename_position(position_id, json_body().get("name", ""))
        return ok({"position": {"id": position.position_id, "name": position.name}})

    @app.route("/api/positions/<position_id>", methods=["DELETE"], endpoint="positions_delete")
    @teacher_required
    def positions_delete(position_id: str):
        container.position_service.delete_position(position_id)
        return ok()
