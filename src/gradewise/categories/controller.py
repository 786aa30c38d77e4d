from __future__ import annotations

from flask import Flask, jsonify

from ..common.web import json_body, login_required, ok, teacher_required
from ..container import Container
from .model import Category


def category_to_dict(category: Category) -> dict:
    return {"id": category.key.to_storage(), "name": category.name, "is_system": category.is_system}


def register(app: Flask, container: Container) -> None:
    @app.route("/api/categories", methods=["GET"], endpoint="categories_list")
    @login_required
    def categories_list():
        return jsonify([category_to_dict(c) for c in container.category_service.list_categories()])

    @app.route("/api/categories", methods=["POST"], endpoint="categories_create")
    @teacher_required
    def categories_create():
        category = container.category_service.add_category(json_body().get("name", ""))
        return ok({"category": category_to_dict(category)}, 201)

    @app.route("/api/categories/<category_id>", methods=["PUT"], endpoint="categories_update")
    @teacher_required
    def categories_update(category_id: str):
        category = container.category_service.rename_category(category_id, json_body().get("name", ""))
        return ok({"category": category_to_dict(category)})

    @app.route("/api/categories/<category_id>", methods=["DELETE"], endpoint="categories_delete")
    @teacher_required
    def categories_delete(category_id: str):
        container.category_service.delete_category(category_id)
        return ok()
