from __future__ import annotations

import time
import uuid
from dataclasses import replace
from typing import Sequence

from ..common.validators import require_non_empty
from ..core.constants import ATTENDANCE_CATEGORY_NAME
from ..core.exceptions import NotFoundError, SystemCategoryError
from ..ratings.service import RatingService
from .model import Category, CategoryKey
from .repository import CategoryRepository


class CategoryService:
    def __init__(self, categories: CategoryRepository, ratings: RatingService):
        self._categories = categories
        self._ratings = ratings

    def ensure_attendance_category(self) -> None:
        if not self._categories.get(CategoryKey.ATTENDANCE):
            self._categories.insert(Category(key=CategoryKey.ATTENDANCE, name=ATTENDANCE_CATEGORY_NAME, created_at=0))

    def list_categories(self) -> Sequence[Category]:
        self.ensure_attendance_category()
        return sorted(self._categories.list_all(), key=lambda c: c.name.lower())

    def add_category(self, name: str) -> Category:
        name = self._check_name(name)
        category = Category(key=CategoryKey.manual(f"cat-{uuid.uuid4().hex}"), name=name, created_at=time.time())
        self._categories.insert(category)
        return category

    def rename_category(self, category_id: str, name: str) -> Category:
        category = self._get_manual(category_id)
        updated = replace(category, name=self._check_name(name))
        self._categories.update(updated)
        return updated

    def delete_category(self, category_id: str) -> None:
        category = self._get_manual(category_id)
        self._categories.delete(category.key)
        self._ratings.remove_category(category.key)

    def _get_manual(self, category_id: str) -> Category:
        try:
            key = CategoryKey.parse(category_id)
        except ValueError:
            raise NotFoundError("Category not found")

        if key.is_system:
            raise SystemCategoryError("The Attendance category is managed by the system and cannot be changed")

        category = self._categories.get(key)
        if not category:
            raise NotFoundError("Category not found")
        return category

    @staticmethod
    def _check_name(name: str) -> str:
        name = require_non_empty(name, "Category name")
        if name.lower() == ATTENDANCE_CATEGORY_NAME.lower():
            raise SystemCategoryError(
                f"'{ATTENDANCE_CATEGORY_NAME}' is a system category and cannot be added manually"
            )
        return name
