from __future__ import annotations

from typing import Optional, Sequence

from ..core.constants import CATEGORIES_KEY
from ..database.json_collection import JsonCollection
from ..database.store import KeyValueStore
from .model import Category, CategoryKey
from .repository import CategoryRepository


def _decode(raw: dict) -> Category:
    return Category(
        key=CategoryKey.from_storage(raw["key"]),
        name=str(raw["name"]),
        created_at=float(raw.get("createdAt", 0)),
    )


def _encode(c: Category) -> dict:
    return {
        "key": c.key.to_storage(),
        "name": c.name,
        "isSystem": c.is_system,
        "createdAt": c.created_at,
    }


class KVCategoryRepository(CategoryRepository):
    def __init__(self, store: KeyValueStore):
        self._items = JsonCollection(store, CATEGORIES_KEY, decode=_decode, encode=_encode)

    def list_all(self) -> Sequence[Category]:
        return self._items.all()

    def get(self, key: CategoryKey) -> Optional[Category]:
        return self._items.find(lambda c: c.key == key)

    def insert(self, category: Category) -> None:
        self._items.append(category)

    def update(self, category: Category) -> bool:
        return self._items.replace(lambda c: c.key == category.key, category)

    def delete(self, key: CategoryKey) -> bool:
        return self._items.remove_where(lambda c: c.key == key) > 0
