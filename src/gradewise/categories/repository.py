from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Category, CategoryKey


class CategoryRepository(Protocol):
    def list_all(self) -> Sequence[Category]:
        raise NotImplementedError

    def get(self, key: CategoryKey) -> Optional[Category]:
        raise NotImplementedError

    def insert(self, category: Category) -> None:
        raise NotImplementedError

    def update(self, category: Category) -> bool:
        raise NotImplementedError

    def delete(self, key: CategoryKey) -> bool:
        raise NotImplementedError
