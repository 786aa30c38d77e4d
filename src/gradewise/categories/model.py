from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Optional

from ..core.enums import CategoryKind


@dataclass(frozen=True)
class CategoryKey:
    """Identity of a rating dimension.

    Either a teacher-created category (``CategoryKey.manual(id)``) or the
    system Attendance category (``CategoryKey.ATTENDANCE``). The two kinds are
    stored with different prefixes so they can never collide.
    """

    kind: CategoryKind
    category_id: Optional[str] = None

    ATTENDANCE: ClassVar["CategoryKey"]

    @classmethod
    def manual(cls, category_id: str) -> "CategoryKey":
        return cls(kind=CategoryKind.MANUAL, category_id=str(category_id))

    @property
    def is_system(self) -> bool:
        return self.kind == CategoryKind.SYSTEM

    def to_storage(self) -> str:
        if self.is_system:
            return f"{CategoryKind.SYSTEM.value}:attendance"
        return f"{CategoryKind.MANUAL.value}:{self.category_id}"

    @classmethod
    def from_storage(cls, value: str) -> "CategoryKey":
        kind, _, ident = value.partition(":")
        if kind == CategoryKind.SYSTEM.value and ident == "attendance":
            return cls.ATTENDANCE
        if kind == CategoryKind.MANUAL.value and ident:
            return cls.manual(ident)
        raise ValueError(f"Unknown category key: {value!r}")

    @classmethod
    def parse(cls, value: str) -> "CategoryKey":
        """Accept the storage form, or a bare id for a manual category."""
        value = (value or "").strip()
        if ":" in value:
            return cls.from_storage(value)
        if not value:
            raise ValueError("Empty category id")
        return cls.manual(value)

    def __str__(self) -> str:
        return self.to_storage()


CategoryKey.ATTENDANCE = CategoryKey(kind=CategoryKind.SYSTEM)


@dataclass(frozen=True)
class Category:
    key: CategoryKey
    name: str
    created_at: float

    @property
    def is_system(self) -> bool:
        return self.key.is_system
