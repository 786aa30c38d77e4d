from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import Rating


class RatingRepository(Protocol):
    def list_all(self) -> Sequence[Rating]:
        raise NotImplementedError

    def list_for_student(self, student_id: str) -> Sequence[Rating]:
        raise NotImplementedError

    def get_for_student_and_date(self, student_id: str, day: date) -> Optional[Rating]:
        raise NotImplementedError

    def upsert(self, rating: Rating) -> None:
        raise NotImplementedError

    def replace_all(self, ratings: Sequence[Rating]) -> None:
        raise NotImplementedError

    def delete_for_student(self, student_id: str) -> int:
        raise NotImplementedError
