from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Student


class StudentRepository(Protocol):
    def list_all(self) -> Sequence[Student]:
        raise NotImplementedError

    def get_by_id(self, student_id: str) -> Optional[Student]:
        raise NotImplementedError

    def get_by_email(self, email: str) -> Optional[Student]:
        raise NotImplementedError

    def insert(self, student: Student) -> None:
        raise NotImplementedError

    def update(self, student: Student) -> bool:
        raise NotImplementedError

    def delete(self, student_id: str) -> bool:
        raise NotImplementedError
