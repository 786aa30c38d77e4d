from __future__ import annotations

from typing import Protocol, Sequence

from .model import PointRecord


class PointRecordRepository(Protocol):
    def list_all(self) -> Sequence[PointRecord]:
        raise NotImplementedError

    def list_for_student(self, student_id: str) -> Sequence[PointRecord]:
        raise NotImplementedError

    def insert(self, record: PointRecord) -> None:
        raise NotImplementedError

    def delete_for_student(self, student_id: str) -> int:
        raise NotImplementedError
