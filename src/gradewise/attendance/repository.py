from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    def list_all(self) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def list_for_student(self, student_id: str) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def get_for_student_and_date(self, student_id: str, day: date) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def upsert(self, record: AttendanceRecord) -> None:
        raise NotImplementedError

    def replace_all(self, records: Sequence[AttendanceRecord]) -> None:
        raise NotImplementedError

    def delete_for_student(self, student_id: str) -> int:
        raise NotImplementedError
