from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..common.datetime_utils import parse_iso_date, parse_iso_datetime
from ..core.constants import ATTENDANCE_KEY
from ..core.enums import AttendanceStatus
from ..database.json_collection import JsonCollection
from ..database.store import KeyValueStore
from .model import AttendanceRecord
from .repository import AttendanceRepository


def _decode(raw: dict) -> AttendanceRecord:
    return AttendanceRecord(
        record_id=str(raw["id"]),
        student_id=str(raw["studentId"]),
        day=parse_iso_date(raw["date"]),
        status=AttendanceStatus(raw["status"]),
        check_in=parse_iso_datetime(raw.get("checkIn")),
        check_out=parse_iso_datetime(raw.get("checkOut")),
        reason=raw.get("reason"),
        created_at=float(raw.get("createdAt", 0)),
    )


def _encode(r: AttendanceRecord) -> dict:
    return {
        "id": r.record_id,
        "studentId": r.student_id,
        "date": r.day.isoformat(),
        "status": r.status.value,
        "checkIn": r.check_in.isoformat() if r.check_in else None,
        "checkOut": r.check_out.isoformat() if r.check_out else None,
        "reason": r.reason,
        "createdAt": r.created_at,
    }


class KVAttendanceRepository(AttendanceRepository):
    def __init__(self, store: KeyValueStore):
        self._items = JsonCollection(store, ATTENDANCE_KEY, decode=_decode, encode=_encode)

    def list_all(self) -> Sequence[AttendanceRecord]:
        return self._items.all()

    def list_for_student(self, student_id: str) -> Sequence[AttendanceRecord]:
        return [r for r in self._items.all() if r.student_id == student_id]

    def get_for_student_and_date(self, student_id: str, day: date) -> Optional[AttendanceRecord]:
        return self._items.find(lambda r: r.student_id == student_id and r.day == day)

    def upsert(self, record: AttendanceRecord) -> None:
        self._items.upsert(
            lambda r: r.student_id == record.student_id and r.day == record.day,
            record,
        )

    def replace_all(self, records: Sequence[AttendanceRecord]) -> None:
        self._items.replace_all(records)

    def delete_for_student(self, student_id: str) -> int:
        return self._items.remove_where(lambda r: r.student_id == student_id)
