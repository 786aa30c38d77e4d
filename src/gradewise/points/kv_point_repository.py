from __future__ import annotations

from typing import Sequence

from ..common.datetime_utils import parse_iso_date
from ..core.constants import POINT_RECORDS_KEY
from ..core.enums import PointType
from ..database.json_collection import JsonCollection
from ..database.store import KeyValueStore
from .model import PointRecord
from .repository import PointRecordRepository


def _decode(raw: dict) -> PointRecord:
    return PointRecord(
        record_id=str(raw["id"]),
        student_id=str(raw["studentId"]),
        point_type=PointType(raw["type"]),
        description=str(raw.get("description") or ""),
        points=int(raw["points"]),
        day=parse_iso_date(raw["date"]),
        issued_by=str(raw.get("issuedBy") or ""),
        created_at=float(raw.get("createdAt", 0)),
    )


def _encode(p: PointRecord) -> dict:
    return {
        "id": p.record_id,
        "studentId": p.student_id,
        "type": p.point_type.value,
        "description": p.description,
        "points": p.points,
        "date": p.day.isoformat(),
        "issuedBy": p.issued_by,
        "createdAt": p.created_at,
    }


class KVPointRecordRepository(PointRecordRepository):
    def __init__(self, store: KeyValueStore):
        self._items = JsonCollection(store, POINT_RECORDS_KEY, decode=_decode, encode=_encode)

    def list_all(self) -> Sequence[PointRecord]:
        return self._items.all()

    def list_for_student(self, student_id: str) -> Sequence[PointRecord]:
        return [p for p in self._items.all() if p.student_id == student_id]

    def insert(self, record: PointRecord) -> None:
        self._items.append(record)

    def delete_for_student(self, student_id: str) -> int:
        return self._items.remove_where(lambda p: p.student_id == student_id)
