from __future__ import annotations

from typing import Optional, Sequence

from ..core.constants import STUDENTS_KEY
from ..database.json_collection import JsonCollection
from ..database.store import KeyValueStore
from .model import Student
from .repository import StudentRepository


def _decode(raw: dict) -> Student:
    return Student(
        student_id=str(raw["id"]),
        name=str(raw["name"]),
        email=str(raw["email"]),
        password_hash=raw.get("passwordHash"),
        photo_url=raw.get("photoUrl"),
        address=raw.get("address"),
        phone=raw.get("phone"),
        parent_phone=raw.get("parentPhone"),
        position_id=raw.get("positionId"),
        device_id=raw.get("deviceId"),
        created_at=float(raw.get("createdAt", 0)),
    )


def _encode(s: Student) -> dict:
    return {
        "id": s.student_id,
        "name": s.name,
        "email": s.email,
        "passwordHash": s.password_hash,
        "photoUrl": s.photo_url,
        "address": s.address,
        "phone": s.phone,
        "parentPhone": s.parent_phone,
        "positionId": s.position_id,
        "deviceId": s.device_id,
        "createdAt": s.created_at,
    }


class KVStudentRepository(StudentRepository):
    def __init__(self, store: KeyValueStore):
        self._items = JsonCollection(store, STUDENTS_KEY, decode=_decode, encode=_encode)

    def list_all(self) -> Sequence[Student]:
        return self._items.all()

    def get_by_id(self, student_id: str) -> Optional[Student]:
        return self._items.find(lambda s: s.student_id == student_id)

    def get_by_email(self, email: str) -> Optional[Student]:
        email = email.strip().lower()
        return self._items.find(lambda s: s.email.lower() == email)

    def insert(self, student: Student) -> None:
        self._items.append(student)

    def update(self, student: Student) -> bool:
        return self._items.replace(lambda s: s.student_id == student.student_id, student)

    def delete(self, student_id: str) -> bool:
        return self._items.remove_where(lambda s: s.student_id == student_id) > 0
