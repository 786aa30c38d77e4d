from __future__ import annotations

from typing import Optional, Sequence

from ..core.constants import USERS_KEY
from ..core.enums import Role
from ..database.json_collection import JsonCollection
from ..database.store import KeyValueStore
from .model import User
from .repository import UserRepository


def _decode(raw: dict) -> User:
    return User(
        user_id=str(raw["id"]),
        name=str(raw["name"]),
        email=str(raw["email"]),
        password_hash=str(raw["passwordHash"]),
        role=Role(raw.get("role", Role.TEACHER.value)),
        created_at=float(raw.get("createdAt", 0)),
    )


def _encode(u: User) -> dict:
    return {
        "id": u.user_id,
        "name": u.name,
        "email": u.email,
        "passwordHash": u.password_hash,
        "role": u.role.value,
        "createdAt": u.created_at,
    }


class KVUserRepository(UserRepository):
    def __init__(self, store: KeyValueStore):
        self._items = JsonCollection(store, USERS_KEY, decode=_decode, encode=_encode)

    def list_all(self) -> Sequence[User]:
        return self._items.all()

    def get_by_id(self, user_id: str) -> Optional[User]:
        return self._items.find(lambda u: u.user_id == user_id)

    def get_by_email(self, email: str) -> Optional[User]:
        email = email.strip().lower()
        return self._items.find(lambda u: u.email.lower() == email)

    def insert(self, user: User) -> None:
        self._items.append(user)

    def update(self, user: User) -> bool:
        return self._items.replace(lambda u: u.user_id == user.user_id, user)

    def delete_by_id(self, user_id: str) -> bool:
        return self._items.remove_where(lambda u: u.user_id == user_id) > 0
