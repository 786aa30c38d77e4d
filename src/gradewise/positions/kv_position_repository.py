from __future__ import annotations

from typing import Optional, Sequence

from ..core.constants import POSITIONS_KEY
from ..database.json_collection import JsonCollection
from ..database.store import KeyValueStore
from .model import Position
from .repository import PositionRepository


def _decode(raw: dict) -> Position:
    return Position(position_id=str(raw["id"]), name=str(raw["name"]), created_at=float(raw.get("createdAt", 0)))


def _encode(p: Position) -> dict:
    return {"id": p.position_id, "name": p.name, "createdAt": p.created_at}


class KVPositionRepository(PositionRepository):
    def __init__(self, store: KeyValueStore):
        self._items = JsonCollection(store, POSITIONS_KEY, decode=_decode, encode=_encode)

    def list_all(self) -> Sequence[Position]:
        return self._items.all()

    def get_by_id(self, position_id: str) -> Optional[Position]:
        return self._items.find(lambda p: p.position_id == position_id)

    def insert(self, position: Position) -> None:
        self._items.append(position)

    def update(self, position: Position) -> bool:
        return self._items.replace(lambda p: p.position_id == position.position_id, position)

    def delete(self, position_id: str) -> bool:
        return self._items.remove_where(lambda p: p.position_id == position_id) > 0
