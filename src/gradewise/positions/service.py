from __future__ import annotations

import time
import uuid
from dataclasses import replace
from typing import Sequence

from ..common.validators import require_non_empty
from ..core.exceptions import NotFoundError
from ..students.service import StudentService
from .model import Position
from .repository import PositionRepository


class PositionService:
    def __init__(self, positions: PositionRepository, students: StudentService):
        self._positions = positions
        self._students = students

    def list_positions(self) -> Sequence[Position]:
        return sorted(self._positions.list_all(), key=lambda p: p.name.lower())

    def add_position(self, name: str) -> Position:
        position = Position(
            position_id=f"pos-{uuid.uuid4().hex}",
            name=require_non_empty(name, "Position name"),
            created_at=time.time(),
        )
        self._positions.insert(position)
        return position

    def rename_position(self, position_id: str, name: str) -> Position:
        position = self._positions.get_by_id(position_id)
        if not position:
            raise NotFoundError("Position not found")
        updated = replace(position, name=require_non_empty(name, "Position name"))
        self._positions.update(updated)
        return updated

    def delete_position(self, position_id: str) -> None:
        if not self._positions.delete(position_id):
            raise NotFoundError("Position not found")
        self._students.clear_position(position_id)
