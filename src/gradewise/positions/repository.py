from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Position


class PositionRepository(Protocol):
    def list_all(self) -> Sequence[Position]:
        raise NotImplementedError

    def get_by_id(self, position_id: str) -> Optional[Position]:
        raise NotImplementedError

    def insert(self, position: Position) -> None:
        raise NotImplementedError

    def update(self, position: Position) -> bool:
        raise NotImplementedError

    def delete(self, position_id: str) -> bool:
        raise NotImplementedError
