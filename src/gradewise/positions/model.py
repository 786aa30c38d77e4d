from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Position:
    """A class role a student can hold (e.g. class captain)."""

    position_id: str
    name: str
    created_at: float = 0.0
