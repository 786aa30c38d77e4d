from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from ..core.enums import PointType


@dataclass(frozen=True)
class PointRecord:
    """An ad-hoc award (positive points) or violation (negative points)."""

    record_id: str
    student_id: str
    point_type: PointType
    description: str
    points: int
    day: date
    issued_by: str
    created_at: float = 0.0
