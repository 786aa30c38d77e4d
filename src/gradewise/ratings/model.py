from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Dict

from ..categories.model import CategoryKey


def rating_id_for(student_id: str, day: date) -> str:
    """Deterministic id: one rating record per student per day."""
    return f"{student_id}-{day.isoformat()}"


@dataclass(frozen=True)
class Rating:
    """One day's manual and automatic category scores for one student."""

    record_id: str
    student_id: str
    day: date
    scores: Dict[CategoryKey, int] = field(default_factory=dict)
    average: float = 0.0
    created_at: float = 0.0


def compute_average(scores: Dict[CategoryKey, int]) -> float:
    values = [v for v in scores.values() if v is not None]
    if not values:
        return 0.0
    return sum(values) / len(values)
