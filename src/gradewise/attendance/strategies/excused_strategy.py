from __future__ import annotations

from datetime import time

from ...core.constants import EXCUSED_SCORE
from ..model import AttendanceRecord
from .base import AttendanceStrategy


class ExcusedStrategy(AttendanceStrategy):
    """Sick or permit: excused absences count as fully present."""

    def score(self, record: AttendanceRecord, *, late_time: time) -> int:
        return EXCUSED_SCORE
