from __future__ import annotations

from datetime import time

from ...core.constants import FORFEITED_SCORE
from ..model import AttendanceRecord
from .base import AttendanceStrategy


class ForfeitedStrategy(AttendanceStrategy):
    """Absent, missing check-out or any other status."""

    def score(self, record: AttendanceRecord, *, late_time: time) -> int:
        return FORFEITED_SCORE
