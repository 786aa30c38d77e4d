from __future__ import annotations

from datetime import datetime, time

from ...core.constants import ON_TIME_SCORE
from ...core.enums import AttendanceStatus
from ..model import AttendanceRecord
from .base import AttendanceStrategy, StatusDecision


class OnTimeStrategy(AttendanceStrategy):
    """Checked in at or before the late threshold."""

    def decide_checkin(self, *, now: datetime, late_time: time) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.PRESENT)

    def score(self, record: AttendanceRecord, *, late_time: time) -> int:
        return ON_TIME_SCORE
