from __future__ import annotations

from datetime import datetime, time

from ...common.datetime_utils import at_time_of_day
from ...core.constants import LATE_FLOOR_SCORE, LATE_SCORE_TIERS
from ...core.enums import AttendanceStatus
from ..model import AttendanceRecord
from .base import AttendanceStrategy, StatusDecision


def minutes_late(check_in: datetime, late_time: time) -> int:
    """Whole minutes between the threshold on the check-in's day and the check-in."""
    delta = check_in - at_time_of_day(check_in, late_time)
    return int(delta.total_seconds() / 60)


class LateStrategy(AttendanceStrategy):
    """Late check-in, scored by how late it was."""

    def decide_checkin(self, *, now: datetime, late_time: time) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.LATE, note=f"{minutes_late(now, late_time)} minutes late")

    def score(self, record: AttendanceRecord, *, late_time: time) -> int:
        late_by = minutes_late(record.check_in, late_time)
        for max_minutes, tier_score in LATE_SCORE_TIERS:
            if late_by <= max_minutes:
                return tier_score
        return LATE_FLOOR_SCORE
