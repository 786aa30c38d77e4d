from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, time

from ..common.datetime_utils import at_time_of_day
from ..core.enums import AttendanceStatus, EXCUSED_STATUSES
from .model import AttendanceRecord
from .strategies.base import AttendanceStrategy
from .strategies.excused_strategy import ExcusedStrategy
from .strategies.forfeited_strategy import ForfeitedStrategy
from .strategies.late_strategy import LateStrategy
from .strategies.on_time_strategy import OnTimeStrategy


@dataclass
class AttendanceStrategyFactory:
    """Factory Pattern: choose appropriate strategy based on rules."""

    def for_checkin(self, *, now: datetime, late_time: time) -> AttendanceStrategy:
        if now > at_time_of_day(now, late_time):
            return LateStrategy()
        return OnTimeStrategy()

    def for_record(self, record: AttendanceRecord) -> AttendanceStrategy:
        if record.status == AttendanceStatus.PRESENT:
            return OnTimeStrategy()
        if record.status == AttendanceStatus.LATE:
            return LateStrategy()
        if record.status in EXCUSED_STATUSES:
            return ExcusedStrategy()
        return ForfeitedStrategy()
