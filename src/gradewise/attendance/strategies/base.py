from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime, time
from typing import Optional

from ...core.enums import AttendanceStatus
from ..model import AttendanceRecord


@dataclass(frozen=True)
class StatusDecision:
    status: AttendanceStatus
    note: Optional[str] = None


class AttendanceStrategy(ABC):
    """Strategy Pattern: how a check-in is classified and how a record is scored."""

    def decide_checkin(self, *, now: datetime, late_time: time) -> StatusDecision:
        raise NotImplementedError(f"{type(self).__name__} is not a check-in outcome")

    @abstractmethod
    def score(self, record: AttendanceRecord, *, late_time: time) -> int:
        """0..5 attendance score for a record that has a check-in."""
        raise NotImplementedError
