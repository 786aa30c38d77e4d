from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import AttendanceStatus


def attendance_id_for(student_id: str, day: date) -> str:
    return f"{student_id}-{day.isoformat()}"


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one attendance record per student per calendar day."""

    record_id: str
    student_id: str
    day: date
    status: AttendanceStatus
    check_in: Optional[datetime] = None
    check_out: Optional[datetime] = None
    reason: Optional[str] = None
    created_at: float = 0.0
