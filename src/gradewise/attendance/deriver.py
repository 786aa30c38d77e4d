from __future__ import annotations

from datetime import date, time
from typing import Iterable, Optional

from .factory import AttendanceStrategyFactory
from .model import AttendanceRecord


def derive_attendance_score(
    records: Iterable[AttendanceRecord],
    *,
    late_time: time,
    day: date,
    student_id: str,
    factory: Optional[AttendanceStrategyFactory] = None,
) -> Optional[int]:
    """Attendance score for one student on one day.

    Returns None when there is no record or the record has no check-in yet;
    callers must not treat that as zero.
    """

    record = next((r for r in records if r.student_id == student_id and r.day == day), None)
    if record is None or record.check_in is None:
        return None

    strategy = (factory or AttendanceStrategyFactory()).for_record(record)
    return strategy.score(record, late_time=late_time)
