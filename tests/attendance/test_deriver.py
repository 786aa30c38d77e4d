from datetime import date, datetime, time

import pytest

from gradewise.attendance.deriver import derive_attendance_score
from gradewise.attendance.model import AttendanceRecord
from gradewise.core.enums import AttendanceStatus

DAY = date(2025, 1, 6)
LATE_TIME = time(7, 0)


def _record(status, check_in=None, student_id="s1", day=DAY):
    return AttendanceRecord(
        record_id=f"{student_id}-{day.isoformat()}",
        student_id=student_id,
        day=day,
        status=status,
        check_in=check_in,
    )


def _derive(records, student_id="s1", day=DAY):
    return derive_attendance_score(records, late_time=LATE_TIME, day=day, student_id=student_id)


@pytest.mark.parametrize(
    "check_in, expected",
    [
        (datetime(2025, 1, 6, 7, 1), 4),
        (datetime(2025, 1, 6, 7, 10), 4),
        (datetime(2025, 1, 6, 7, 11), 3),
        (datetime(2025, 1, 6, 7, 30), 3),
        (datetime(2025, 1, 6, 7, 31), 1),
        (datetime(2025, 1, 6, 9, 45), 1),
    ],
)
def test_late_tiers(check_in, expected):
    assert _derive([_record(AttendanceStatus.LATE, check_in)]) == expected


def test_present_scores_five():
    assert _derive([_record(AttendanceStatus.PRESENT, datetime(2025, 1, 6, 6, 45))]) == 5


def test_excused_with_check_in_scores_five():
    assert _derive([_record(AttendanceStatus.SICK, datetime(2025, 1, 6, 6, 45))]) == 5
    assert _derive([_record(AttendanceStatus.PERMIT, datetime(2025, 1, 6, 6, 45))]) == 5


def test_no_checkout_forfeits_the_day():
    assert _derive([_record(AttendanceStatus.NO_CHECKOUT, datetime(2025, 1, 6, 6, 45))]) == 0


def test_no_score_without_check_in():
    assert _derive([_record(AttendanceStatus.SICK)]) is None
    assert _derive([_record(AttendanceStatus.ABSENT)]) is None


def test_no_score_without_matching_record():
    records = [
        _record(AttendanceStatus.PRESENT, datetime(2025, 1, 6, 6, 45), student_id="s2"),
        _record(AttendanceStatus.PRESENT, datetime(2025, 1, 5, 6, 45), day=date(2025, 1, 5)),
    ]

    assert _derive(records) is None
    assert _derive([]) is None
