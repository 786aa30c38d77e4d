from datetime import date, datetime, time

from gradewise.attendance.factory import AttendanceStrategyFactory
from gradewise.attendance.model import AttendanceRecord
from gradewise.attendance.strategies.excused_strategy import ExcusedStrategy
from gradewise.attendance.strategies.forfeited_strategy import ForfeitedStrategy
from gradewise.attendance.strategies.late_strategy import LateStrategy, minutes_late
from gradewise.attendance.strategies.on_time_strategy import OnTimeStrategy
from gradewise.core.enums import AttendanceStatus

LATE_TIME = time(7, 0)


def test_factory_checkin_on_time_at_threshold():
    now = datetime(2025, 1, 6, 7, 0, 0)

    strategy = AttendanceStrategyFactory().for_checkin(now=now, late_time=LATE_TIME)

    assert isinstance(strategy, OnTimeStrategy)
    assert strategy.decide_checkin(now=now, late_time=LATE_TIME).status == AttendanceStatus.PRESENT


def test_factory_checkin_late_one_second_after_threshold():
    now = datetime(2025, 1, 6, 7, 0, 1)

    strategy = AttendanceStrategyFactory().for_checkin(now=now, late_time=LATE_TIME)

    assert isinstance(strategy, LateStrategy)


def test_late_decision_notes_minutes_late():
    now = datetime(2025, 1, 6, 7, 12, 40)

    decision = LateStrategy().decide_checkin(now=now, late_time=LATE_TIME)

    assert decision.status == AttendanceStatus.LATE
    assert decision.note == "12 minutes late"


def test_minutes_late_truncates_partial_minutes():
    assert minutes_late(datetime(2025, 1, 6, 7, 10, 59), LATE_TIME) == 10
    assert minutes_late(datetime(2025, 1, 6, 7, 11, 0), LATE_TIME) == 11


def test_factory_for_record_dispatches_on_status():
    factory = AttendanceStrategyFactory()

    def record(status):
        return AttendanceRecord(record_id="r", student_id="s", day=date(2025, 1, 6), status=status)

    assert isinstance(factory.for_record(record(AttendanceStatus.PRESENT)), OnTimeStrategy)
    assert isinstance(factory.for_record(record(AttendanceStatus.LATE)), LateStrategy)
    assert isinstance(factory.for_record(record(AttendanceStatus.SICK)), ExcusedStrategy)
    assert isinstance(factory.for_record(record(AttendanceStatus.PERMIT)), ExcusedStrategy)
    assert isinstance(factory.for_record(record(AttendanceStatus.NO_CHECKOUT)), ForfeitedStrategy)
    assert isinstance(factory.for_record(record(AttendanceStatus.ABSENT)), ForfeitedStrategy)
