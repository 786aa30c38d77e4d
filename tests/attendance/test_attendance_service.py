from datetime import date, datetime

import pytest

from gradewise.categories.model import CategoryKey
from gradewise.core.enums import AttendanceStatus
from gradewise.core.exceptions import DeviceMismatchError, LocationError, NotFoundError, ValidationError

from ..conftest import SCHOOL_LAT, SCHOOL_LON


def test_check_in_after_late_time_records_late_and_rates_attendance(container, student, check_in_at):
    record = check_in_at(student.student_id, datetime(2025, 1, 6, 7, 5))

    assert record.status == AttendanceStatus.LATE
    assert record.record_id == f"{student.student_id}-2025-01-06"

    rating = container.ratings_repo.get_for_student_and_date(student.student_id, date(2025, 1, 6))
    assert rating.record_id == f"{student.student_id}-2025-01-06"
    assert rating.scores == {CategoryKey.ATTENDANCE: 4}
    assert rating.average == pytest.approx(4.0)


def test_check_in_before_late_time_is_present(container, student, check_in_at):
    record = check_in_at(student.student_id, datetime(2025, 1, 6, 6, 50))

    assert record.status == AttendanceStatus.PRESENT
    rating = container.ratings_repo.get_for_student_and_date(student.student_id, date(2025, 1, 6))
    assert rating.scores[CategoryKey.ATTENDANCE] == 5


def test_check_in_merges_into_existing_manual_rating(container, student, check_in_at):
    discipline = container.category_service.add_category("Discipline")
    tidiness = container.category_service.add_category("Tidiness")
    container.rating_service.save_rating(
        student.student_id,
        date(2025, 1, 6),
        {discipline.key.to_storage(): 5, tidiness.key.to_storage(): 5},
    )

    check_in_at(student.student_id, datetime(2025, 1, 6, 7, 15))

    rating = container.ratings_repo.get_for_student_and_date(student.student_id, date(2025, 1, 6))
    assert rating.scores[CategoryKey.ATTENDANCE] == 3
    assert rating.average == pytest.approx(13 / 3)


def test_second_check_in_same_day_is_rejected(student, check_in_at):
    check_in_at(student.student_id, datetime(2025, 1, 6, 6, 50))

    with pytest.raises(ValidationError):
        check_in_at(student.student_id, datetime(2025, 1, 6, 6, 55))


def test_first_check_in_binds_device_and_other_devices_are_rejected(container, student, check_in_at):
    check_in_at(student.student_id, datetime(2025, 1, 6, 6, 50), device_id="phone-1")
    assert container.student_service.get_student(student.student_id).device_id == "phone-1"

    with pytest.raises(DeviceMismatchError):
        check_in_at(student.student_id, datetime(2025, 1, 7, 6, 50), device_id="phone-2")

    assert container.attendance_service.get_today_record(student.student_id, date(2025, 1, 7)) is None


def test_reset_device_allows_a_new_device(container, student, check_in_at):
    check_in_at(student.student_id, datetime(2025, 1, 6, 6, 50), device_id="phone-1")
    container.student_service.reset_device(student.student_id)

    record = check_in_at(student.student_id, datetime(2025, 1, 7, 6, 50), device_id="phone-2")

    assert record.status == AttendanceStatus.PRESENT
    assert container.student_service.get_student(student.student_id).device_id == "phone-2"


def test_check_in_requires_device_id(student, check_in_at):
    with pytest.raises(ValidationError):
        check_in_at(student.student_id, datetime(2025, 1, 6, 6, 50), device_id="")


def test_check_in_unknown_student(check_in_at):
    with pytest.raises(NotFoundError):
        check_in_at("missing", datetime(2025, 1, 6, 6, 50))


def test_check_in_too_far_from_school(container, student):
    with pytest.raises(LocationError) as exc:
        container.attendance_service.check_in(
            student.student_id,
            latitude=SCHOOL_LAT + 0.01,
            longitude=SCHOOL_LON,
            device_id="phone-1",
            now=datetime(2025, 1, 6, 6, 50),
        )

    assert "too far" in str(exc.value)
    assert container.student_service.get_student(student.student_id).device_id is None


def test_check_in_without_location(container, student):
    with pytest.raises(LocationError):
        container.attendance_service.check_in(
            student.student_id,
            latitude=None,
            longitude=None,
            device_id="phone-1",
            now=datetime(2025, 1, 6, 6, 50),
        )


def test_check_in_reports_geolocation_error(container, student):
    with pytest.raises(LocationError) as exc:
        container.attendance_service.check_in(
            student.student_id,
            latitude=None,
            longitude=None,
            device_id="phone-1",
            geolocation_error=1,
            now=datetime(2025, 1, 6, 6, 50),
        )

    assert "permission" in str(exc.value).lower()


def test_check_out_not_before_configured_time(container, student, check_in_at):
    check_in_at(student.student_id, datetime(2025, 1, 6, 6, 50))

    assert not container.attendance_service.can_check_out(datetime(2025, 1, 6, 15, 29))
    with pytest.raises(ValidationError):
        container.attendance_service.check_out(student.student_id, now=datetime(2025, 1, 6, 15, 29))

    record = container.attendance_service.check_out(student.student_id, now=datetime(2025, 1, 6, 15, 30))
    assert record.check_out == datetime(2025, 1, 6, 15, 30)
    assert record.status == AttendanceStatus.PRESENT


def test_check_out_requires_check_in_and_happens_once(container, student, check_in_at):
    with pytest.raises(ValidationError):
        container.attendance_service.check_out(student.student_id, now=datetime(2025, 1, 6, 16, 0))

    check_in_at(student.student_id, datetime(2025, 1, 6, 6, 50))
    container.attendance_service.check_out(student.student_id, now=datetime(2025, 1, 6, 16, 0))

    with pytest.raises(ValidationError):
        container.attendance_service.check_out(student.student_id, now=datetime(2025, 1, 6, 16, 5))


def test_missing_check_out_becomes_no_checkout_on_a_later_day(container, student, check_in_at):
    check_in_at(student.student_id, datetime(2025, 1, 6, 6, 50))

    same_day = container.attendance_service.list_for_student(student.student_id, today=date(2025, 1, 6))
    assert same_day[0].status == AttendanceStatus.PRESENT

    history = container.attendance_service.list_for_student(student.student_id, today=date(2025, 1, 7))
    assert history[0].status == AttendanceStatus.NO_CHECKOUT

    rating = container.ratings_repo.get_for_student_and_date(student.student_id, date(2025, 1, 6))
    assert rating.scores[CategoryKey.ATTENDANCE] == 0
    assert rating.average == pytest.approx(0.0)


def test_report_absence_blocks_check_in(container, student, check_in_at):
    record = container.attendance_service.report_absence(
        student.student_id, "sick", "Fever", now=datetime(2025, 1, 6, 6, 30)
    )

    assert record.status == AttendanceStatus.SICK
    assert record.reason == "Fever"
    assert record.check_in is None
    with pytest.raises(ValidationError):
        check_in_at(student.student_id, datetime(2025, 1, 6, 6, 50))


def test_report_absence_after_check_in_is_rejected(container, student, check_in_at):
    check_in_at(student.student_id, datetime(2025, 1, 6, 6, 50))

    with pytest.raises(ValidationError):
        container.attendance_service.report_absence(
            student.student_id, "permit", "Family event", now=datetime(2025, 1, 6, 8, 0)
        )


@pytest.mark.parametrize("status, reason", [("absent", "x"), ("late", "x"), ("sick", "   "), ("sick", "x" * 501)])
def test_report_absence_validation(container, student, status, reason):
    with pytest.raises(ValidationError):
        container.attendance_service.report_absence(student.student_id, status, reason, now=datetime(2025, 1, 6, 6, 30))


def test_teacher_override_keeps_student_excuse(container, student, other_student, check_in_at):
    day = date(2025, 1, 6)
    container.attendance_service.report_absence(student.student_id, "permit", "Family event", now=datetime(2025, 1, 6, 6, 0))
    check_in_at(other_student.student_id, datetime(2025, 1, 6, 6, 50))

    saved = container.attendance_service.record_attendance(
        day, {student.student_id: "absent", other_student.student_id: "absent"}
    )

    assert [r.student_id for r in saved] == [other_student.student_id]
    assert container.attendance_service.get_today_record(student.student_id, day).status == AttendanceStatus.PERMIT

    overridden = container.attendance_service.get_today_record(other_student.student_id, day)
    assert overridden.status == AttendanceStatus.ABSENT
    assert overridden.check_in is None

    # The attendance score goes away with the check-in; the prior value stays.
    rating = container.ratings_repo.get_for_student_and_date(other_student.student_id, day)
    assert rating.scores[CategoryKey.ATTENDANCE] == 5


def test_teacher_override_rejects_unknown_status(container, student):
    with pytest.raises(ValidationError):
        container.attendance_service.record_attendance(date(2025, 1, 6), {student.student_id: "holiday"})
    with pytest.raises(ValidationError):
        container.attendance_service.record_attendance(date(2025, 1, 6), {student.student_id: "no_checkout"})
