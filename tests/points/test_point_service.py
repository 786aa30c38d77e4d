from datetime import date

import pytest

from gradewise.core.enums import PointType
from gradewise.core.exceptions import NotFoundError, ValidationError


def test_violation_points_are_negative(container, student):
    record = container.point_service.add_point_record(
        student_id=student.student_id,
        point_type="violation",
        points=10,
        description="Late to class",
        issued_by="Guru Contoh",
        day=date(2025, 1, 6),
    )

    assert record.point_type == PointType.VIOLATION
    assert record.points == -10
    assert container.point_service.list_for_student(student.student_id) == [record]


def test_award_points_are_positive_even_if_sent_negative(container, student):
    record = container.point_service.add_point_record(
        student_id=student.student_id, point_type="award", points=-5, description="Won a contest", issued_by="Guru"
    )

    assert record.points == 5


@pytest.mark.parametrize(
    "point_type, points, description",
    [("bonus", 5, "x"), ("award", 0, "x"), ("award", "many", "x"), ("award", 5, "")],
)
def test_point_record_validation(container, student, point_type, points, description):
    with pytest.raises(ValidationError):
        container.point_service.add_point_record(
            student_id=student.student_id,
            point_type=point_type,
            points=points,
            description=description,
            issued_by="Guru",
        )


def test_point_record_for_unknown_student(container):
    with pytest.raises(NotFoundError):
        container.point_service.add_point_record(
            student_id="missing", point_type="award", points=1, description="x", issued_by="Guru"
        )
