from datetime import date, datetime

import pytest
from werkzeug.security import check_password_hash

from gradewise.core.exceptions import DeviceMismatchError, NotFoundError, ValidationError
from gradewise.students.device import DeviceBinding


def test_add_student_hashes_password(container, student):
    assert student.password_hash != "secret1"
    assert check_password_hash(student.password_hash, "secret1")


def test_duplicate_email_is_rejected(container, student):
    with pytest.raises(ValidationError):
        container.student_service.add_student(name="Andi Lain", email="ANDI@sekolah.id", password="secret1")


@pytest.mark.parametrize(
    "name, email, password",
    [("Al", "al@sekolah.id", "secret1"), ("Alya", "not-an-email", "secret1"), ("Alya", "alya@sekolah.id", "123")],
)
def test_add_student_validation(container, name, email, password):
    with pytest.raises(ValidationError):
        container.student_service.add_student(name=name, email=email, password=password)


def test_update_student_keeps_password_when_blank(container, student):
    updated = container.student_service.update_student(
        student.student_id, name="Andi S.", email="andi@sekolah.id", password="", phone="0812"
    )

    assert updated.name == "Andi S."
    assert updated.phone == "0812"
    assert updated.password_hash == student.password_hash


def test_update_profile_changes_only_profile_fields(container, student):
    updated = container.student_service.update_profile(
        student.student_id, address="Jl. Merdeka 1", parent_phone="0813", password="newsecret"
    )

    assert updated.name == student.name
    assert updated.address == "Jl. Merdeka 1"
    assert check_password_hash(updated.password_hash, "newsecret")


def test_delete_student_cascades(container, student, other_student, check_in_at):
    check_in_at(student.student_id, datetime(2025, 1, 6, 6, 50))
    check_in_at(other_student.student_id, datetime(2025, 1, 6, 6, 52), device_id="device-b")
    container.point_service.add_point_record(
        student_id=student.student_id, point_type="award", points=5, description="Helped a friend", issued_by="Guru"
    )

    container.student_service.delete_student(student.student_id)

    with pytest.raises(NotFoundError):
        container.student_service.get_student(student.student_id)
    assert [r.student_id for r in container.rating_service.list_ratings()] == [other_student.student_id]
    assert [r.student_id for r in container.attendance_service.list_attendance(today=date(2025, 1, 6))] == [
        other_student.student_id
    ]
    assert container.point_service.list_point_records() == []


def test_delete_unknown_student(container):
    with pytest.raises(NotFoundError):
        container.student_service.delete_student("missing")


def test_delete_position_clears_students(container):
    captain = container.position_service.add_position("Class captain")
    student = container.student_service.add_student(
        name="Citra Dewi", email="citra@sekolah.id", password="secret3", position_id=captain.position_id
    )

    container.position_service.delete_position(captain.position_id)

    assert container.student_service.get_student(student.student_id).position_id is None
    assert container.position_service.list_positions() == []


def test_device_binding_transitions():
    unbound = DeviceBinding()
    bound = unbound.bind("phone-1")

    assert not unbound.is_bound
    assert bound.device_id == "phone-1"
    assert bound.bind("phone-1") is bound
    with pytest.raises(DeviceMismatchError):
        bound.bind("phone-2")
    assert not bound.reset().is_bound
