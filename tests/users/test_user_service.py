import pytest

from gradewise.core.enums import Role
from gradewise.core.exceptions import AuthenticationError, NotFoundError, ValidationError
from gradewise.database.bootstrap import ensure_demo_teacher


def test_demo_teacher_is_seeded_once(container):
    ensure_demo_teacher(container.user_service)
    ensure_demo_teacher(container.user_service)

    users = container.user_service.list_users()
    assert [u.email for u in users] == ["guru@sekolah.id"]


def test_teacher_and_student_can_log_in(container, student):
    ensure_demo_teacher(container.user_service)

    teacher = container.auth_service.authenticate("guru@sekolah.id", "password")
    pupil = container.auth_service.authenticate("andi@sekolah.id", "secret1")

    assert teacher.role == Role.TEACHER
    assert pupil.role == Role.STUDENT
    assert pupil.user_id == student.student_id


@pytest.mark.parametrize("email, password", [("guru@sekolah.id", "wrong"), ("nobody@sekolah.id", "password"), ("", "")])
def test_bad_credentials(container, email, password):
    ensure_demo_teacher(container.user_service)

    with pytest.raises(AuthenticationError):
        container.auth_service.authenticate(email, password)


def test_last_teacher_cannot_be_deleted(container):
    only = container.user_service.add_user(name="Ibu Sari", email="sari@sekolah.id", password="secret1")

    with pytest.raises(ValidationError):
        container.user_service.delete_user(only.user_id)

    other = container.user_service.add_user(name="Pak Joko", email="joko@sekolah.id", password="secret1")
    container.user_service.delete_user(only.user_id)

    assert [u.user_id for u in container.user_service.list_users()] == [other.user_id]


def test_update_user_checks_email_uniqueness(container):
    sari = container.user_service.add_user(name="Ibu Sari", email="sari@sekolah.id", password="secret1")
    container.user_service.add_user(name="Pak Joko", email="joko@sekolah.id", password="secret1")

    with pytest.raises(ValidationError):
        container.user_service.update_user(sari.user_id, name="Ibu Sari", email="joko@sekolah.id")
    with pytest.raises(NotFoundError):
        container.user_service.update_user("missing", name="X", email="x@sekolah.id")
