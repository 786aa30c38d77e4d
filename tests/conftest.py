from __future__ import annotations

from datetime import datetime

import pytest

from gradewise.container import build_container
from gradewise.core.constants import DEFAULT_SCHOOL_LATITUDE, DEFAULT_SCHOOL_LONGITUDE
from gradewise.database.store import InMemoryKeyValueStore

SCHOOL_LAT = DEFAULT_SCHOOL_LATITUDE
SCHOOL_LON = DEFAULT_SCHOOL_LONGITUDE


@pytest.fixture
def store():
    return InMemoryKeyValueStore()


@pytest.fixture
def container(store):
    return build_container(store=store)


@pytest.fixture
def student(container):
    return container.student_service.add_student(name="Andi Saputra", email="andi@sekolah.id", password="secret1")


@pytest.fixture
def other_student(container):
    return container.student_service.add_student(name="Budi Santoso", email="budi@sekolah.id", password="secret2")


@pytest.fixture
def check_in_at(container):
    """Check a student in from the school gate at a fixed time."""

    def _check_in(student_id: str, now: datetime, device_id: str = "device-a"):
        return container.attendance_service.check_in(
            student_id,
            latitude=SCHOOL_LAT,
            longitude=SCHOOL_LON,
            device_id=device_id,
            now=now,
        )

    return _check_in
