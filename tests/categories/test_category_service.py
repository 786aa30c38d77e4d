from datetime import date

import pytest

from gradewise.categories.model import CategoryKey
from gradewise.core.exceptions import NotFoundError, SystemCategoryError, ValidationError

DAY = date(2025, 1, 6)


def test_attendance_category_always_exists(container):
    categories = container.category_service.list_categories()

    assert [c.name for c in categories] == ["Attendance"]
    assert categories[0].key == CategoryKey.ATTENDANCE
    assert categories[0].is_system


def test_categories_are_listed_by_name(container):
    container.category_service.add_category("Tidiness")
    container.category_service.add_category("Discipline")

    names = [c.name for c in container.category_service.list_categories()]

    assert names == ["Attendance", "Discipline", "Tidiness"]


@pytest.mark.parametrize("name", ["Attendance", " attendance "])
def test_reserved_name_cannot_be_added(container, name):
    with pytest.raises(SystemCategoryError):
        container.category_service.add_category(name)


def test_empty_name_is_rejected(container):
    with pytest.raises(ValidationError):
        container.category_service.add_category("  ")


def test_system_category_cannot_be_renamed_or_deleted(container):
    with pytest.raises(SystemCategoryError):
        container.category_service.rename_category(CategoryKey.ATTENDANCE.to_storage(), "Presence")
    with pytest.raises(SystemCategoryError):
        container.category_service.delete_category(CategoryKey.ATTENDANCE.to_storage())


def test_rename_manual_category(container):
    category = container.category_service.add_category("Discipline")

    renamed = container.category_service.rename_category(category.key.to_storage(), "Behaviour")

    assert renamed.key == category.key
    assert renamed.name == "Behaviour"


def test_unknown_category(container):
    with pytest.raises(NotFoundError):
        container.category_service.delete_category("manual:missing")


def test_delete_category_strips_scores_and_recomputes_averages(container, student):
    discipline = container.category_service.add_category("Discipline")
    tidiness = container.category_service.add_category("Tidiness")
    container.rating_service.save_rating(
        student.student_id, DAY, {discipline.key.to_storage(): 2, tidiness.key.to_storage(): 4}
    )

    container.category_service.delete_category(discipline.key.to_storage())

    rating = container.ratings_repo.get_for_student_and_date(student.student_id, DAY)
    assert rating.scores == {tidiness.key: 4}
    assert rating.average == pytest.approx(4.0)
    assert discipline.key not in {c.key for c in container.category_service.list_categories()}


def test_category_key_storage_form():
    assert CategoryKey.manual("abc").to_storage() == "manual:abc"
    assert CategoryKey.from_storage("system:attendance") is CategoryKey.ATTENDANCE
    assert CategoryKey.parse("abc") == CategoryKey.manual("abc")
    with pytest.raises(ValueError):
        CategoryKey.from_storage("system:other")
