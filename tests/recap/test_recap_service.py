from datetime import date, datetime

import pytest

from gradewise.core.enums import Period


def test_recap_service_reads_live_collections(container, student, other_student, check_in_at):
    discipline = container.category_service.add_category("Discipline")
    check_in_at(student.student_id, datetime(2025, 1, 6, 6, 50))
    container.rating_service.save_rating(student.student_id, date(2025, 1, 6), {discipline.key.to_storage(): 3})

    recaps = container.recap_service.build_recap(Period.WEEKLY, today=date(2025, 1, 6))

    assert [r.student_id for r in recaps] == [student.student_id, other_student.student_id]
    assert recaps[0].overall_average == pytest.approx(4.0)
    assert recaps[0].attendance_percentage == pytest.approx(100.0)


def test_recap_applies_no_checkout_before_aggregating(container, student, check_in_at):
    check_in_at(student.student_id, datetime(2025, 1, 6, 6, 50))

    (recap,) = container.recap_service.build_recap(Period.WEEKLY, today=date(2025, 1, 7))

    assert recap.overall_average == pytest.approx(0.0)
    assert recap.days_present == 0


def test_export_recap_csv(container, student):
    export = container.recap_service.export_recap_csv(Period.MONTHLY, today=date(2025, 1, 8))

    assert export.filename == "gradewise_recap_monthly_2025-01-08.csv"
    assert export.content.splitlines()[1] == '"Andi Saputra",0,0.00,0,0.0,N/A'


def test_export_monthly_attendance_csv(container, student):
    export = container.recap_service.export_monthly_attendance_csv(month_of=date(2024, 1, 10))

    assert export.filename == "attendance_recap_2024-01.csv"
    assert export.content.splitlines() == [
        "Student Name,Present,Late,Sick,Permit,Absent,Effective Days",
        "Andi Saputra,0,0,0,0,0,23",
    ]
