from decimal import Decimal

import pytest

from collegeadmin.core.aggregates import (
    GRADES,
    attendance_rate,
    attendance_summary,
    entity_counts,
    fee_totals,
    grade_distribution,
    grade_from_percentage,
)
from collegeadmin.core.errors import InvalidInputError
from collegeadmin.db.models import Batch, Faculty, Student


def _attendance(*statuses):
    return [{"status": s} for s in statuses]


def test_attendance_rate_empty_is_zero():
    assert attendance_rate([]) == 0


def test_attendance_rate_rounds_half_up():
    assert attendance_rate(_attendance("present", "present", "absent")) == 67
    assert attendance_rate(_attendance("present", "absent", "absent")) == 33
    # 1/8 = 12.5% -> 13
    assert attendance_rate(_attendance("present", *["absent"] * 7)) == 13


@pytest.mark.parametrize("present,total", [(0, 1), (1, 1), (5, 9), (7, 11), (50, 200)])
def test_attendance_rate_matches_formula(present, total):
    records = _attendance(*(["present"] * present + ["absent"] * (total - present)))
    expected = int(Decimal(100 * present) / Decimal(total) + Decimal("0.5"))
    assert attendance_rate(records) == expected


def test_attendance_summary_counts_each_status():
    summary = attendance_summary(_attendance("present", "absent", "present", "present"))
    assert (summary.present, summary.absent, summary.total, summary.percentage) == (3, 1, 4, 75)


def test_fee_totals_scenario():
    totals = fee_totals([
        {"amount": 500, "payment_status": "paid"},
        {"amount": 300, "payment_status": "pending"},
    ])
    assert totals.paid_total == Decimal(500)
    assert totals.pending_total == Decimal(300)


def test_fee_totals_every_invoice_counted_once():
    invoices = [
        {"amount": Decimal("1200.50"), "payment_status": "paid"},
        {"amount": Decimal("300.25"), "payment_status": "overdue"},
        {"amount": Decimal("99.25"), "payment_status": "pending"},
        {"amount": Decimal("0.00"), "payment_status": "paid"},
    ]
    totals = fee_totals(invoices)
    assert totals.pending_total == Decimal("399.50")
    assert totals.paid_total + totals.pending_total == sum(i["amount"] for i in invoices)
    assert totals.total == Decimal("1600.00")


def test_fee_totals_has_no_float_drift():
    invoices = [{"amount": 0.1, "payment_status": "paid"} for _ in range(3)]
    assert fee_totals(invoices).paid_total == Decimal("0.3")


def test_fee_totals_rejects_non_numeric_amount():
    with pytest.raises(InvalidInputError):
        fee_totals([{"amount": "abc", "payment_status": "paid"}])


@pytest.mark.parametrize(
    "marks,grade",
    [(90, "A+"), (80, "A"), (70, "B+"), (60, "B"), (50, "C"), (40, "D"), (39.99, "F"), (0, "F"), (100, "A+")],
)
def test_grade_boundaries(marks, grade):
    assert grade_from_percentage(marks, 100) == grade


def test_grade_lower_bound_is_inclusive():
    assert grade_from_percentage(Decimal("89.999"), 100) == "A"
    assert grade_from_percentage(45, 100) == "D"
    assert grade_from_percentage(18, 20) == "A+"  # 90%


def test_grade_is_monotonic():
    ranks = [GRADES.index(grade_from_percentage(m, 100)) for m in range(100, -1, -1)]
    assert ranks == sorted(ranks)


@pytest.mark.parametrize("marks", [0, 45, 100, -3])
def test_grade_rejects_zero_max_marks(marks):
    with pytest.raises(InvalidInputError):
        grade_from_percentage(marks, 0)


@pytest.mark.parametrize("marks", [-5, Decimal("-0.5"), 150, Decimal("100.01")])
def test_grade_rejects_marks_outside_range(marks):
    with pytest.raises(InvalidInputError):
        grade_from_percentage(marks, 100)


def test_grade_accepts_full_range():
    assert grade_from_percentage(0, 100) == "F"
    assert grade_from_percentage(Decimal("50.00"), Decimal("50.00")) == "A+"


def test_grade_distribution_counts_all_grades():
    distribution = grade_distribution([
        {"grade": "A+"},
        {"grade": "A+"},
        {"grade": None, "marks_obtained": 45, "max_marks": 100},
    ])
    assert set(distribution) == set(GRADES)
    assert distribution["A+"] == 2
    assert distribution["D"] == 1
    assert distribution["F"] == 0


def test_entity_counts_with_status_filter(db):
    db.add_all([
        Student(student_id="S1", status="active"),
        Student(student_id="S2", status="inactive"),
        Student(student_id="S3", status="active"),
        Faculty(faculty_id="F1", department="CSE"),
        Batch(name="2024", department="CSE", year=2024),
    ])
    db.commit()

    counts = entity_counts(db)
    assert counts == {"students": 3, "faculty": 1, "classes": 0, "batches": 1, "courses": 0}
    assert entity_counts(db, {"students": "active"})["students"] == 2


def test_entity_counts_rejects_unknown_filter(db):
    with pytest.raises(InvalidInputError):
        entity_counts(db, {"batches": "active"})
    with pytest.raises(InvalidInputError):
        entity_counts(db, {"teachers": "active"})
