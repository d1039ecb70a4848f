# collegeadmin/core/aggregates.py
"""
Сводная статистика для дашбордов и отчётов.

Функции принимают как ORM-объекты, так и словари-представления из
collegeadmin.core.relations, поэтому поля читаются через _field().
"""
import logging
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any, Dict, Iterable, Mapping, Optional

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from collegeadmin.core.errors import InvalidInputError, RemoteFailureError
from collegeadmin.db.models import Batch, Course, Faculty, SchoolClass, Student

logger = logging.getLogger(__name__)

# Нижняя граница включительно: ровно 90.0 это A+, 89.999 уже A
GRADE_BANDS = (
    (Decimal(90), "A+"),
    (Decimal(80), "A"),
    (Decimal(70), "B+"),
    (Decimal(60), "B"),
    (Decimal(50), "C"),
    (Decimal(40), "D"),
)
FAILING_GRADE = "F"
GRADES = tuple(grade for _, grade in GRADE_BANDS) + (FAILING_GRADE,)

COUNTED_ENTITIES = {
    "students": Student,
    "faculty": Faculty,
    "classes": SchoolClass,
    "batches": Batch,
    "courses": Course,
}


@dataclass(frozen=True)
class AttendanceSummary:
    present: int
    absent: int
    total: int
    percentage: int


@dataclass(frozen=True)
class FeeTotals:
    paid_total: Decimal
    pending_total: Decimal

    @property
    def total(self) -> Decimal:
        return self.paid_total + self.pending_total


def _field(record: Any, name: str, default: Any = None) -> Any:
    if isinstance(record, Mapping):
        return record.get(name, default)
    return getattr(record, name, default)


def _to_decimal(value: Any, name: str) -> Decimal:
    if isinstance(value, bool):
        raise InvalidInputError(f"{name} must be a number, got {value!r}")
    if isinstance(value, Decimal):
        return value
    try:
        # через str, чтобы 0.1 не превращался в 0.1000000000000000055...
        return Decimal(str(value))
    except (InvalidOperation, ValueError, TypeError):
        raise InvalidInputError(f"{name} must be a number, got {value!r}")


def _percent(part: int, whole: int) -> int:
    if whole == 0:
        return 0
    ratio = Decimal(100 * part) / Decimal(whole)
    return int(ratio.quantize(Decimal(1), rounding=ROUND_HALF_UP))


def attendance_rate(records: Iterable[Any]) -> int:
    """Процент присутствий, округлённый half-up до целого; 0 для пустого набора."""
    statuses = [_field(r, "status") for r in records]
    present = sum(1 for s in statuses if s == "present")
    return _percent(present, len(statuses))


def attendance_summary(records: Iterable[Any]) -> AttendanceSummary:
    statuses = [_field(r, "status") for r in records]
    present = sum(1 for s in statuses if s == "present")
    absent = sum(1 for s in statuses if s == "absent")
    total = len(statuses)
    return AttendanceSummary(
        present=present,
        absent=absent,
        total=total,
        percentage=_percent(present, total),
    )


def fee_totals(invoices: Iterable[Any]) -> FeeTotals:
    """
    Сумма оплаченных и неоплаченных счетов.

    Каждый счёт попадает ровно в одну корзину: "paid" или всё остальное
    (pending, overdue). Считаем в Decimal, без float.
    """
    paid = Decimal(0)
    pending = Decimal(0)
    for invoice in invoices:
        amount = _to_decimal(_field(invoice, "amount"), "amount")
        if _field(invoice, "payment_status") == "paid":
            paid += amount
        else:
            pending += amount
    return FeeTotals(paid_total=paid, pending_total=pending)


def grade_from_percentage(marks_obtained: Any, max_marks: Any) -> str:
    obtained = _to_decimal(marks_obtained, "marks_obtained")
    maximum = _to_decimal(max_marks, "max_marks")
    if maximum <= 0:
        raise InvalidInputError("max_marks must be greater than zero")
    if obtained < 0 or obtained > maximum:
        raise InvalidInputError(f"marks_obtained must be between 0 and {maximum}, got {obtained}")

    percentage = obtained * 100 / maximum
    for lower_bound, grade in GRADE_BANDS:
        if percentage >= lower_bound:
            return grade
    return FAILING_GRADE


def grade_distribution(results: Iterable[Any]) -> Dict[str, int]:
    distribution = {grade: 0 for grade in GRADES}
    for result in results:
        grade = _field(result, "grade")
        if grade not in distribution:
            grade = grade_from_percentage(_field(result, "marks_obtained"), _field(result, "max_marks"))
        distribution[grade] += 1
    return distribution


def entity_counts(db: Session, status_filters: Optional[Mapping[str, str]] = None) -> Dict[str, int]:
    """
    Количество строк по каждой сущности для плиток дашборда.

    status_filters, например {"students": "active"}, оставляет в подсчёте
    только строки с этим статусом.
    """
    status_filters = dict(status_filters or {})
    unknown = set(status_filters) - set(COUNTED_ENTITIES)
    if unknown:
        raise InvalidInputError(f"Unknown entity in status filter: {', '.join(sorted(unknown))}")

    counts = {}
    for name, model in COUNTED_ENTITIES.items():
        query = db.query(func.count(model.id))
        if name in status_filters:
            if not hasattr(model, "status"):
                raise InvalidInputError(f"{name} has no status to filter on")
            query = query.filter(model.status == status_filters[name])
        try:
            counts[name] = query.scalar() or 0
        except SQLAlchemyError as e:
            logger.exception("Failed to count %s", name)
            raise RemoteFailureError(f"Failed to count {name}: {e}")
    return counts
