# collegeadmin/core/reports.py
"""
Табличные отчёты (справочник студентов, посещаемость, результаты, оплата)
и их выгрузка в CSV.

Каждая ячейка является строкой; отсутствующие значения выводятся как "-", чтобы
все строки отчёта имели одинаковую длину.
"""
import csv
import io
import logging
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from collegeadmin.core.config import settings
from collegeadmin.core.errors import InvalidInputError, RemoteFailureError
from collegeadmin.core.relations import RelationWarning, Resolution, resolve
from collegeadmin.db.models import Attendance, FeeInvoice, Result, Student

logger = logging.getLogger(__name__)

PLACEHOLDER = "-"
NO_FACULTY_PLACEHOLDER = "No faculty assigned."


class ReportType(str, Enum):
    STUDENTS = "students"
    ATTENDANCE = "attendance"
    RESULTS = "results"
    FEES = "fees"


REPORT_COLUMNS: Dict[ReportType, Tuple[str, ...]] = {
    ReportType.STUDENTS: ("Student ID", "Name", "Email", "Status", "Enrollment Date"),
    ReportType.ATTENDANCE: ("Date", "Student ID", "Name", "Class", "Status"),
    ReportType.RESULTS: ("Student ID", "Name", "Subject", "Marks", "Grade", "Exam Type"),
    ReportType.FEES: ("Student ID", "Name", "Semester", "Amount", "Status", "Due Date"),
}


@dataclass(frozen=True)
class ReportSource:
    model: Any
    order_by: Tuple[Any, ...]
    paths: Tuple[str, ...]
    limited: bool


REPORT_SOURCES: Dict[ReportType, ReportSource] = {
    ReportType.STUDENTS: ReportSource(
        Student, (Student.created_at.desc(), Student.id.desc()), ("profile",), limited=False
    ),
    ReportType.ATTENDANCE: ReportSource(
        Attendance, (Attendance.date.desc(), Attendance.id.desc()), ("student.profile", "class"), limited=True
    ),
    ReportType.RESULTS: ReportSource(
        Result, (Result.created_at.desc(), Result.id.desc()), ("student.profile", "subject"), limited=True
    ),
    ReportType.FEES: ReportSource(
        FeeInvoice, (FeeInvoice.created_at.desc(), FeeInvoice.id.desc()), ("student.profile",), limited=False
    ),
}


@dataclass(frozen=True)
class ReportTable:
    report_type: ReportType
    columns: Tuple[str, ...]
    rows: List[Tuple[str, ...]]
    warnings: Tuple[RelationWarning, ...] = ()


def report_type_of(value: Any) -> ReportType:
    try:
        return ReportType(value)
    except ValueError:
        raise InvalidInputError(f"Unknown report type: {value!r}")


def _get(record: Optional[Dict[str, Any]], path: str) -> Any:
    value: Any = record
    for part in path.split("."):
        if value is None:
            return None
        value = value.get(part)
    return value


def _number(value: Decimal) -> str:
    if value == value.to_integral_value():
        return str(value.quantize(Decimal(1)))
    return format(value.normalize(), "f")


def display(value: Any) -> str:
    """Значение ячейки в виде строки; None и пустая строка -> "-"."""
    if value is None or value == "":
        return PLACEHOLDER
    if isinstance(value, Enum):
        value = value.value
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, bool):
        return "yes" if value else "no"
    if isinstance(value, Decimal):
        return _number(value)
    if isinstance(value, float):
        return _number(Decimal(str(value)))
    return str(value)


def _marks(record: Dict[str, Any]) -> str:
    if record.get("marks_obtained") is None:
        return PLACEHOLDER
    return f"{display(record.get('marks_obtained'))}/{display(record.get('max_marks'))}"


def _semester(record: Dict[str, Any]) -> str:
    if record.get("semester") is None:
        return PLACEHOLDER
    return f"Sem {record['semester']}"


def _amount(record: Dict[str, Any], currency_symbol: str) -> str:
    if record.get("amount") is None:
        return PLACEHOLDER
    return f"{currency_symbol}{display(record['amount'])}"


def _row(report_type: ReportType, record: Dict[str, Any], currency_symbol: str) -> Tuple[str, ...]:
    if report_type is ReportType.STUDENTS:
        cells = [
            record.get("student_id"),
            _get(record, "profile.full_name"),
            _get(record, "profile.email"),
            record.get("status"),
            record.get("enrollment_date"),
        ]
    elif report_type is ReportType.ATTENDANCE:
        cells = [
            record.get("date"),
            _get(record, "student.student_id"),
            _get(record, "student.profile.full_name"),
            _get(record, "class.name"),
            record.get("status"),
        ]
    elif report_type is ReportType.RESULTS:
        cells = [
            _get(record, "student.student_id"),
            _get(record, "student.profile.full_name"),
            _get(record, "subject.name"),
            _marks(record),
            record.get("grade"),
            record.get("exam_type"),
        ]
    else:
        cells = [
            _get(record, "student.student_id"),
            _get(record, "student.profile.full_name"),
            _semester(record),
            _amount(record, currency_symbol),
            record.get("payment_status"),
            record.get("due_date"),
        ]
    return tuple(display(cell) for cell in cells)


def project(
    report_type: Any,
    records: Iterable[Dict[str, Any]],
    currency_symbol: Optional[str] = None,
    warnings: Sequence[RelationWarning] = (),
) -> ReportTable:
    report_type = report_type_of(report_type)
    symbol = settings.CURRENCY_SYMBOL if currency_symbol is None else currency_symbol
    rows = [_row(report_type, record, symbol) for record in records]
    return ReportTable(
        report_type=report_type,
        columns=REPORT_COLUMNS[report_type],
        rows=rows,
        warnings=tuple(warnings),
    )


def to_csv(table: ReportTable) -> str:
    """Все поля в кавычках, заголовок первой строкой, строки через "\\n"."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")
    writer.writerow(table.columns)
    writer.writerows(table.rows)
    return buffer.getvalue()[:-1]


def report_filename(report_type: Any, on: Optional[date] = None) -> str:
    report_type = report_type_of(report_type)
    return f"{report_type.value}_report_{(on or date.today()).isoformat()}.csv"


def load_report(db: Session, report_type: Any, limit: Optional[int] = None) -> Resolution:
    report_type = report_type_of(report_type)
    source = REPORT_SOURCES[report_type]

    query = db.query(source.model).order_by(*source.order_by)
    if source.limited:
        query = query.limit(limit or settings.REPORT_ROW_LIMIT)
    try:
        rows = query.all()
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception("Failed to fetch %s report", report_type.value)
        raise RemoteFailureError(f"Failed to fetch report data: {e}")

    resolution = resolve(db, source.model, rows, source.paths)
    if resolution.partial:
        logger.warning(
            "%s report built with unresolved relations: %s",
            report_type.value,
            ", ".join(w.path for w in resolution.warnings),
        )
    return resolution


def build_report(db: Session, report_type: Any, limit: Optional[int] = None) -> ReportTable:
    resolution = load_report(db, report_type, limit)
    return project(report_type, resolution.records, warnings=resolution.warnings)


def faculty_roster(class_record: Dict[str, Any]) -> List[str]:
    """Подписи "Имя (Предмет)" для класса, резолвленного с faculty_assignments.faculty.profile."""
    assignments = class_record.get("faculty_assignments") or []
    if not assignments:
        return [NO_FACULTY_PLACEHOLDER]
    labels = []
    for assignment in assignments:
        name = _get(assignment, "faculty.profile.full_name") or _get(assignment, "faculty.faculty_id")
        labels.append(f"{display(name)} ({display(assignment.get('subject'))})")
    return labels
