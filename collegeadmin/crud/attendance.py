# collegeadmin/crud/attendance.py
import logging
from datetime import date
from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from collegeadmin.core.errors import InvalidInputError, RemoteFailureError
from collegeadmin.core.relations import resolve
from collegeadmin.crud.base import commit, get_or_404, list_all
from collegeadmin.db.models import Attendance, SchoolClass, Student
from collegeadmin.schemas.attendance import AttendanceMark, RollEntry

logger = logging.getLogger(__name__)


def class_roll(db: Session, class_id: int, on: date) -> List[RollEntry]:
    """Активные студенты класса с отметкой за день."""
    get_or_404(db, SchoolClass, class_id)
    students = list_all(db, Student, Student.student_id, class_id=class_id, status="active")
    marked = {
        a.student_id: a.status
        for a in list_all(db, Attendance, class_id=class_id, date=on)
    }
    records = resolve(db, Student, students, ["profile"]).records
    return [
        RollEntry(
            student_id=r["id"],
            student_code=r["student_id"],
            full_name=(r["profile"] or {}).get("full_name"),
            is_present=marked.get(r["id"]) == "present",
        )
        for r in records
    ]


def replace_attendance(
    db: Session,
    class_id: int,
    on: date,
    entries: List[AttendanceMark],
    faculty_id: Optional[int] = None,
) -> List[Attendance]:
    """
    Заменяет все отметки класса за день новым набором.

    Повторное сохранение того же дня не накапливает записи: старые удаляются,
    новые вставляются в одной транзакции. При одновременном редактировании
    побеждает последний.
    """
    get_or_404(db, SchoolClass, class_id)

    student_ids = [e.student_id for e in entries]
    if len(student_ids) != len(set(student_ids)):
        raise InvalidInputError("Each student may appear only once per attendance sheet")
    if student_ids:
        known = {
            s.id for s in db.query(Student.id).filter(Student.id.in_(student_ids)).all()
        }
        missing = sorted(set(student_ids) - known)
        if missing:
            raise InvalidInputError(f"Unknown students: {', '.join(map(str, missing))}")

    try:
        db.query(Attendance).filter(
            Attendance.class_id == class_id,
            Attendance.date == on,
        ).delete(synchronize_session=False)
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception("Failed to clear attendance for class=%s date=%s", class_id, on)
        raise RemoteFailureError(f"Failed to save attendance: {e}")

    records = [
        Attendance(
            student_id=entry.student_id,
            class_id=class_id,
            faculty_id=faculty_id,
            date=on,
            status="present" if entry.present else "absent",
            remarks=entry.remarks,
        )
        for entry in entries
    ]
    db.add_all(records)
    commit(db, "save attendance")
    for record in records:
        db.refresh(record)
    logger.info("Saved %d attendance records for class=%s date=%s", len(records), class_id, on)
    return records
