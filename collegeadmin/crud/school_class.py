# collegeadmin/crud/school_class.py
from typing import Dict, Iterable, List

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from collegeadmin.core.errors import RemoteFailureError
from collegeadmin.crud.base import create, get_or_404, list_all
from collegeadmin.db.models import Faculty, FacultyAssignment, SchoolClass, Student


def assign_faculty(db: Session, class_id: int, faculty_id: int, subject: str) -> FacultyAssignment:
    # Дубли (тот же преподаватель + предмет) разрешены: совместное ведение
    get_or_404(db, SchoolClass, class_id)
    get_or_404(db, Faculty, faculty_id)
    return create(db, FacultyAssignment, {"class_id": class_id, "faculty_id": faculty_id, "subject": subject})


def assignments_for_faculty(db: Session, faculty_id: int) -> List[FacultyAssignment]:
    return list_all(db, FacultyAssignment, FacultyAssignment.id, faculty_id=faculty_id)


def student_counts(db: Session, class_ids: Iterable[int]) -> Dict[int, int]:
    """Число студентов в каждом классе одним GROUP BY-запросом."""
    class_ids = list(set(class_ids))
    if not class_ids:
        return {}
    try:
        rows = (
            db.query(Student.class_id, func.count(Student.id))
            .filter(Student.class_id.in_(class_ids))
            .group_by(Student.class_id)
            .all()
        )
    except SQLAlchemyError as e:
        db.rollback()
        raise RemoteFailureError(f"Failed to count students: {e}")
    counts = {class_id: 0 for class_id in class_ids}
    counts.update({class_id: count for class_id, count in rows})
    return counts


def teaches(db: Session, faculty_id: int, class_id: int) -> bool:
    try:
        return db.query(FacultyAssignment.id).filter(
            FacultyAssignment.faculty_id == faculty_id,
            FacultyAssignment.class_id == class_id,
        ).first() is not None
    except SQLAlchemyError as e:
        db.rollback()
        raise RemoteFailureError(f"Failed to fetch faculty assignments: {e}")
