# collegeadmin/crud/result.py
import logging
from typing import List

from sqlalchemy.orm import Session

from collegeadmin.core.aggregates import grade_from_percentage
from collegeadmin.core.errors import InvalidInputError
from collegeadmin.crud.base import commit, get_or_404
from collegeadmin.db.models import Result, SchoolClass, Student, Subject
from collegeadmin.schemas.result import ResultUpdate, ResultUpload

logger = logging.getLogger(__name__)


def upload_results(db: Session, data: ResultUpload, uploaded_by: int) -> List[Result]:
    school_class = get_or_404(db, SchoolClass, data.class_id)
    get_or_404(db, Subject, data.subject_id)
    if not data.entries:
        raise InvalidInputError("Please enter marks for at least one student")

    student_ids = {e.student_id for e in data.entries}
    known = {s.id for s in db.query(Student.id).filter(Student.id.in_(student_ids)).all()}
    missing = sorted(student_ids - known)
    if missing:
        raise InvalidInputError(f"Unknown students: {', '.join(map(str, missing))}")

    semester = data.semester or school_class.semester or 1
    results = [
        Result(
            student_id=entry.student_id,
            class_id=data.class_id,
            subject_id=data.subject_id,
            marks_obtained=entry.marks_obtained,
            max_marks=data.max_marks,
            grade=grade_from_percentage(entry.marks_obtained, data.max_marks),
            exam_type=data.exam_type,
            academic_year=data.academic_year,
            semester=semester,
            uploaded_by=uploaded_by,
        )
        for entry in data.entries
    ]
    db.add_all(results)
    commit(db, "upload results")
    for result in results:
        db.refresh(result)
    logger.info("Uploaded %d results for class=%s subject=%s", len(results), data.class_id, data.subject_id)
    return results


def update_result(db: Session, result: Result, data: ResultUpdate) -> Result:
    changes = data.model_dump(exclude_unset=True, exclude_none=True)
    marks = changes.get("marks_obtained", result.marks_obtained)
    maximum = changes.get("max_marks", result.max_marks)
    # оценка всегда пересчитывается из баллов
    result.grade = grade_from_percentage(marks, maximum)
    for key, value in changes.items():
        setattr(result, key, value)
    commit(db, "update result")
    db.refresh(result)
    return result
