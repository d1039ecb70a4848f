# collegeadmin/crud/student.py
import logging
from typing import Optional

from sqlalchemy.orm import Session

from collegeadmin.core.errors import ConflictError, InvalidInputError
from collegeadmin.crud.base import commit, find_one
from collegeadmin.crud.profile import provision_identity
from collegeadmin.db.models import Batch, Profile, SchoolClass, Student
from collegeadmin.schemas.student import StudentCreate, StudentUpdate

logger = logging.getLogger(__name__)


def get_student_for_profile(db: Session, profile_id: int) -> Optional[Student]:
    return find_one(db, Student, profile_id=profile_id)


def _check_references(db: Session, batch_id: Optional[int], class_id: Optional[int]) -> None:
    if batch_id is not None and db.get(Batch, batch_id) is None:
        raise InvalidInputError(f"Batch {batch_id} does not exist")
    if class_id is not None and db.get(SchoolClass, class_id) is None:
        raise InvalidInputError(f"Class {class_id} does not exist")


def create_student(db: Session, data: StudentCreate) -> Student:
    if find_one(db, Student, student_id=data.student_id):
        raise ConflictError(f"Student ID {data.student_id} already exists")
    _check_references(db, data.batch_id, data.class_id)

    profile = None
    if data.email or data.password:
        if not (data.email and data.password and data.full_name):
            raise InvalidInputError("email, password and full_name are required to create an account")
        profile = provision_identity(
            db,
            email=data.email,
            password=data.password,
            full_name=data.full_name,
            role="student",
            phone=data.phone,
        )

    student = Student(
        student_id=data.student_id,
        profile_id=profile.id if profile else None,
        batch_id=data.batch_id,
        class_id=data.class_id,
        status=data.status,
    )
    if data.enrollment_date:
        student.enrollment_date = data.enrollment_date
    db.add(student)
    commit(db, "create student")
    db.refresh(student)
    logger.info("Created student %s (id=%s)", student.student_id, student.id)
    return student


def update_student(db: Session, student: Student, data: StudentUpdate) -> Student:
    changes = data.model_dump(exclude_unset=True)
    profile_changes = {k: changes.pop(k) for k in ("full_name", "phone") if k in changes}

    new_code = changes.get("student_id")
    if new_code and new_code != student.student_id and find_one(db, Student, student_id=new_code):
        raise ConflictError(f"Student ID {new_code} already exists")
    _check_references(db, changes.get("batch_id"), changes.get("class_id"))

    for key, value in changes.items():
        setattr(student, key, value)

    # профиль обновляем, только если он привязан
    if profile_changes and student.profile_id:
        profile = db.get(Profile, student.profile_id)
        if profile:
            for key, value in profile_changes.items():
                setattr(profile, key, value)

    commit(db, "update student")
    db.refresh(student)
    return student
