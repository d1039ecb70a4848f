# collegeadmin/crud/faculty.py
import logging
from typing import Optional

from sqlalchemy.orm import Session

from collegeadmin.core.errors import ConflictError, InvalidInputError
from collegeadmin.crud.base import commit, find_one
from collegeadmin.crud.profile import provision_identity
from collegeadmin.db.models import Faculty, Profile
from collegeadmin.schemas.faculty import FacultyCreate, FacultyUpdate

logger = logging.getLogger(__name__)


def get_faculty_for_profile(db: Session, profile_id: int) -> Optional[Faculty]:
    return find_one(db, Faculty, profile_id=profile_id)


def create_faculty(db: Session, data: FacultyCreate) -> Faculty:
    if find_one(db, Faculty, faculty_id=data.faculty_id):
        raise ConflictError(f"Faculty ID {data.faculty_id} already exists")

    profile = None
    if data.email or data.password:
        if not (data.email and data.password and data.full_name):
            raise InvalidInputError("email, password and full_name are required to create an account")
        profile = provision_identity(
            db,
            email=data.email,
            password=data.password,
            full_name=data.full_name,
            role="faculty",
            phone=data.phone,
        )

    faculty = Faculty(
        faculty_id=data.faculty_id,
        profile_id=profile.id if profile else None,
        department=data.department,
        designation=data.designation,
        status=data.status,
    )
    if data.joining_date:
        faculty.joining_date = data.joining_date
    db.add(faculty)
    commit(db, "create faculty")
    db.refresh(faculty)
    logger.info("Created faculty %s (id=%s)", faculty.faculty_id, faculty.id)
    return faculty


def update_faculty(db: Session, faculty: Faculty, data: FacultyUpdate) -> Faculty:
    changes = data.model_dump(exclude_unset=True)
    profile_changes = {k: changes.pop(k) for k in ("full_name", "phone") if k in changes}

    new_code = changes.get("faculty_id")
    if new_code and new_code != faculty.faculty_id and find_one(db, Faculty, faculty_id=new_code):
        raise ConflictError(f"Faculty ID {new_code} already exists")

    for key, value in changes.items():
        setattr(faculty, key, value)

    if profile_changes and faculty.profile_id:
        profile = db.get(Profile, faculty.profile_id)
        if profile:
            for key, value in profile_changes.items():
                setattr(profile, key, value)

    commit(db, "update faculty")
    db.refresh(faculty)
    return faculty
