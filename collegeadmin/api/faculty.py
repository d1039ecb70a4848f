# collegeadmin/api/faculty.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from collegeadmin.api.deps import get_current_faculty, get_db, require_capability
from collegeadmin.core.relations import resolve, resolve_one
from collegeadmin.core.roles import Capability
from collegeadmin.crud import base as crud
from collegeadmin.crud import faculty as crud_faculty
from collegeadmin.crud.school_class import assignments_for_faculty, student_counts
from collegeadmin.db.models import Faculty, FacultyAssignment, Profile
from collegeadmin.schemas.faculty import FacultyCreate, FacultyOut, FacultyUpdate

router = APIRouter()

manage_faculty = require_capability(Capability.MANAGE_FACULTY)
own_classes = require_capability(Capability.VIEW_OWN_CLASSES)


@router.get("/me/classes")
def my_classes(
    db: Session = Depends(get_db),
    current_user: Profile = Depends(own_classes),
    faculty: Faculty = Depends(get_current_faculty),
):
    assignments = assignments_for_faculty(db, faculty.id)
    resolution = resolve(db, FacultyAssignment, assignments, ["class"])
    counts = student_counts(db, (a.class_id for a in assignments))
    for record in resolution.records:
        record["student_count"] = counts.get(record["class_id"], 0)
    return resolution.as_payload()


@router.get("/")
def list_faculty(
    status: str | None = None,
    department: str | None = None,
    db: Session = Depends(get_db),
    current_user: Profile = Depends(manage_faculty),
):
    rows = crud.list_all(db, Faculty, Faculty.faculty_id, status=status, department=department)
    return resolve(db, Faculty, rows, ["profile"]).as_payload()


@router.get("/{faculty_id}")
def get_faculty(
    faculty_id: int,
    db: Session = Depends(get_db),
    current_user: Profile = Depends(manage_faculty),
):
    resolution = resolve_one(db, Faculty, faculty_id, ["profile", "assignments.class"])
    return {"item": resolution.record, "warnings": resolution.as_payload()["warnings"]}


@router.post("/", response_model=FacultyOut, status_code=201)
def create_faculty(
    faculty_in: FacultyCreate,
    db: Session = Depends(get_db),
    current_user: Profile = Depends(manage_faculty),
):
    return crud_faculty.create_faculty(db, faculty_in)


@router.put("/{faculty_id}", response_model=FacultyOut)
def update_faculty(
    faculty_id: int,
    faculty_update: FacultyUpdate,
    db: Session = Depends(get_db),
    current_user: Profile = Depends(manage_faculty),
):
    faculty = crud.get_or_404(db, Faculty, faculty_id)
    return crud_faculty.update_faculty(db, faculty, faculty_update)


@router.delete("/{faculty_id}")
def delete_faculty(
    faculty_id: int,
    db: Session = Depends(get_db),
    current_user: Profile = Depends(manage_faculty),
):
    faculty = crud.get_or_404(db, Faculty, faculty_id)
    crud.delete(db, faculty)
    return {"message": "Faculty deleted"}
