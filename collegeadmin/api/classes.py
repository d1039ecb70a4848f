# collegeadmin/api/classes.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from collegeadmin.api.deps import get_db, require_capability
from collegeadmin.core.relations import resolve, resolve_one
from collegeadmin.core.reports import faculty_roster
from collegeadmin.core.roles import Capability
from collegeadmin.crud import base as crud
from collegeadmin.crud.school_class import assign_faculty
from collegeadmin.db.models import FacultyAssignment, Profile, SchoolClass
from collegeadmin.schemas.academics import AssignmentCreate, AssignmentOut, ClassCreate, ClassOut, ClassUpdate

router = APIRouter()

manage_academics = require_capability(Capability.MANAGE_ACADEMICS)

CLASS_RELATIONS = ["batch", "faculty_assignments.faculty.profile"]


@router.get("/")
def list_classes(
    db: Session = Depends(get_db),
    current_user: Profile = Depends(manage_academics),
):
    classes = crud.list_all(db, SchoolClass, SchoolClass.name)
    resolution = resolve(db, SchoolClass, classes, CLASS_RELATIONS)
    for record in resolution.records:
        record["faculty_roster"] = faculty_roster(record)
    return resolution.as_payload()


@router.get("/{class_id}")
def get_class(
    class_id: int,
    db: Session = Depends(get_db),
    current_user: Profile = Depends(manage_academics),
):
    resolution = resolve_one(db, SchoolClass, class_id, CLASS_RELATIONS + ["subjects"])
    record = resolution.record
    record["faculty_roster"] = faculty_roster(record)
    return {"item": record, "warnings": resolution.as_payload()["warnings"]}


@router.post("/", response_model=ClassOut, status_code=201)
def create_class(
    class_in: ClassCreate,
    db: Session = Depends(get_db),
    current_user: Profile = Depends(manage_academics),
):
    return crud.create(db, SchoolClass, class_in.model_dump())


@router.put("/{class_id}", response_model=ClassOut)
def update_class(
    class_id: int,
    class_update: ClassUpdate,
    db: Session = Depends(get_db),
    current_user: Profile = Depends(manage_academics),
):
    school_class = crud.get_or_404(db, SchoolClass, class_id)
    return crud.update(db, school_class, class_update.model_dump(exclude_unset=True))


@router.delete("/{class_id}")
def delete_class(
    class_id: int,
    db: Session = Depends(get_db),
    current_user: Profile = Depends(manage_academics),
):
    crud.delete(db, crud.get_or_404(db, SchoolClass, class_id))
    return {"message": "Class deleted"}


@router.post("/{class_id}/assignments", response_model=AssignmentOut, status_code=201)
def create_assignment(
    class_id: int,
    assignment_in: AssignmentCreate,
    db: Session = Depends(get_db),
    current_user: Profile = Depends(manage_academics),
):
    return assign_faculty(db, class_id, assignment_in.faculty_id, assignment_in.subject)


@router.delete("/assignments/{assignment_id}")
def delete_assignment(
    assignment_id: int,
    db: Session = Depends(get_db),
    current_user: Profile = Depends(manage_academics),
):
    crud.delete(db, crud.get_or_404(db, FacultyAssignment, assignment_id))
    return {"message": "Assignment removed"}
