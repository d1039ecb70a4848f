# collegeadmin/api/academics.py
# Батчи, предметы и курсы: простые справочники администратора
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from collegeadmin.api.deps import get_db, require_capability
from collegeadmin.core.relations import resolve
from collegeadmin.core.roles import Capability
from collegeadmin.crud import base as crud
from collegeadmin.db.models import Batch, Course, Profile, Subject
from collegeadmin.schemas.academics import (
    BatchCreate,
    BatchOut,
    BatchUpdate,
    CourseCreate,
    CourseOut,
    CourseUpdate,
    SubjectCreate,
    SubjectOut,
    SubjectUpdate,
)

router = APIRouter()

manage_academics = require_capability(Capability.MANAGE_ACADEMICS)


# ---------- Batches ----------

@router.get("/batches", response_model=list[BatchOut])
def list_batches(db: Session = Depends(get_db), current_user: Profile = Depends(manage_academics)):
    return crud.list_all(db, Batch, Batch.name)


@router.post("/batches", response_model=BatchOut, status_code=201)
def create_batch(
    batch_in: BatchCreate,
    db: Session = Depends(get_db),
    current_user: Profile = Depends(manage_academics),
):
    return crud.create(db, Batch, batch_in.model_dump())


@router.put("/batches/{batch_id}", response_model=BatchOut)
def update_batch(
    batch_id: int,
    batch_update: BatchUpdate,
    db: Session = Depends(get_db),
    current_user: Profile = Depends(manage_academics),
):
    batch = crud.get_or_404(db, Batch, batch_id)
    return crud.update(db, batch, batch_update.model_dump(exclude_unset=True))


@router.delete("/batches/{batch_id}")
def delete_batch(batch_id: int, db: Session = Depends(get_db), current_user: Profile = Depends(manage_academics)):
    crud.delete(db, crud.get_or_404(db, Batch, batch_id))
    return {"message": "Batch deleted"}


# ---------- Subjects ----------

@router.get("/subjects", response_model=list[SubjectOut])
def list_subjects(
    class_id: int | None = None,
    db: Session = Depends(get_db),
    current_user: Profile = Depends(manage_academics),
):
    return crud.list_all(db, Subject, Subject.code, class_id=class_id)


@router.post("/subjects", response_model=SubjectOut, status_code=201)
def create_subject(
    subject_in: SubjectCreate,
    db: Session = Depends(get_db),
    current_user: Profile = Depends(manage_academics),
):
    return crud.create(db, Subject, subject_in.model_dump())


@router.put("/subjects/{subject_id}", response_model=SubjectOut)
def update_subject(
    subject_id: int,
    subject_update: SubjectUpdate,
    db: Session = Depends(get_db),
    current_user: Profile = Depends(manage_academics),
):
    subject = crud.get_or_404(db, Subject, subject_id)
    return crud.update(db, subject, subject_update.model_dump(exclude_unset=True))


@router.delete("/subjects/{subject_id}")
def delete_subject(subject_id: int, db: Session = Depends(get_db), current_user: Profile = Depends(manage_academics)):
    crud.delete(db, crud.get_or_404(db, Subject, subject_id))
    return {"message": "Subject deleted"}


# ---------- Courses ----------

@router.get("/courses")
def list_courses(db: Session = Depends(get_db), current_user: Profile = Depends(manage_academics)):
    courses = crud.list_all(db, Course, Course.course_code)
    return resolve(db, Course, courses, ["faculty.profile", "class"]).as_payload()


@router.post("/courses", response_model=CourseOut, status_code=201)
def create_course(
    course_in: CourseCreate,
    db: Session = Depends(get_db),
    current_user: Profile = Depends(manage_academics),
):
    return crud.create(db, Course, course_in.model_dump())


@router.put("/courses/{course_id}", response_model=CourseOut)
def update_course(
    course_id: int,
    course_update: CourseUpdate,
    db: Session = Depends(get_db),
    current_user: Profile = Depends(manage_academics),
):
    course = crud.get_or_404(db, Course, course_id)
    return crud.update(db, course, course_update.model_dump(exclude_unset=True))


@router.delete("/courses/{course_id}")
def delete_course(course_id: int, db: Session = Depends(get_db), current_user: Profile = Depends(manage_academics)):
    crud.delete(db, crud.get_or_404(db, Course, course_id))
    return {"message": "Course deleted"}
