# collegeadmin/api/results.py
from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from collegeadmin.api.deps import get_current_faculty, get_db, require_capability
from collegeadmin.core.roles import Capability
from collegeadmin.crud import base as crud
from collegeadmin.crud import result as crud_result
from collegeadmin.crud.school_class import teaches
from collegeadmin.db.models import Faculty, Profile, Result
from collegeadmin.schemas.result import ResultOut, ResultUpdate, ResultUpload

router = APIRouter()

upload_results = require_capability(Capability.UPLOAD_RESULTS)


@router.post("/", response_model=List[ResultOut], status_code=201)
def upload(
    upload_in: ResultUpload,
    db: Session = Depends(get_db),
    current_user: Profile = Depends(upload_results),
    faculty: Faculty = Depends(get_current_faculty),
):
    if not teaches(db, faculty.id, upload_in.class_id):
        raise HTTPException(status_code=403, detail="Class is not assigned to you")
    return crud_result.upload_results(db, upload_in, uploaded_by=faculty.id)


@router.patch("/{result_id}", response_model=ResultOut)
def update(
    result_id: int,
    result_update: ResultUpdate,
    db: Session = Depends(get_db),
    current_user: Profile = Depends(upload_results),
    faculty: Faculty = Depends(get_current_faculty),
):
    result = crud.get_or_404(db, Result, result_id)
    if result.uploaded_by != faculty.id:
        raise HTTPException(status_code=403, detail="Only the uploader can change this result")
    return crud_result.update_result(db, result, result_update)
