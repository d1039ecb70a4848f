# collegeadmin/api/attendance.py
from datetime import date
from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from collegeadmin.api.deps import get_current_faculty, get_db, require_capability
from collegeadmin.core.roles import Capability
from collegeadmin.crud import attendance as crud_attendance
from collegeadmin.crud.school_class import teaches
from collegeadmin.db.models import Faculty, Profile
from collegeadmin.schemas.attendance import AttendanceOut, AttendanceSheet, RollEntry

router = APIRouter()

mark_attendance = require_capability(Capability.MARK_ATTENDANCE)


def _check_teaches(db: Session, faculty: Faculty, class_id: int) -> None:
    if not teaches(db, faculty.id, class_id):
        raise HTTPException(status_code=403, detail="Class is not assigned to you")


# Студенты класса с отметками за день
@router.get("/class/{class_id}", response_model=List[RollEntry])
def get_class_roll(
    class_id: int,
    on: date,
    db: Session = Depends(get_db),
    current_user: Profile = Depends(mark_attendance),
    faculty: Faculty = Depends(get_current_faculty),
):
    _check_teaches(db, faculty, class_id)
    return crud_attendance.class_roll(db, class_id, on)


# Полная замена отметок класса за день
@router.put("/class/{class_id}", response_model=List[AttendanceOut])
def save_attendance(
    class_id: int,
    sheet: AttendanceSheet,
    db: Session = Depends(get_db),
    current_user: Profile = Depends(mark_attendance),
    faculty: Faculty = Depends(get_current_faculty),
):
    _check_teaches(db, faculty, class_id)
    return crud_attendance.replace_attendance(db, class_id, sheet.date, sheet.entries, faculty_id=faculty.id)
