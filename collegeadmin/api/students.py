# collegeadmin/api/students.py
from dataclasses import asdict

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from collegeadmin.api.deps import get_db, require_capability
from collegeadmin.api.encoding import encode_payload
from collegeadmin.core.aggregates import (
    attendance_rate,
    attendance_summary,
    fee_totals,
    grade_distribution,
)
from collegeadmin.core.relations import resolve, resolve_one
from collegeadmin.core.roles import Capability
from collegeadmin.crud import base as crud
from collegeadmin.crud import student as crud_student
from collegeadmin.db.models import Attendance, FeeInvoice, Profile, Result, Student
from collegeadmin.schemas.fee import FeeTotalsOut
from collegeadmin.schemas.student import StudentCreate, StudentOut, StudentUpdate

router = APIRouter()

manage_students = require_capability(Capability.MANAGE_STUDENTS)
own_records = require_capability(Capability.VIEW_OWN_RECORDS)


# ---------- Личный кабинет студента ----------

@router.get("/me/attendance")
def my_attendance(
    db: Session = Depends(get_db),
    current_user: Profile = Depends(own_records),
):
    student = crud_student.get_student_for_profile(db, current_user.id)
    if not student:
        return {"items": [], "warnings": [], "summary": asdict(attendance_summary([]))}

    records = crud.list_all(db, Attendance, Attendance.date.desc(), student_id=student.id)
    payload = resolve(db, Attendance, records, ["class"]).as_payload()
    payload["summary"] = asdict(attendance_summary(records))
    return payload


@router.get("/me/results")
def my_results(
    db: Session = Depends(get_db),
    current_user: Profile = Depends(own_records),
):
    student = crud_student.get_student_for_profile(db, current_user.id)
    if not student:
        return {"items": [], "warnings": [], "grades": grade_distribution([])}

    results = crud.list_all(db, Result, Result.created_at.desc(), student_id=student.id)
    payload = resolve(db, Result, results, ["subject"]).as_payload()
    payload["grades"] = grade_distribution(results)
    return encode_payload(payload)


@router.get("/me/fees")
def my_fees(
    db: Session = Depends(get_db),
    current_user: Profile = Depends(own_records),
):
    student = crud_student.get_student_for_profile(db, current_user.id)
    invoices = []
    if student:
        invoices = crud.list_all(db, FeeInvoice, FeeInvoice.created_at.desc(), student_id=student.id)
    totals = FeeTotalsOut(**asdict(fee_totals(invoices)))
    return encode_payload({"items": resolve(db, FeeInvoice, invoices).records, **totals.model_dump()})


# ---------- Администрирование ----------

@router.get("/")
def list_students(
    status: str | None = None,
    class_id: int | None = None,
    db: Session = Depends(get_db),
    current_user: Profile = Depends(manage_students),
):
    students = crud.list_all(
        db, Student, Student.created_at.desc(), Student.id.desc(), status=status, class_id=class_id
    )
    return resolve(db, Student, students, ["profile", "batch", "class"]).as_payload()


@router.get("/{student_id}")
def get_student(
    student_id: int,
    db: Session = Depends(get_db),
    current_user: Profile = Depends(manage_students),
):
    resolution = resolve_one(
        db, Student, student_id, ["profile", "batch", "class", "fee_invoices", "attendance", "results"]
    )
    record = resolution.record
    fees = FeeTotalsOut(**asdict(fee_totals(record["fee_invoices"] or [])))
    return encode_payload({
        "item": record,
        "attendance_rate": attendance_rate(record["attendance"] or []),
        "fees": fees.model_dump(),
        "warnings": resolution.as_payload()["warnings"],
    })


@router.post("/", response_model=StudentOut, status_code=201)
def create_student(
    student_in: StudentCreate,
    db: Session = Depends(get_db),
    current_user: Profile = Depends(manage_students),
):
    return crud_student.create_student(db, student_in)


@router.put("/{student_id}", response_model=StudentOut)
def update_student(
    student_id: int,
    student_update: StudentUpdate,
    db: Session = Depends(get_db),
    current_user: Profile = Depends(manage_students),
):
    student = crud.get_or_404(db, Student, student_id)
    return crud_student.update_student(db, student, student_update)


@router.delete("/{student_id}")
def delete_student(
    student_id: int,
    db: Session = Depends(get_db),
    current_user: Profile = Depends(manage_students),
):
    student = crud.get_or_404(db, Student, student_id)
    crud.delete(db, student)
    return {"message": "Student deleted"}
