from pydantic import BaseModel
from datetime import date
from typing import List, Literal, Optional


class AttendanceMark(BaseModel):
    student_id: int
    present: bool
    remarks: Optional[str] = None


class AttendanceSheet(BaseModel):
    date: date
    entries: List[AttendanceMark]


class RollEntry(BaseModel):
    student_id: int
    student_code: str
    full_name: Optional[str] = None
    is_present: bool


class AttendanceOut(BaseModel):
    id: int
    student_id: int
    class_id: Optional[int] = None
    faculty_id: Optional[int] = None
    date: date
    status: Literal["present", "absent"]
    remarks: Optional[str] = None

    class Config:
        from_attributes = True


class AttendanceSummaryOut(BaseModel):
    present: int
    absent: int
    total: int
    percentage: int
