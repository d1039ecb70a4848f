# collegeadmin/schemas/student.py
from datetime import date
from typing import Literal, Optional

from pydantic import BaseModel

StudentStatus = Literal["active", "inactive", "graduated"]


class StudentCreate(BaseModel):
    student_id: str
    # учётная запись создаётся вместе со студентом, если переданы email и пароль
    full_name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None
    phone: Optional[str] = None
    batch_id: Optional[int] = None
    class_id: Optional[int] = None
    status: StudentStatus = "active"
    enrollment_date: Optional[date] = None


class StudentUpdate(BaseModel):
    student_id: Optional[str] = None
    full_name: Optional[str] = None
    phone: Optional[str] = None
    batch_id: Optional[int] = None
    class_id: Optional[int] = None
    status: Optional[StudentStatus] = None


class StudentOut(BaseModel):
    id: int
    student_id: str
    profile_id: Optional[int] = None
    batch_id: Optional[int] = None
    class_id: Optional[int] = None
    status: str
    enrollment_date: date

    class Config:
        from_attributes = True
