from datetime import date
from typing import Literal, Optional

from pydantic import BaseModel

FacultyStatus = Literal["active", "inactive", "on_leave"]


class FacultyCreate(BaseModel):
    faculty_id: str
    department: str
    designation: Optional[str] = None
    full_name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None
    phone: Optional[str] = None
    status: FacultyStatus = "active"
    joining_date: Optional[date] = None


class FacultyUpdate(BaseModel):
    faculty_id: Optional[str] = None
    department: Optional[str] = None
    designation: Optional[str] = None
    full_name: Optional[str] = None
    phone: Optional[str] = None
    status: Optional[FacultyStatus] = None


class FacultyOut(BaseModel):
    id: int
    faculty_id: str
    profile_id: Optional[int] = None
    department: str
    designation: Optional[str] = None
    status: str
    joining_date: date

    class Config:
        from_attributes = True
