# collegeadmin/schemas/academics.py
# Батчи, классы, назначения преподавателей, предметы и курсы
from typing import Optional

from pydantic import BaseModel, Field


class BatchCreate(BaseModel):
    name: str
    department: str
    year: int


class BatchUpdate(BaseModel):
    name: Optional[str] = None
    department: Optional[str] = None
    year: Optional[int] = None


class BatchOut(BatchCreate):
    id: int

    class Config:
        from_attributes = True


class ClassCreate(BaseModel):
    name: str
    semester: int = Field(ge=1, le=8)
    section: Optional[str] = None
    batch_id: Optional[int] = None


class ClassUpdate(BaseModel):
    name: Optional[str] = None
    semester: Optional[int] = Field(default=None, ge=1, le=8)
    section: Optional[str] = None
    batch_id: Optional[int] = None


class ClassOut(ClassCreate):
    id: int

    class Config:
        from_attributes = True


class AssignmentCreate(BaseModel):
    faculty_id: int
    subject: str


class AssignmentOut(AssignmentCreate):
    id: int
    class_id: int

    class Config:
        from_attributes = True


class SubjectCreate(BaseModel):
    code: str
    name: str
    credits: int = 3
    class_id: Optional[int] = None


class SubjectUpdate(BaseModel):
    code: Optional[str] = None
    name: Optional[str] = None
    credits: Optional[int] = None
    class_id: Optional[int] = None


class SubjectOut(SubjectCreate):
    id: int

    class Config:
        from_attributes = True


class CourseCreate(BaseModel):
    course_code: str
    course_name: str
    credits: int = 3
    program: Optional[str] = None
    assigned_faculty_id: Optional[int] = None
    class_id: Optional[int] = None


class CourseUpdate(BaseModel):
    course_code: Optional[str] = None
    course_name: Optional[str] = None
    credits: Optional[int] = None
    program: Optional[str] = None
    assigned_faculty_id: Optional[int] = None
    class_id: Optional[int] = None


class CourseOut(CourseCreate):
    id: int

    class Config:
        from_attributes = True
