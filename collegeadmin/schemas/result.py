from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, Field


class MarksEntry(BaseModel):
    student_id: int
    marks_obtained: Decimal = Field(ge=0)


class ResultUpload(BaseModel):
    class_id: int
    subject_id: int
    exam_type: str
    academic_year: str
    max_marks: Decimal = Field(default=Decimal(100), gt=0)
    semester: Optional[int] = None  # по умолчанию берётся семестр класса
    entries: List[MarksEntry]


class ResultUpdate(BaseModel):
    marks_obtained: Optional[Decimal] = Field(default=None, ge=0)
    max_marks: Optional[Decimal] = Field(default=None, gt=0)
    exam_type: Optional[str] = None


class ResultOut(BaseModel):
    id: int
    student_id: int
    class_id: Optional[int] = None
    subject_id: Optional[int] = None
    exam_type: str
    academic_year: str
    semester: int
    marks_obtained: Decimal
    max_marks: Decimal
    grade: Optional[str] = None
    uploaded_by: Optional[int] = None

    class Config:
        from_attributes = True
