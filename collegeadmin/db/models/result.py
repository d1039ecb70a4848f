from sqlalchemy import Column, Integer, String, Numeric, DateTime, ForeignKey
from sqlalchemy.sql import func
from collegeadmin.db.base import Base


class Result(Base):
    __tablename__ = "results"

    id = Column(Integer, primary_key=True, index=True)
    student_id = Column(Integer, ForeignKey("students.id", ondelete="CASCADE"), nullable=False)
    class_id = Column(Integer, ForeignKey("classes.id", ondelete="SET NULL"), nullable=True)
    subject_id = Column(Integer, ForeignKey("subjects.id", ondelete="SET NULL"), nullable=True)
    exam_type = Column(String, nullable=False)  # "midterm", "final", ...
    academic_year = Column(String, nullable=False)  # "2024-2025"
    semester = Column(Integer, nullable=False)
    marks_obtained = Column(Numeric(6, 2), nullable=False)
    max_marks = Column(Numeric(6, 2), nullable=False, default=100)
    # всегда вычисляется из marks_obtained / max_marks
    grade = Column(String, nullable=True)
    uploaded_by = Column(Integer, ForeignKey("faculty.id", ondelete="SET NULL"), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
