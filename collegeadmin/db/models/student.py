from datetime import date

from sqlalchemy import Column, Integer, String, Date, DateTime, ForeignKey, Enum
from sqlalchemy.sql import func
from collegeadmin.db.base import Base


class Student(Base):
    __tablename__ = "students"
    # id не переиспользуется после удаления
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, index=True)
    student_id = Column(String, unique=True, index=True, nullable=False)  # код вида "CS-2024-001"
    # профиль может быть ещё не привязан
    profile_id = Column(Integer, ForeignKey("profiles.id", ondelete="SET NULL"), nullable=True)
    batch_id = Column(Integer, ForeignKey("batches.id", ondelete="SET NULL"), nullable=True)
    class_id = Column(Integer, ForeignKey("classes.id", ondelete="SET NULL"), nullable=True)
    status = Column(
        Enum("active", "inactive", "graduated", name="student_status"),
        nullable=False,
        default="active",
    )
    enrollment_date = Column(Date, nullable=False, default=date.today)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
