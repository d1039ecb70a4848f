from datetime import date

from sqlalchemy import Column, Integer, String, Date, DateTime, ForeignKey, Enum
from sqlalchemy.sql import func
from collegeadmin.db.base import Base


class Faculty(Base):
    __tablename__ = "faculty"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, index=True)
    faculty_id = Column(String, unique=True, index=True, nullable=False)
    profile_id = Column(Integer, ForeignKey("profiles.id", ondelete="SET NULL"), nullable=True)
    department = Column(String, nullable=False)
    designation = Column(String, nullable=True)
    status = Column(
        Enum("active", "inactive", "on_leave", name="faculty_status"),
        nullable=False,
        default="active",
    )
    joining_date = Column(Date, nullable=False, default=date.today)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
