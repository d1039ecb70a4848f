from sqlalchemy import Column, Integer, String, ForeignKey
from collegeadmin.db.base import Base


class Subject(Base):
    __tablename__ = "subjects"

    id = Column(Integer, primary_key=True, index=True)
    code = Column(String, nullable=False)
    name = Column(String, nullable=False)
    credits = Column(Integer, nullable=False, default=3)
    class_id = Column(Integer, ForeignKey("classes.id", ondelete="SET NULL"), nullable=True)


class Course(Base):
    __tablename__ = "courses"

    id = Column(Integer, primary_key=True, index=True)
    course_code = Column(String, unique=True, index=True, nullable=False)
    course_name = Column(String, nullable=False)
    credits = Column(Integer, nullable=False, default=3)
    program = Column(String, nullable=True)
    assigned_faculty_id = Column(Integer, ForeignKey("faculty.id", ondelete="SET NULL"), nullable=True)
    class_id = Column(Integer, ForeignKey("classes.id", ondelete="SET NULL"), nullable=True)
