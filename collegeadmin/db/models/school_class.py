# collegeadmin/db/models/school_class.py
from sqlalchemy import Column, Integer, String, ForeignKey, CheckConstraint
from collegeadmin.db.base import Base


class SchoolClass(Base):
    __tablename__ = "classes"
    __table_args__ = (
        CheckConstraint("semester BETWEEN 1 AND 8", name="ck_classes_semester"),
    )

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    semester = Column(Integer, nullable=False)  # 1..8
    section = Column(String, nullable=True)
    batch_id = Column(Integer, ForeignKey("batches.id", ondelete="SET NULL"), nullable=True)


class FacultyAssignment(Base):
    # Один и тот же преподаватель может вести предмет в классе дважды (совместное ведение)
    __tablename__ = "faculty_classes"

    id = Column(Integer, primary_key=True, index=True)
    class_id = Column(Integer, ForeignKey("classes.id", ondelete="CASCADE"), nullable=False)
    faculty_id = Column(Integer, ForeignKey("faculty.id", ondelete="CASCADE"), nullable=False)
    subject = Column(String, nullable=False)
