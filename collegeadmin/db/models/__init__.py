from collegeadmin.db.base import Base
from collegeadmin.db.models.profile import Profile
from collegeadmin.db.models.student import Student
from collegeadmin.db.models.faculty import Faculty
from collegeadmin.db.models.batch import Batch
from collegeadmin.db.models.school_class import SchoolClass, FacultyAssignment
from collegeadmin.db.models.subject import Subject, Course
from collegeadmin.db.models.attendance import Attendance
from collegeadmin.db.models.result import Result
from collegeadmin.db.models.fee_invoice import FeeInvoice
from collegeadmin.db.models.circular import Circular

__all__ = [
    "Base",
    "Profile",
    "Student",
    "Faculty",
    "Batch",
    "SchoolClass",
    "FacultyAssignment",
    "Subject",
    "Course",
    "Attendance",
    "Result",
    "FeeInvoice",
    "Circular",
]
