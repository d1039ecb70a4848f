# collegeadmin/core/roles.py
from enum import Enum
from typing import Dict, FrozenSet


class Role(str, Enum):
    ADMIN = "admin"
    FACULTY = "faculty"
    STUDENT = "student"


class Capability(str, Enum):
    VIEW_DASHBOARD = "view_dashboard"
    MANAGE_STUDENTS = "manage_students"
    MANAGE_FACULTY = "manage_faculty"
    MANAGE_ACADEMICS = "manage_academics"  # батчи, классы, курсы, предметы
    MANAGE_FEES = "manage_fees"
    MANAGE_CIRCULARS = "manage_circulars"
    VIEW_REPORTS = "view_reports"
    MARK_ATTENDANCE = "mark_attendance"
    UPLOAD_RESULTS = "upload_results"
    VIEW_OWN_CLASSES = "view_own_classes"
    VIEW_OWN_RECORDS = "view_own_records"
    READ_CIRCULARS = "read_circulars"


CAPABILITIES: Dict[Role, FrozenSet[Capability]] = {
    Role.ADMIN: frozenset({
        Capability.VIEW_DASHBOARD,
        Capability.MANAGE_STUDENTS,
        Capability.MANAGE_FACULTY,
        Capability.MANAGE_ACADEMICS,
        Capability.MANAGE_FEES,
        Capability.MANAGE_CIRCULARS,
        Capability.VIEW_REPORTS,
        Capability.READ_CIRCULARS,
    }),
    Role.FACULTY: frozenset({
        Capability.MARK_ATTENDANCE,
        Capability.UPLOAD_RESULTS,
        Capability.VIEW_OWN_CLASSES,
        Capability.READ_CIRCULARS,
    }),
    Role.STUDENT: frozenset({
        Capability.VIEW_OWN_RECORDS,
        Capability.READ_CIRCULARS,
    }),
}


def has_capability(role: Role, capability: Capability) -> bool:
    return capability in CAPABILITIES.get(role, frozenset())
