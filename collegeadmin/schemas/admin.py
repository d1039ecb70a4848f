from decimal import Decimal

from pydantic import BaseModel


class DashboardCounts(BaseModel):
    total_students: int
    total_faculty: int
    total_classes: int
    total_batches: int


class ReportStats(BaseModel):
    total_students: int
    total_faculty: int
    total_courses: int
    attendance_rate: int
    fee_collection: Decimal
    pending_fees: Decimal
