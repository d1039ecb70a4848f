from sqlalchemy import Column, Integer, String, Numeric, Date, DateTime, ForeignKey, Enum
from sqlalchemy.sql import func
from collegeadmin.db.base import Base


class FeeInvoice(Base):
    __tablename__ = "fee_invoices"

    id = Column(Integer, primary_key=True, index=True)
    student_id = Column(Integer, ForeignKey("students.id", ondelete="CASCADE"), nullable=False)
    semester = Column(Integer, nullable=False)
    amount = Column(Numeric(12, 2), nullable=False)
    payment_status = Column(
        Enum("pending", "paid", "overdue", name="payment_status"),
        nullable=False,
        default="pending",
    )
    due_date = Column(Date, nullable=True)
    payment_date = Column(DateTime(timezone=True), nullable=True)
    description = Column(String, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
