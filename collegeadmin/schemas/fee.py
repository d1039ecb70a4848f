from datetime import date, datetime
from decimal import Decimal
from typing import Literal, Optional

from pydantic import BaseModel, Field

PaymentStatus = Literal["pending", "paid", "overdue"]


class InvoiceCreate(BaseModel):
    student_id: int
    semester: int = Field(ge=1, le=8)
    amount: Decimal = Field(ge=0)
    payment_status: PaymentStatus = "pending"
    due_date: Optional[date] = None
    description: Optional[str] = None


class InvoiceUpdate(BaseModel):
    semester: Optional[int] = Field(default=None, ge=1, le=8)
    amount: Optional[Decimal] = Field(default=None, ge=0)
    payment_status: Optional[PaymentStatus] = None
    due_date: Optional[date] = None
    description: Optional[str] = None


class InvoiceOut(BaseModel):
    id: int
    student_id: int
    semester: int
    amount: Decimal
    payment_status: str
    due_date: Optional[date] = None
    payment_date: Optional[datetime] = None
    description: Optional[str] = None

    class Config:
        from_attributes = True


class FeeTotalsOut(BaseModel):
    paid_total: Decimal
    pending_total: Decimal
