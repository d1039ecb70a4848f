# collegeadmin/crud/fee.py
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from sqlalchemy.orm import Session

from collegeadmin.crud.base import create, get_or_404, update
from collegeadmin.db.models import FeeInvoice, Student
from collegeadmin.schemas.fee import InvoiceCreate, InvoiceUpdate


def _stamp_payment(changes: Dict[str, Any], current: Optional[FeeInvoice] = None) -> Dict[str, Any]:
    if "payment_status" not in changes:
        return changes
    if changes["payment_status"] == "paid":
        if current is None or current.payment_status != "paid" or current.payment_date is None:
            changes["payment_date"] = datetime.now(timezone.utc)
    else:
        changes["payment_date"] = None
    return changes


def create_invoice(db: Session, data: InvoiceCreate) -> FeeInvoice:
    get_or_404(db, Student, data.student_id)
    return create(db, FeeInvoice, _stamp_payment(data.model_dump()))


def update_invoice(db: Session, invoice: FeeInvoice, data: InvoiceUpdate) -> FeeInvoice:
    changes = _stamp_payment(data.model_dump(exclude_unset=True), invoice)
    return update(db, invoice, changes)
