# collegeadmin/api/fees.py
from dataclasses import asdict

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from collegeadmin.api.deps import get_db, require_capability
from collegeadmin.api.encoding import encode_payload
from collegeadmin.core.aggregates import fee_totals
from collegeadmin.core.relations import resolve
from collegeadmin.core.roles import Capability
from collegeadmin.crud import base as crud
from collegeadmin.crud import fee as crud_fee
from collegeadmin.db.models import FeeInvoice, Profile
from collegeadmin.schemas.fee import FeeTotalsOut, InvoiceCreate, InvoiceOut, InvoiceUpdate

router = APIRouter()

manage_fees = require_capability(Capability.MANAGE_FEES)


@router.get("/")
def list_invoices(
    payment_status: str | None = None,
    db: Session = Depends(get_db),
    current_user: Profile = Depends(manage_fees),
):
    invoices = crud.list_all(
        db, FeeInvoice, FeeInvoice.created_at.desc(), FeeInvoice.id.desc(), payment_status=payment_status
    )
    payload = resolve(db, FeeInvoice, invoices, ["student.profile"]).as_payload()
    payload.update(FeeTotalsOut(**asdict(fee_totals(invoices))).model_dump())
    return encode_payload(payload)


@router.post("/", response_model=InvoiceOut, status_code=201)
def create_invoice(
    invoice_in: InvoiceCreate,
    db: Session = Depends(get_db),
    current_user: Profile = Depends(manage_fees),
):
    return crud_fee.create_invoice(db, invoice_in)


@router.put("/{invoice_id}", response_model=InvoiceOut)
def update_invoice(
    invoice_id: int,
    invoice_update: InvoiceUpdate,
    db: Session = Depends(get_db),
    current_user: Profile = Depends(manage_fees),
):
    invoice = crud.get_or_404(db, FeeInvoice, invoice_id)
    return crud_fee.update_invoice(db, invoice, invoice_update)


@router.delete("/{invoice_id}")
def delete_invoice(
    invoice_id: int,
    db: Session = Depends(get_db),
    current_user: Profile = Depends(manage_fees),
):
    crud.delete(db, crud.get_or_404(db, FeeInvoice, invoice_id))
    return {"message": "Invoice deleted"}
