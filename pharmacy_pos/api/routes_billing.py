# FILE: pharmacy_pos/api/routes_billing.py
from __future__ import annotations

import logging
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from pharmacy_pos.api.deps import current_user, get_db, require_role
from pharmacy_pos.api.response import ok, ok_list
from pharmacy_pos.models.user import User, UserRole
from pharmacy_pos.schemas.billing import InvoiceCreateIn
from pharmacy_pos.services.billing import create_invoice
from pharmacy_pos.services.catalog import list_available_medicines
from pharmacy_pos.services.error_logger import format_exception, log_error
from pharmacy_pos.services.errors import PersistenceError
from pharmacy_pos.services.invoice_history import get_invoice, list_invoices

logger = logging.getLogger(__name__)

router = APIRouter()


# ---------------- API: Billing catalog ----------------
@router.get("/medicines")
def available_medicines(
        db: Session = Depends(get_db),
        user: User = Depends(current_user),
):
    """In-stock, unexpired medicines for the billing counter."""
    require_role(user, UserRole.BILLER)
    return ok_list(list_available_medicines(db))


# ---------------- API: Generate invoice ----------------
@router.post("/invoices", status_code=201)
def generate_invoice(
        payload: InvoiceCreateIn,
        db: Session = Depends(get_db),
        user: User = Depends(current_user),
):
    """
    Settle a cart:
    - validates customer / payment
    - writes invoice + lines, decrements stock (one transaction)
    - returns the printable invoice
    """
    require_role(user, UserRole.BILLER)
    try:
        invoice = create_invoice(db, payload, user)
    except PersistenceError as e:
        log_error(
            db,
            description=e.message,
            error_code=e.code,
            endpoint="POST /billing/invoices",
            module=__name__,
            function="generate_invoice",
            http_status=500 if e.code != "stock_conflict" else 409,
            user_id=user.id,
            request_payload=payload.model_dump(mode="json"),
            details=e.details or None,
            stack_trace=format_exception(e),
        )
        raise
    return ok(invoice, status_code=201)


# ---------------- API: Invoice history ----------------
@router.get("/invoices")
def invoice_history(
        q: Optional[str] = Query(None, description="Invoice no / customer / phone"),
        biller_id: Optional[int] = Query(None, description="Admin only"),
        date_from: Optional[date] = Query(None, description="YYYY-MM-DD"),
        date_to: Optional[date] = Query(None, description="YYYY-MM-DD"),
        limit: int = Query(100, ge=1, le=500),
        db: Session = Depends(get_db),
        user: User = Depends(current_user),
):
    require_role(user, UserRole.BILLER)
    if not user.is_admin:
        biller_id = user.id
    if date_from and date_to and date_from > date_to:
        raise HTTPException(status_code=400, detail="date_from must not be after date_to")
    rows = list_invoices(db, biller_id=biller_id, q=q,
                         date_from=date_from, date_to=date_to, limit=limit)
    return ok_list(rows, biller_id=biller_id, date_from=date_from, date_to=date_to)


# ---------------- API: Invoice detail ----------------
@router.get("/invoices/{invoice_id}")
def invoice_detail(
        invoice_id: int,
        db: Session = Depends(get_db),
        user: User = Depends(current_user),
):
    require_role(user, UserRole.BILLER)
    inv = get_invoice(db, invoice_id)
    if inv is None or (not user.is_admin and inv.biller_id != user.id):
        raise HTTPException(status_code=404, detail="Invoice not found")
    return ok(inv)
