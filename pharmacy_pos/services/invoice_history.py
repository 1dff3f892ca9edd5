# FILE: pharmacy_pos/services/invoice_history.py
from __future__ import annotations

from datetime import date
from typing import List, Optional

from sqlalchemy import or_
from sqlalchemy.orm import Session, joinedload, selectinload

from pharmacy_pos.models.invoice import Invoice
from pharmacy_pos.schemas.billing import (
    InvoiceLineOut,
    InvoiceSummaryOut,
    SettledInvoice,
)
from pharmacy_pos.services.sales_report import invoice_date_filters
from pharmacy_pos.services.settlement import user_display_name


def _summary(inv: Invoice) -> InvoiceSummaryOut:
    out = InvoiceSummaryOut.model_validate(inv)
    out.biller_name = user_display_name(inv.biller) if inv.biller else None
    return out


def list_invoices(
    db: Session,
    *,
    biller_id: Optional[int] = None,
    q: Optional[str] = None,
    date_from: Optional[date] = None,
    date_to: Optional[date] = None,
    limit: int = 100,
) -> List[InvoiceSummaryOut]:
    query = db.query(Invoice).options(joinedload(Invoice.biller))
    query = query.filter(*invoice_date_filters(date_from, date_to))
    if biller_id is not None:
        query = query.filter(Invoice.biller_id == biller_id)
    if q:
        ql = f"%{q.strip()}%"
        query = query.filter(
            or_(
                Invoice.invoice_number.ilike(ql),
                Invoice.customer_name.ilike(ql),
                Invoice.customer_phone.ilike(ql),
            ))
    rows = query.order_by(Invoice.date.desc(), Invoice.id.desc()).limit(limit).all()
    return [_summary(inv) for inv in rows]


def get_invoice(db: Session, invoice_id: int) -> Optional[SettledInvoice]:
    inv = (db.query(Invoice).options(
        joinedload(Invoice.biller),
        selectinload(Invoice.items),
    ).filter(Invoice.id == invoice_id).first())
    if inv is None:
        return None
    head = _summary(inv)
    return SettledInvoice(
        **head.model_dump(),
        items=[InvoiceLineOut.model_validate(it) for it in inv.items],
    )
