# FILE: pharmacy_pos/services/sales_report.py
from __future__ import annotations

from datetime import date, datetime, time, timedelta
from decimal import Decimal
from typing import List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from pharmacy_pos.models.invoice import Invoice
from pharmacy_pos.schemas.billing import SalesSummaryOut
from pharmacy_pos.services.pricing import D, money2


def invoice_date_filters(date_from: Optional[date], date_to: Optional[date]) -> List:
    """
    Whole-day bounds on ``Invoice.date``: [date_from 00:00, date_to + 1 day 00:00).
    Either side may be open.
    """
    filters = []
    if date_from:
        filters.append(Invoice.date >= datetime.combine(date_from, time.min))
    if date_to:
        filters.append(Invoice.date < datetime.combine(date_to + timedelta(days=1), time.min))
    return filters


def sales_summary(
    db: Session,
    date_from: Optional[date] = None,
    date_to: Optional[date] = None,
) -> SalesSummaryOut:
    filters = invoice_date_filters(date_from, date_to)

    total, count = (db.query(
        func.coalesce(func.sum(Invoice.total), 0),
        func.count(Invoice.id),
    ).filter(*filters).one())

    by_method = (db.query(Invoice.payment_method, func.count(Invoice.id)).filter(
        *filters).group_by(Invoice.payment_method).all())

    total = money2(D(total))
    count = int(count or 0)
    return SalesSummaryOut(
        date_from=date_from,
        date_to=date_to,
        total_sales=total,
        total_invoices=count,
        average_sale=money2(total / count) if count else Decimal("0.00"),
        payment_method_counts={
            (m.value if hasattr(m, "value") else str(m)): int(n)
            for m, n in by_method
        },
    )
