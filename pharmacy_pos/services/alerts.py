# FILE: pharmacy_pos/services/alerts.py
from __future__ import annotations

from datetime import date, timedelta
from typing import Optional

from sqlalchemy.orm import Session, joinedload

from pharmacy_pos.core.config import settings
from pharmacy_pos.models.medicine import Medicine
from pharmacy_pos.schemas.medicine import AlertMedicineOut, AlertsOut
from pharmacy_pos.utils.timezone import today_ist


def _row(m: Medicine, today: date) -> AlertMedicineOut:
    return AlertMedicineOut(
        id=m.id,
        name=m.name,
        stock=m.stock,
        expiry_date=m.expiry_date,
        days_to_expiry=(m.expiry_date - today).days,
        vendor_name=m.vendor.name if m.vendor else None,
        vendor_phone=(m.vendor.phone or None) if m.vendor else None,
    )


def build_alerts(db: Session, today: Optional[date] = None) -> AlertsOut:
    """
    Stock and expiry buckets are filled independently, so an expired
    medicine with zero stock shows up in both ``expired`` and
    ``out_of_stock``.
    """
    today = today or today_ist()
    horizon = today + timedelta(days=settings.NEAR_EXPIRY_DAYS)

    base = db.query(Medicine).options(joinedload(Medicine.vendor))

    low_rows = (base.filter(Medicine.stock <= settings.LOW_STOCK_THRESHOLD).order_by(
        Medicine.stock.asc(), Medicine.name.asc()).all())
    near_rows = (base.filter(
        Medicine.expiry_date > today,
        Medicine.expiry_date <= horizon,
    ).order_by(Medicine.expiry_date.asc(), Medicine.name.asc()).all())
    expired_rows = (base.filter(Medicine.expiry_date <= today).order_by(
        Medicine.expiry_date.asc(), Medicine.name.asc()).all())

    out = AlertsOut(
        reference_date=today,
        low_stock=[_row(m, today) for m in low_rows if m.stock > 0],
        out_of_stock=[_row(m, today) for m in low_rows if m.stock == 0],
        near_expiry=[_row(m, today) for m in near_rows],
        expired=[_row(m, today) for m in expired_rows],
    )
    out.stock_tab_count = len(out.low_stock) + len(out.out_of_stock)
    out.expiry_tab_count = len(out.near_expiry) + len(out.expired)
    return out
