# FILE: pharmacy_pos/services/catalog.py
from __future__ import annotations

from datetime import date
from typing import List, Optional

from sqlalchemy.orm import Session, joinedload

from pharmacy_pos.models.medicine import Medicine
from pharmacy_pos.models.vendor import Vendor
from pharmacy_pos.schemas.medicine import MedicineRecord, MedicineStatusOut
from pharmacy_pos.services.pricing import discounted_unit_price
from pharmacy_pos.services.stock_status import classify_medicine
from pharmacy_pos.utils.timezone import today_ist


def list_available_medicines(db: Session, today: Optional[date] = None) -> List[MedicineRecord]:
    """
    Billing catalog: in stock and expiring strictly after today.
    """
    today = today or today_ist()
    rows = (db.query(Medicine).filter(
        Medicine.stock > 0,
        Medicine.expiry_date > today,
    ).order_by(Medicine.name.asc(), Medicine.id.asc()).all())
    return [MedicineRecord.model_validate(m) for m in rows]


def get_medicine_record(db: Session, medicine_id: int) -> Optional[MedicineRecord]:
    m = db.get(Medicine, medicine_id)
    if m is None:
        return None
    return MedicineRecord.model_validate(m)


def get_available_medicine(
    db: Session,
    medicine_id: int,
    today: Optional[date] = None,
) -> Optional[MedicineRecord]:
    rec = get_medicine_record(db, medicine_id)
    today = today or today_ist()
    if rec is None or rec.stock <= 0 or rec.expiry_date <= today:
        return None
    return rec


def list_medicines_with_status(
    db: Session,
    today: Optional[date] = None,
    q: Optional[str] = None,
    vendor: Optional[str] = None,
) -> List[MedicineStatusOut]:
    """
    Every medicine with its status label. ``q`` matches the medicine name,
    ``vendor`` the supplier name; both are case-insensitive substrings.
    """
    today = today or today_ist()
    query = db.query(Medicine).options(joinedload(Medicine.vendor))
    if q:
        query = query.filter(Medicine.name.ilike(f"%{q.strip()}%"))
    if vendor:
        query = query.join(Medicine.vendor).filter(Vendor.name.ilike(f"%{vendor.strip()}%"))
    out: List[MedicineStatusOut] = []
    for m in query.order_by(Medicine.name.asc()).all():
        out.append(
            MedicineStatusOut(
                id=m.id,
                name=m.name,
                stock=m.stock,
                expiry_date=m.expiry_date,
                price=m.price,
                discount=m.discount,
                price_after_discount=discounted_unit_price(m.price, m.discount),
                prescription_required=bool(m.prescription_required),
                vendor_name=m.vendor.name if m.vendor else None,
                status=classify_medicine(m, today),
            ))
    return out
