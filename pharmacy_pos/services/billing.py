# FILE: pharmacy_pos/services/billing.py
from __future__ import annotations

import logging
from datetime import date
from typing import List, Optional

from sqlalchemy.orm import Session

from pharmacy_pos.schemas.billing import CartItemIn, InvoiceCreateIn, SettledInvoice
from pharmacy_pos.services.cart import Cart
from pharmacy_pos.services.catalog import get_available_medicine
from pharmacy_pos.services.errors import MedicineUnavailableError, PrescriptionRequiredError
from pharmacy_pos.services.prescription_gate import PrescriptionGate
from pharmacy_pos.services.settlement import SettlementEngine
from pharmacy_pos.services.settlement_store import SqlAlchemySettlementStore

logger = logging.getLogger(__name__)


def build_cart(db: Session, items: List[CartItemIn], today: Optional[date] = None) -> Cart:
    """
    Replays the counter's add sequence against the live catalog.
    ``prescription_checked`` on an item is the operator's confirmation for
    that add; without it a prescription medicine is refused.
    """
    cart = Cart()
    gate = PrescriptionGate(cart)
    for item in items:
        medicine = get_available_medicine(db, item.medicine_id, today)
        if medicine is None:
            raise MedicineUnavailableError(
                f"Medicine {item.medicine_id} not found or not available for sale",
                details={"medicine_id": item.medicine_id},
            )
        pending = gate.request_add(medicine, item.quantity)
        if pending is None:
            continue
        if not item.prescription_checked:
            gate.decline(pending)
            raise PrescriptionRequiredError(
                f"{medicine.name} requires a prescription check",
                details={"medicine_id": medicine.id},
            )
        gate.confirm(pending)
    return cart


def create_invoice(db: Session, payload: InvoiceCreateIn, biller) -> SettledInvoice:
    cart = build_cart(db, payload.items)
    engine = SettlementEngine(SqlAlchemySettlementStore(db))
    return engine.settle(cart, payload.customer, payload.payment, biller)
