# FILE: pharmacy_pos/services/settlement.py
"""
Invoice settlement: cart -> persisted invoice + stock decrement.

Preconditions are checked before anything is written. Writes happen in a
fixed order (header, items, stock) inside the store's transaction; if the
store cannot roll back, a failure after the header is reported as
``PartialSettlementError`` so the orphaned invoice can be reconciled.
"""
from __future__ import annotations

import logging
import re
from datetime import datetime
from decimal import Decimal
from typing import Any, Callable, Dict, List, Optional

from pharmacy_pos.models.invoice import PaymentMethod
from pharmacy_pos.schemas.billing import (
    CustomerIn,
    InvoiceLineOut,
    PaymentIn,
    SettledInvoice,
)
from pharmacy_pos.services.cart import Cart, CartTotals
from pharmacy_pos.services.errors import (
    EmptyCartError,
    InsufficientAmountError,
    InvalidPhoneError,
    MissingCustomerNameError,
    PartialSettlementError,
    PersistenceError,
)
from pharmacy_pos.services.invoice_numbers import next_invoice_number
from pharmacy_pos.services.pricing import D, money2
from pharmacy_pos.services.settlement_store import SettlementStore
from pharmacy_pos.utils.timezone import now_ist

logger = logging.getLogger(__name__)

PHONE_RE = re.compile(r"[0-9]{10,12}")


def user_display_name(user) -> str:
    if user is None:
        return "System"
    for attr in ("username", "name", "email"):
        val = getattr(user, attr, None)
        if val:
            return val
    return f"User #{getattr(user, 'id', 'unknown')}"


def _clean_phone(phone: Optional[str]) -> Optional[str]:
    """Only ``None`` and ``""`` mean no phone; anything else is checked as-is."""
    return phone or None


def validate_phone(phone: Optional[str]) -> bool:
    phone = _clean_phone(phone)
    return phone is None or PHONE_RE.fullmatch(phone) is not None


class SettlementEngine:

    def __init__(
        self,
        store: SettlementStore,
        *,
        clock: Callable[[], datetime] = now_ist,
    ) -> None:
        self.store = store
        self.clock = clock

    # ---------- preconditions ----------

    def check(self, cart: Cart, customer: CustomerIn, payment: PaymentIn) -> CartTotals:
        if cart.is_empty:
            raise EmptyCartError("Cart is empty")

        if not (customer.name or "").strip():
            raise MissingCustomerNameError("Customer name is required")

        if not validate_phone(customer.phone):
            raise InvalidPhoneError(
                "Phone number must be 10-12 digits with no other characters",
                details={"phone": customer.phone},
            )

        totals = cart.totals()
        if payment.method == PaymentMethod.CASH:
            received = D(payment.amount_received)
            due = money2(totals.grand_total)
            if received < due:
                raise InsufficientAmountError(
                    "Amount received cannot be less than total amount",
                    details={"amount_received": str(received), "total": str(due)},
                )
        return totals

    # ---------- settle ----------

    def settle(self, cart: Cart, customer: CustomerIn, payment: PaymentIn, biller) -> SettledInvoice:
        totals = self.check(cart, customer, payment)

        now = self.clock()
        total = money2(totals.grand_total)
        if payment.method == PaymentMethod.CASH:
            amount_received = money2(payment.amount_received)
            change_returned: Optional[Decimal] = amount_received - total
        else:
            amount_received = total
            change_returned = None

        header: Dict[str, Any] = {
            "biller_id": biller.id,
            "customer_name": customer.name.strip(),
            "customer_phone": _clean_phone(customer.phone),
            "subtotal": money2(totals.subtotal),
            "tax_total": money2(totals.tax_total),
            "total": total,
            "payment_method": payment.method,
            "amount_received": amount_received,
            "change_returned": change_returned,
            "date": now,
        }

        completed: List[str] = []
        invoice_id: Optional[int] = None
        step = "invoice_number"
        try:
            header["invoice_number"] = next_invoice_number(
                self.store.invoice_number_exists, now)

            step = "header"
            invoice_id = self.store.insert_invoice(header)
            completed.append(step)

            step = "items"
            rows = [{
                "invoice_id": invoice_id,
                "medicine_id": line.medicine_id,
                "name": line.name,
                "quantity": line.quantity,
                "unit_price": money2(line.unit_price),
                "tax": line.tax,
                "discount": line.discount,
                "subtotal": money2(line.subtotal),
                "prescription_checked": line.prescription_checked,
            } for line in cart]
            self.store.insert_items(rows)
            completed.append(step)

            step = "stock"
            for line in cart:
                self.store.decrement_stock(line.medicine_id, line.quantity)
            completed.append(step)

            step = "commit"
            self.store.commit()
        except PersistenceError as e:
            if e.step is None:
                e.step = step
            self._fail(e, header, invoice_id, completed)
            raise
        except Exception as e:
            wrapped = PersistenceError(f"Settlement failed at {step}: {e}", step=step)
            self._fail(wrapped, header, invoice_id, completed)
            raise wrapped from e

        logger.info(
            "Invoice %s settled: biller_id=%s lines=%s total=%s method=%s",
            header["invoice_number"], biller.id, len(rows), total,
            payment.method.value)

        result = SettledInvoice(
            id=invoice_id,
            biller_name=user_display_name(biller),
            items=[InvoiceLineOut(**{k: v for k, v in row.items() if k != "invoice_id"})
                   for row in rows],
            **header,
        )
        cart.clear()
        return result

    def _fail(
        self,
        exc: PersistenceError,
        header: Dict[str, Any],
        invoice_id: Optional[int],
        completed: List[str],
    ) -> None:
        self.store.rollback()
        number = header.get("invoice_number")
        if "header" in completed and not self.store.transactional:
            logger.error(
                "Partial settlement for invoice %s (id=%s): completed=%s failed=%s",
                number, invoice_id, completed, exc.step)
            raise PartialSettlementError(
                f"Invoice {number} was saved but {exc.step or 'a later step'} failed; "
                "manual reconciliation needed.",
                invoice_number=number,
                invoice_id=invoice_id,
                step=exc.step or "unknown",
                completed_steps=completed,
            ) from exc
        logger.exception("Settlement failed at step=%s; rolled back", exc.step)
