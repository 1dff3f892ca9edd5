# FILE: pharmacy_pos/services/cart.py
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from decimal import Decimal
from typing import List, Optional

from pharmacy_pos.services.errors import PrescriptionRequiredError, ValidationError
from pharmacy_pos.services.pricing import D, line_subtotal, line_tax_amount

logger = logging.getLogger(__name__)

ZERO = Decimal("0")


@dataclass
class CartLine:
    medicine_id: int
    name: str
    quantity: int
    unit_price: Decimal
    discount: Decimal
    tax: Decimal
    available_stock: int
    prescription_checked: bool = False

    @property
    def subtotal(self) -> Decimal:
        return line_subtotal(self.unit_price, self.discount, self.quantity)

    @property
    def tax_amount(self) -> Decimal:
        return line_tax_amount(self.subtotal, self.tax)


@dataclass(frozen=True)
class CartTotals:
    subtotal: Decimal
    tax_total: Decimal
    grand_total: Decimal


@dataclass
class Cart:
    """
    In-progress, unsaved invoice lines for one billing session.

    Prices, discount and tax are captured from the medicine when a line is
    first created; a later add of the same medicine only changes quantity.
    """
    lines: List[CartLine] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.lines)

    def __iter__(self):
        return iter(self.lines)

    @property
    def is_empty(self) -> bool:
        return not self.lines

    def find_line(self, medicine_id: int) -> Optional[CartLine]:
        for line in self.lines:
            if line.medicine_id == medicine_id:
                return line
        return None

    def add_item(self, medicine, quantity: int, *, prescription_confirmed: bool = False) -> CartLine:
        if getattr(medicine, "prescription_required", False) and not prescription_confirmed:
            raise PrescriptionRequiredError(
                f"{medicine.name} requires a prescription check before it can be added.",
                details={"medicine_id": medicine.id},
            )

        if quantity is None or int(quantity) <= 0:
            raise ValidationError("Quantity must be greater than zero.",
                                  details={"medicine_id": medicine.id, "quantity": quantity})
        quantity = int(quantity)
        stock = int(medicine.stock or 0)

        if quantity > stock:
            raise ValidationError(
                f"Not enough stock. Available: {stock}",
                details={"medicine_id": medicine.id, "requested": quantity, "available": stock},
            )

        existing = self.find_line(medicine.id)
        if existing is not None:
            merged = existing.quantity + quantity
            if merged > stock:
                raise ValidationError(
                    f"Not enough stock. Available: {stock}",
                    details={"medicine_id": medicine.id, "requested": merged, "available": stock},
                )
            existing.quantity = merged
            existing.available_stock = stock
            existing.prescription_checked = existing.prescription_checked or prescription_confirmed
            logger.debug("Merged %s into cart line, qty=%s", medicine.name, merged)
            return existing

        line = CartLine(
            medicine_id=medicine.id,
            name=medicine.name,
            quantity=quantity,
            unit_price=D(medicine.price),
            discount=D(medicine.discount or 0),
            tax=D(medicine.tax or 0),
            available_stock=stock,
            prescription_checked=bool(prescription_confirmed),
        )
        self.lines.append(line)
        return line

    def remove_item(self, index: int) -> None:
        del self.lines[index]

    def totals(self) -> CartTotals:
        subtotal = sum((line.subtotal for line in self.lines), ZERO)
        tax_total = sum((line.tax_amount for line in self.lines), ZERO)
        return CartTotals(
            subtotal=subtotal,
            tax_total=tax_total,
            grand_total=subtotal + tax_total,
        )

    def clear(self) -> None:
        self.lines.clear()
