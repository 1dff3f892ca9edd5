# FILE: pharmacy_pos/services/pricing.py
from __future__ import annotations

from decimal import Decimal, ROUND_HALF_UP

HUNDRED = Decimal("100")
MONEY = Decimal("0.01")


def D(x) -> Decimal:
    if isinstance(x, Decimal):
        return x
    return Decimal(str(x or 0))


def money2(x) -> Decimal:
    return D(x).quantize(MONEY, rounding=ROUND_HALF_UP)


def discounted_unit_price(price, discount_pct) -> Decimal:
    # range of discount_pct is the caller's responsibility
    return D(price) * (Decimal("1") - D(discount_pct) / HUNDRED)


def line_subtotal(price, discount_pct, quantity) -> Decimal:
    return discounted_unit_price(price, discount_pct) * D(quantity)


def line_tax_amount(subtotal, tax_pct) -> Decimal:
    return D(subtotal) * (D(tax_pct) / HUNDRED)
