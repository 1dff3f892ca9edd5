"""Tests for line pricing arithmetic."""

from decimal import Decimal

import pytest

from pharmacy_pos.services.pricing import (
    discounted_unit_price,
    line_subtotal,
    line_tax_amount,
    money2,
)


@pytest.mark.parametrize("price", ["0", "0.01", "19.99", "100", "2500.75"])
@pytest.mark.parametrize("discount", ["0", "2.5", "10", "50", "99.99", "100"])
def test_discounted_price_never_exceeds_price(price, discount):
    assert discounted_unit_price(Decimal(price), Decimal(discount)) <= Decimal(price)


@pytest.mark.parametrize("price", ["0", "12.34", "100"])
def test_zero_discount_keeps_price(price):
    assert discounted_unit_price(Decimal(price), Decimal("0")) == Decimal(price)


def test_full_discount_is_free():
    assert discounted_unit_price(Decimal("80"), Decimal("100")) == Decimal("0")


def test_line_subtotal_uses_discounted_price():
    assert line_subtotal(Decimal("100"), Decimal("10"), 2) == Decimal("180")


def test_line_tax_applies_to_discounted_subtotal():
    assert line_tax_amount(Decimal("180"), Decimal("12")) == Decimal("21.6")


def test_accepts_plain_numbers():
    assert line_subtotal(100, 10, 2) == Decimal("180")
    assert discounted_unit_price("45.50", None) == Decimal("45.50")


def test_out_of_range_discount_is_not_clamped():
    assert discounted_unit_price(Decimal("100"), Decimal("120")) == Decimal("-20")


def test_money2_rounds_half_up():
    assert money2(Decimal("10.005")) == Decimal("10.01")
    assert money2(Decimal("10.004")) == Decimal("10.00")
    assert money2(None) == Decimal("0.00")
