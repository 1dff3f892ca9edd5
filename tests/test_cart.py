"""Tests for the in-memory cart."""

from decimal import Decimal

import pytest

from pharmacy_pos.services.cart import Cart
from pharmacy_pos.services.errors import PrescriptionRequiredError, ValidationError

from conftest import make_record


def test_new_cart_is_empty():
    cart = Cart()
    assert cart.is_empty
    assert cart.totals().grand_total == Decimal("0")


def test_add_captures_pricing():
    cart = Cart()
    line = cart.add_item(make_record(), 2)

    assert not cart.is_empty
    assert line.unit_price == Decimal("100")
    assert line.discount == Decimal("10")
    assert line.tax == Decimal("12")
    assert line.subtotal == Decimal("180")
    assert line.tax_amount == Decimal("21.6")


def test_same_medicine_merges_into_one_line():
    cart = Cart()
    med = make_record(stock=10)
    cart.add_item(med, 3)
    cart.add_item(med, 4)

    assert len(cart) == 1
    assert cart.lines[0].quantity == 7
    assert cart.lines[0].subtotal == Decimal("630")


def test_add_above_stock_leaves_cart_unchanged():
    cart = Cart()
    cart.add_item(make_record(id=2, name="Cetirizine"), 1)
    before = [(l.medicine_id, l.quantity) for l in cart]

    with pytest.raises(ValidationError):
        cart.add_item(make_record(stock=5), 6)

    assert [(l.medicine_id, l.quantity) for l in cart] == before


def test_merge_above_stock_is_rejected_and_line_kept():
    cart = Cart()
    med = make_record(stock=5)
    cart.add_item(med, 4)

    with pytest.raises(ValidationError) as exc:
        cart.add_item(med, 2)

    assert exc.value.details["requested"] == 6
    assert cart.lines[0].quantity == 4


def test_merge_is_checked_against_current_stock():
    cart = Cart()
    cart.add_item(make_record(stock=10), 4)

    with pytest.raises(ValidationError):
        cart.add_item(make_record(stock=5), 2)


@pytest.mark.parametrize("qty", [0, -1])
def test_non_positive_quantity_rejected(qty):
    cart = Cart()
    with pytest.raises(ValidationError):
        cart.add_item(make_record(), qty)
    assert cart.is_empty


def test_prescription_medicine_needs_confirmation():
    cart = Cart()
    with pytest.raises(PrescriptionRequiredError):
        cart.add_item(make_record(prescription_required=True), 1)
    assert cart.is_empty


def test_totals_sum_all_lines():
    cart = Cart()
    cart.add_item(make_record(), 2)  # 180 + 21.6
    cart.add_item(make_record(id=2, name="ORS", price=Decimal("20"), discount=Decimal("0"),
                              tax=Decimal("5")), 3)  # 60 + 3

    totals = cart.totals()
    assert totals.subtotal == Decimal("240")
    assert totals.tax_total == Decimal("24.6")
    assert totals.grand_total == Decimal("264.6")


def test_remove_and_clear():
    cart = Cart()
    cart.add_item(make_record(), 1)
    cart.add_item(make_record(id=2, name="ORS"), 1)

    cart.remove_item(0)
    assert [l.medicine_id for l in cart] == [2]

    cart.remove_item(0)
    assert cart.is_empty

    cart.add_item(make_record(), 1)
    cart.clear()
    assert cart.is_empty
