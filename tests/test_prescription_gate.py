"""Tests for the prescription confirmation checkpoint."""

import pytest

from pharmacy_pos.services.cart import Cart
from pharmacy_pos.services.errors import PrescriptionGateError
from pharmacy_pos.services.prescription_gate import PrescriptionGate

from conftest import make_record


@pytest.fixture
def gate():
    return PrescriptionGate(Cart())


def test_plain_medicine_goes_straight_in(gate):
    assert gate.request_add(make_record(), 2) is None
    assert gate.cart.lines[0].quantity == 2
    assert gate.cart.lines[0].prescription_checked is False


def test_prescription_medicine_is_held(gate):
    pending = gate.request_add(make_record(prescription_required=True), 2)
    assert pending is not None
    assert gate.cart.is_empty


def test_confirm_commits_the_add(gate):
    pending = gate.request_add(make_record(prescription_required=True), 2)
    line = gate.confirm(pending)

    assert line.quantity == 2
    assert line.prescription_checked is True
    assert len(gate.cart) == 1


def test_decline_discards(gate):
    pending = gate.request_add(make_record(prescription_required=True), 2)
    gate.decline(pending)
    assert gate.cart.is_empty


def test_pending_add_resolves_once(gate):
    pending = gate.request_add(make_record(prescription_required=True), 1)
    gate.confirm(pending)
    with pytest.raises(PrescriptionGateError):
        gate.confirm(pending)
    with pytest.raises(PrescriptionGateError):
        gate.decline(pending)
    assert gate.cart.lines[0].quantity == 1


def test_every_add_attempt_needs_confirmation(gate):
    med = make_record(prescription_required=True)
    gate.confirm(gate.request_add(med, 1))

    # second add of the same medicine is held again
    assert gate.request_add(med, 1) is not None
    assert gate.cart.lines[0].quantity == 1


def test_add_with_confirmation_asks_only_for_prescription_items(gate):
    asked = []

    def confirm(medicine):
        asked.append(medicine.id)
        return True

    gate.add_with_confirmation(make_record(id=1), 1, confirm)
    gate.add_with_confirmation(make_record(id=2, name="Azithromycin",
                                           prescription_required=True), 1, confirm)

    assert asked == [2]
    assert len(gate.cart) == 2


def test_add_with_confirmation_declined(gate):
    result = gate.add_with_confirmation(make_record(prescription_required=True), 1,
                                        lambda m: False)
    assert result is None
    assert gate.cart.is_empty
