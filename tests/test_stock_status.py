"""Tests for the stock / expiry status label."""

from datetime import date, timedelta
from types import SimpleNamespace

import pytest

from pharmacy_pos.services.stock_status import StockStatus, classify, classify_medicine

REF = date(2026, 3, 14)


def test_expired_wins_over_out_of_stock():
    assert classify(0, REF - timedelta(days=1), REF) == StockStatus.EXPIRED


def test_expiring_today_is_expired():
    assert classify(500, REF, REF) == StockStatus.EXPIRED


def test_near_expiry_wins_over_low_stock():
    assert classify(3, REF + timedelta(days=5), REF) == StockStatus.NEAR_EXPIRY


def test_near_expiry_window_is_inclusive():
    assert classify(500, REF + timedelta(days=30), REF) == StockStatus.NEAR_EXPIRY
    assert classify(500, REF + timedelta(days=31), REF) == StockStatus.IN_STOCK


def test_out_of_stock():
    assert classify(0, REF + timedelta(days=90), REF) == StockStatus.OUT_OF_STOCK


def test_low_stock_threshold_is_inclusive():
    far = REF + timedelta(days=365)
    assert classify(1, far, REF) == StockStatus.LOW_STOCK
    assert classify(50, far, REF) == StockStatus.LOW_STOCK
    assert classify(51, far, REF) == StockStatus.IN_STOCK


@pytest.mark.parametrize("stock", [0, 1, 49, 50, 51, 1000])
@pytest.mark.parametrize("offset", [-365, -1, 0, 1, 29, 30, 31, 400])
def test_classification_is_total(stock, offset):
    status = classify(stock, REF + timedelta(days=offset), REF)
    assert isinstance(status, StockStatus)
    if offset <= 0:
        assert status == StockStatus.EXPIRED
    elif offset <= 30:
        assert status == StockStatus.NEAR_EXPIRY


def test_labels_match_display_text():
    assert [s.value for s in StockStatus] == [
        "Expired", "Near Expiry", "Out of Stock", "Low Stock", "In Stock",
    ]


def test_classify_medicine_reads_attributes():
    med = SimpleNamespace(stock=None, expiry_date=REF + timedelta(days=100))
    assert classify_medicine(med, REF) == StockStatus.OUT_OF_STOCK
