# FILE: pharmacy_pos/services/stock_status.py
from __future__ import annotations

import enum
from datetime import date, datetime, timedelta
from typing import Optional

from pharmacy_pos.core.config import settings
from pharmacy_pos.utils.timezone import today_ist


class StockStatus(str, enum.Enum):
    EXPIRED = "Expired"
    NEAR_EXPIRY = "Near Expiry"
    OUT_OF_STOCK = "Out of Stock"
    LOW_STOCK = "Low Stock"
    IN_STOCK = "In Stock"


def _as_date(v) -> date:
    if isinstance(v, datetime):
        return v.date()
    return v


def classify(
    stock: int,
    expiry_date: date,
    reference_date: Optional[date] = None,
    *,
    low_stock_threshold: Optional[int] = None,
    near_expiry_days: Optional[int] = None,
) -> StockStatus:
    """
    Single display label for a medicine. Expiry is checked before stock:
    an expired, out-of-stock medicine is "Expired".
    """
    ref = _as_date(reference_date) if reference_date is not None else today_ist()
    expiry = _as_date(expiry_date)
    low = settings.LOW_STOCK_THRESHOLD if low_stock_threshold is None else low_stock_threshold
    window = settings.NEAR_EXPIRY_DAYS if near_expiry_days is None else near_expiry_days

    if expiry <= ref:
        return StockStatus.EXPIRED
    if expiry <= ref + timedelta(days=window):
        return StockStatus.NEAR_EXPIRY
    if stock == 0:
        return StockStatus.OUT_OF_STOCK
    if stock <= low:
        return StockStatus.LOW_STOCK
    return StockStatus.IN_STOCK


def classify_medicine(medicine, reference_date: Optional[date] = None) -> StockStatus:
    return classify(int(medicine.stock or 0), medicine.expiry_date, reference_date)
