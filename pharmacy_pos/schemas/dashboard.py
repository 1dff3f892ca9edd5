# FILE: pharmacy_pos/schemas/dashboard.py
from __future__ import annotations

import enum
from datetime import date
from decimal import Decimal
from pydantic import BaseModel


class DashboardPeriod(str, enum.Enum):
    TODAY = "today"
    WEEK = "week"
    MONTH = "month"
    YEAR = "year"


class DashboardOut(BaseModel):
    period: DashboardPeriod
    date_from: date
    date_to: date

    total_medicines: int = 0
    low_stock_count: int = 0
    out_of_stock_count: int = 0
    near_expiry_count: int = 0
    expired_count: int = 0

    total_sales: Decimal = Decimal("0.00")
    invoice_count: int = 0
