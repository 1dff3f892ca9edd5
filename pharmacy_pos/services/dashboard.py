# FILE: pharmacy_pos/services/dashboard.py
from __future__ import annotations

import calendar
from datetime import date, timedelta
from typing import Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from pharmacy_pos.models.medicine import Medicine
from pharmacy_pos.schemas.dashboard import DashboardOut, DashboardPeriod
from pharmacy_pos.services.alerts import build_alerts
from pharmacy_pos.services.sales_report import sales_summary
from pharmacy_pos.utils.timezone import today_ist

# ---------- Helpers: time range ----------


def _months_back(d: date, months: int) -> date:
    month_index = d.year * 12 + (d.month - 1) - months
    year, month = divmod(month_index, 12)
    month += 1
    day = min(d.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)


def period_start(period: DashboardPeriod, today: date) -> date:
    """
    First day of the sales window ending today (inclusive):
    today, the last 7 days, one month back, one year back.
    """
    if period == DashboardPeriod.TODAY:
        return today
    if period == DashboardPeriod.WEEK:
        return today - timedelta(days=7)
    if period == DashboardPeriod.YEAR:
        return _months_back(today, 12)
    return _months_back(today, 1)


# ---------- Summary ----------


def dashboard_summary(
    db: Session,
    period: DashboardPeriod = DashboardPeriod.MONTH,
    today: Optional[date] = None,
) -> DashboardOut:
    today = today or today_ist()
    start = period_start(period, today)

    alerts = build_alerts(db, today)
    sales = sales_summary(db, start, today)
    total_medicines = db.query(func.count(Medicine.id)).scalar() or 0

    return DashboardOut(
        period=period,
        date_from=start,
        date_to=today,
        total_medicines=int(total_medicines),
        low_stock_count=len(alerts.low_stock),
        out_of_stock_count=len(alerts.out_of_stock),
        near_expiry_count=len(alerts.near_expiry),
        expired_count=len(alerts.expired),
        total_sales=sales.total_sales,
        invoice_count=sales.total_invoices,
    )
