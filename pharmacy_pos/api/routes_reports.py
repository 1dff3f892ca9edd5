# FILE: pharmacy_pos/api/routes_reports.py
from __future__ import annotations

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from pharmacy_pos.api.deps import current_user, get_db, require_role
from pharmacy_pos.api.response import ok
from pharmacy_pos.models.user import User
from pharmacy_pos.schemas.dashboard import DashboardPeriod
from pharmacy_pos.services.dashboard import dashboard_summary
from pharmacy_pos.services.sales_report import sales_summary

router = APIRouter()


@router.get("/sales")
def sales_report(
        date_from: Optional[date] = Query(None, description="YYYY-MM-DD"),
        date_to: Optional[date] = Query(None, description="YYYY-MM-DD"),
        db: Session = Depends(get_db),
        user: User = Depends(current_user),
):
    require_role(user)
    if date_from and date_to and date_from > date_to:
        raise HTTPException(status_code=400, detail="date_from must not be after date_to")
    return ok(sales_summary(db, date_from, date_to))


@router.get("/dashboard")
def dashboard(
        period: DashboardPeriod = Query(DashboardPeriod.MONTH),
        db: Session = Depends(get_db),
        user: User = Depends(current_user),
):
    """Medicine counts by status plus sales over today / week / month / year."""
    require_role(user)
    return ok(dashboard_summary(db, period))
