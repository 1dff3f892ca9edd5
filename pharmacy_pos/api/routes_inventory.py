# FILE: pharmacy_pos/api/routes_inventory.py
from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from pharmacy_pos.api.deps import current_user, get_db, require_role
from pharmacy_pos.api.response import ok, ok_list
from pharmacy_pos.models.user import User
from pharmacy_pos.services.alerts import build_alerts
from pharmacy_pos.services.catalog import list_medicines_with_status

router = APIRouter()


@router.get("/medicines")
def medicines_with_status(
        q: Optional[str] = Query(None, description="Search by name"),
        vendor: Optional[str] = Query(None, description="Search by vendor name"),
        db: Session = Depends(get_db),
        user: User = Depends(current_user),
):
    require_role(user)
    return ok_list(list_medicines_with_status(db, q=q, vendor=vendor))


@router.get("/alerts")
def stock_alerts(
        db: Session = Depends(get_db),
        user: User = Depends(current_user),
):
    """Low stock / out of stock / near expiry / expired buckets."""
    require_role(user)
    return ok(build_alerts(db))
