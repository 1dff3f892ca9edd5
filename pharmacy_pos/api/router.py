# pharmacy_pos/api/router.py
from fastapi import APIRouter
from pharmacy_pos.api import (
    routes_billing,
    routes_inventory,
    routes_reports,
)

api_router = APIRouter()

api_router.include_router(routes_billing.router, prefix="/billing", tags=["Billing"])
api_router.include_router(routes_inventory.router, prefix="/inventory", tags=["Inventory"])
api_router.include_router(routes_reports.router, prefix="/reports", tags=["Reports"])
