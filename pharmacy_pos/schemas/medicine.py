# FILE: pharmacy_pos/schemas/medicine.py
from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field, computed_field

from pharmacy_pos.services.pricing import discounted_unit_price
from pharmacy_pos.services.stock_status import StockStatus


class MedicineRecord(BaseModel):
    """
    Catalog snapshot handed to billing. Out-of-range percentages are
    rejected here rather than clamped later.
    """
    model_config = ConfigDict(from_attributes=True, frozen=True)

    id: int
    name: str
    price: Decimal = Field(ge=0)
    tax: Decimal = Field(default=Decimal("0"), ge=0)
    discount: Decimal = Field(default=Decimal("0"), ge=0, le=100)
    stock: int = Field(ge=0)
    expiry_date: date
    prescription_required: bool = False
    vendor_id: Optional[int] = None

    @computed_field
    @property
    def price_after_discount(self) -> Decimal:
        return discounted_unit_price(self.price, self.discount)


class MedicineStatusOut(BaseModel):
    id: int
    name: str
    stock: int
    expiry_date: date
    price: Decimal
    discount: Decimal
    price_after_discount: Decimal
    prescription_required: bool
    vendor_name: Optional[str] = None
    status: StockStatus


class AlertMedicineOut(BaseModel):
    id: int
    name: str
    stock: int
    expiry_date: date
    days_to_expiry: int
    vendor_name: Optional[str] = None
    vendor_phone: Optional[str] = None


class AlertsOut(BaseModel):
    reference_date: date
    low_stock: List[AlertMedicineOut] = []
    out_of_stock: List[AlertMedicineOut] = []
    near_expiry: List[AlertMedicineOut] = []
    expired: List[AlertMedicineOut] = []

    stock_tab_count: int = 0
    expiry_tab_count: int = 0
