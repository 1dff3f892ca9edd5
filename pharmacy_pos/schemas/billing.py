# FILE: pharmacy_pos/schemas/billing.py
from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field

from pharmacy_pos.models.invoice import PaymentMethod


# -------- Settlement input --------


class CustomerIn(BaseModel):
    name: str = ""
    phone: Optional[str] = None


class PaymentIn(BaseModel):
    method: PaymentMethod = PaymentMethod.CASH
    amount_received: Optional[Decimal] = None  # cash only


class CartItemIn(BaseModel):
    medicine_id: int
    quantity: int
    prescription_checked: bool = False


class InvoiceCreateIn(BaseModel):
    customer: CustomerIn
    payment: PaymentIn
    items: List[CartItemIn] = Field(default_factory=list)


# -------- Invoice output --------


class InvoiceLineOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    medicine_id: int
    name: str
    quantity: int
    unit_price: Decimal
    tax: Decimal
    discount: Decimal
    subtotal: Decimal
    prescription_checked: bool = False


class InvoiceSummaryOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    invoice_number: str
    date: datetime
    biller_id: int
    biller_name: Optional[str] = None
    customer_name: str
    customer_phone: Optional[str] = None
    subtotal: Decimal
    tax_total: Decimal
    total: Decimal
    payment_method: PaymentMethod
    amount_received: Optional[Decimal] = None
    change_returned: Optional[Decimal] = None


class SettledInvoice(InvoiceSummaryOut):
    """Display-ready invoice: header, snapshot lines, biller name."""
    items: List[InvoiceLineOut] = Field(default_factory=list)


# -------- Reports --------


class SalesSummaryOut(BaseModel):
    date_from: Optional[date] = None
    date_to: Optional[date] = None
    total_sales: Decimal = Decimal("0.00")
    total_invoices: int = 0
    average_sale: Decimal = Decimal("0.00")
    payment_method_counts: Dict[str, int] = Field(default_factory=dict)
