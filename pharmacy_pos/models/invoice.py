# FILE: pharmacy_pos/models/invoice.py
from __future__ import annotations

import enum
from datetime import datetime
from sqlalchemy import (
    Column, Integer, String, Boolean, DateTime, Numeric, ForeignKey, Enum,
    CheckConstraint, Index
)
from sqlalchemy.orm import relationship

from pharmacy_pos.db.base import Base

Money = Numeric(14, 2)
Percent = Numeric(5, 2)


class PaymentMethod(str, enum.Enum):
    CASH = "cash"
    UPI = "upi"
    CARD = "card"


class Invoice(Base):
    """
    Settled sale. Written once by the settlement engine, never updated.
    """
    __tablename__ = "invoices"

    id = Column(Integer, primary_key=True, index=True)
    invoice_number = Column(String(40), unique=True, nullable=False, index=True)

    biller_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    customer_name = Column(String(255), nullable=False)
    customer_phone = Column(String(20), nullable=True)

    date = Column(DateTime, default=datetime.utcnow, nullable=False, index=True)

    subtotal = Column(Money, nullable=False, default=0)
    tax_total = Column(Money, nullable=False, default=0)
    total = Column(Money, nullable=False, default=0)

    payment_method = Column(Enum(PaymentMethod,
                                 values_callable=lambda e: [m.value for m in e]),
                            nullable=False)
    amount_received = Column(Money, nullable=True)
    change_returned = Column(Money, nullable=True)  # cash only

    biller = relationship("User")
    items = relationship("InvoiceItem",
                         back_populates="invoice",
                         order_by="InvoiceItem.id")


class InvoiceItem(Base):
    __tablename__ = "invoice_items"

    id = Column(Integer, primary_key=True, index=True)
    invoice_id = Column(Integer, ForeignKey("invoices.id"), nullable=False, index=True)
    medicine_id = Column(Integer, ForeignKey("medicines.id"), nullable=False, index=True)

    # snapshot at sale time
    name = Column(String(255), nullable=False)
    quantity = Column(Integer, nullable=False)
    unit_price = Column(Money, nullable=False)
    tax = Column(Percent, nullable=False, default=0)
    discount = Column(Percent, nullable=False, default=0)
    subtotal = Column(Money, nullable=False)
    prescription_checked = Column(Boolean, default=False, nullable=False)

    invoice = relationship("Invoice", back_populates="items")
    medicine = relationship("Medicine", back_populates="invoice_items")

    __table_args__ = (
        CheckConstraint("quantity > 0", name="ck_invoice_items_qty_pos"),
        Index("ix_invoice_items_invoice_medicine", "invoice_id", "medicine_id"),
    )
