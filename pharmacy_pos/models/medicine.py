# FILE: pharmacy_pos/models/medicine.py
from __future__ import annotations

from datetime import datetime
from sqlalchemy import (
    Column, Integer, String, Boolean, Date, DateTime, Numeric,
    ForeignKey, CheckConstraint, Index
)
from sqlalchemy.orm import relationship

from pharmacy_pos.db.base import Base

Money = Numeric(14, 2)
Percent = Numeric(5, 2)


class Medicine(Base):
    __tablename__ = "medicines"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)

    price = Column(Money, nullable=False, default=0)
    tax = Column(Percent, nullable=False, default=0)  # percent
    discount = Column(Percent, nullable=False, default=0)  # percent, 0-100

    stock = Column(Integer, nullable=False, default=0)
    expiry_date = Column(Date, nullable=False)
    prescription_required = Column(Boolean, default=False, nullable=False)

    vendor_id = Column(Integer,
                       ForeignKey("vendors.id"),
                       nullable=True,
                       index=True)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    vendor = relationship("Vendor", back_populates="medicines")
    invoice_items = relationship("InvoiceItem", back_populates="medicine")

    __table_args__ = (
        CheckConstraint("stock >= 0", name="ck_medicines_stock_nonneg"),
        CheckConstraint("price >= 0", name="ck_medicines_price_nonneg"),
        CheckConstraint("tax >= 0", name="ck_medicines_tax_nonneg"),
        CheckConstraint("discount >= 0 AND discount <= 100",
                        name="ck_medicines_discount_range"),
        Index("ix_medicines_name", "name"),
        Index("ix_medicines_expiry", "expiry_date"),
    )
