# FILE: pharmacy_pos/services/invoice_numbers.py
from __future__ import annotations

from datetime import datetime
from typing import Callable, Optional

from sqlalchemy.orm import Session

from pharmacy_pos.core.config import settings
from pharmacy_pos.models.invoice import Invoice
from pharmacy_pos.services.errors import PersistenceError


def _epoch_millis(dt: datetime) -> int:
    return int(dt.timestamp() * 1000)


def timestamp_invoice_number(millis: int, prefix: Optional[str] = None) -> str:
    """
    INV-<last 8 digits of epoch ms>
    """
    prefix = settings.INVOICE_PREFIX if prefix is None else prefix
    return f"{prefix}{str(millis)[-8:].zfill(8)}"


def next_invoice_number(
    exists: Callable[[str], bool],
    now: datetime,
    *,
    prefix: Optional[str] = None,
    attempts: Optional[int] = None,
) -> str:
    """
    Time-ordered number; on collision the millisecond component is bumped
    until a free number is found.
    """
    attempts = settings.INVOICE_NUMBER_ATTEMPTS if attempts is None else attempts
    millis = _epoch_millis(now)
    for offset in range(attempts):
        candidate = timestamp_invoice_number(millis + offset, prefix)
        if not exists(candidate):
            return candidate
    raise PersistenceError(
        f"Could not allocate a free invoice number after {attempts} attempts.",
        step="invoice_number",
    )


def invoice_number_exists(db: Session, number: str) -> bool:
    return (db.query(Invoice.id).filter(
        Invoice.invoice_number == number).first() is not None)
