# FILE: pharmacy_pos/services/errors.py
"""
Billing / settlement error taxonomy.

Everything raised by the cart, the prescription gate and the settlement
engine derives from ``BillingError``. ``code`` is the stable identifier the
API puts into the error envelope.
"""
from __future__ import annotations

from typing import Any, Dict, Optional, Sequence


class BillingError(Exception):
    code = "billing_error"

    def __init__(self, message: str, *, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}


# ---------- Cart ----------


class ValidationError(BillingError):
    """Non-positive quantity, or quantity above available stock."""
    code = "validation_error"


class PrescriptionRequiredError(BillingError):
    """A prescription medicine reached the cart without a confirmation step."""
    code = "prescription_required"


class PrescriptionGateError(BillingError):
    """A pending add was resolved twice."""
    code = "prescription_gate_error"


# ---------- Settlement preconditions ----------


class SettlementValidationError(BillingError):
    code = "settlement_invalid"


class EmptyCartError(SettlementValidationError):
    code = "empty_cart"


class MissingCustomerNameError(SettlementValidationError):
    code = "missing_customer_name"


class InvalidPhoneError(SettlementValidationError):
    code = "invalid_phone"


class InsufficientAmountError(SettlementValidationError):
    code = "insufficient_amount"


# ---------- Storage ----------


class PersistenceError(BillingError):
    code = "persistence_error"

    def __init__(
        self,
        message: str,
        *,
        step: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message, details=details)
        self.step = step


class StockConflictError(PersistenceError):
    """Conditional stock decrement refused (stock changed since the cart was built)."""
    code = "stock_conflict"

    def __init__(self, medicine_id: int, requested: int, available: Optional[int]) -> None:
        super().__init__(
            f"Not enough stock for medicine {medicine_id}. "
            f"Requested {requested}, available {available if available is not None else 'unknown'}.",
            step="stock",
            details={
                "medicine_id": medicine_id,
                "requested": requested,
                "available": available,
            },
        )
        self.medicine_id = medicine_id
        self.requested = requested
        self.available = available


class PartialSettlementError(PersistenceError):
    """
    Storage failed after the invoice header was written and could not be
    rolled back. Needs manual reconciliation.
    """
    code = "partial_settlement"

    def __init__(
        self,
        message: str,
        *,
        invoice_number: str,
        invoice_id: Optional[int],
        step: str,
        completed_steps: Sequence[str],
    ) -> None:
        super().__init__(
            message,
            step=step,
            details={
                "invoice_number": invoice_number,
                "invoice_id": invoice_id,
                "failed_step": step,
                "completed_steps": list(completed_steps),
            },
        )
        self.invoice_number = invoice_number
        self.invoice_id = invoice_id
        self.completed_steps = list(completed_steps)


class MedicineUnavailableError(ValidationError):
    """Medicine is unknown, expired or out of stock in the current catalog."""
    code = "medicine_unavailable"
