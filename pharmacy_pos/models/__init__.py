# pharmacy_pos/models/__init__.py
from .user import User, UserRole
from .vendor import Vendor
from .medicine import Medicine
from .invoice import Invoice, InvoiceItem, PaymentMethod
from .error_log import ErrorLog

__all__ = [
    "User",
    "UserRole",
    "Vendor",
    "Medicine",
    "Invoice",
    "InvoiceItem",
    "PaymentMethod",
    "ErrorLog",
]
