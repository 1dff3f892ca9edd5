# pharmacy_pos/db/base.py
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """All pharmacy tables (users, medicines, invoices, ...) inherit from this."""
    pass
