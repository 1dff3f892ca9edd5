# FILE: pharmacy_pos/services/settlement_store.py
from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, List

from sqlalchemy import update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from pharmacy_pos.models.invoice import Invoice, InvoiceItem
from pharmacy_pos.models.medicine import Medicine
from pharmacy_pos.services.errors import PersistenceError, StockConflictError
from pharmacy_pos.services.invoice_numbers import invoice_number_exists

logger = logging.getLogger(__name__)


class SettlementStore(ABC):
    """
    Writes the settlement engine needs. ``transactional`` tells the engine
    whether ``rollback`` really undoes earlier writes.
    """
    transactional = False

    @abstractmethod
    def invoice_number_exists(self, number: str) -> bool:
        ...

    @abstractmethod
    def insert_invoice(self, header: Dict[str, Any]) -> int:
        ...

    @abstractmethod
    def insert_items(self, rows: List[Dict[str, Any]]) -> None:
        ...

    @abstractmethod
    def decrement_stock(self, medicine_id: int, quantity: int) -> int:
        """Returns the new stock. Must refuse to go below zero."""
        ...

    def commit(self) -> None:
        pass

    def rollback(self) -> None:
        pass


class SqlAlchemySettlementStore(SettlementStore):
    transactional = True

    def __init__(self, db: Session) -> None:
        self.db = db

    def invoice_number_exists(self, number: str) -> bool:
        return invoice_number_exists(self.db, number)

    def insert_invoice(self, header: Dict[str, Any]) -> int:
        try:
            inv = Invoice(**header)
            self.db.add(inv)
            self.db.flush()
            return inv.id
        except SQLAlchemyError as e:
            raise PersistenceError(f"Failed to save invoice: {e}", step="header") from e

    def insert_items(self, rows: List[Dict[str, Any]]) -> None:
        try:
            self.db.add_all([InvoiceItem(**row) for row in rows])
            self.db.flush()
        except SQLAlchemyError as e:
            raise PersistenceError(f"Failed to save invoice items: {e}", step="items") from e

    def decrement_stock(self, medicine_id: int, quantity: int) -> int:
        try:
            res = self.db.execute(
                update(Medicine).where(
                    Medicine.id == medicine_id,
                    Medicine.stock >= quantity,
                ).values(stock=Medicine.stock - quantity).execution_options(
                    synchronize_session=False))
            if res.rowcount != 1:
                current = self.db.query(Medicine.stock).filter(
                    Medicine.id == medicine_id).scalar()
                raise StockConflictError(medicine_id, quantity, current)
            new_stock = self.db.query(Medicine.stock).filter(
                Medicine.id == medicine_id).scalar()
        except SQLAlchemyError as e:
            raise PersistenceError(
                f"Failed to update stock for medicine {medicine_id}: {e}",
                step="stock") from e
        return int(new_stock)

    def commit(self) -> None:
        try:
            self.db.commit()
        except SQLAlchemyError as e:
            raise PersistenceError(f"Commit failed: {e}", step="commit") from e

    def rollback(self) -> None:
        self.db.rollback()
