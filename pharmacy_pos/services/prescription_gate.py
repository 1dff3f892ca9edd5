# FILE: pharmacy_pos/services/prescription_gate.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Optional

from pharmacy_pos.services.cart import Cart, CartLine
from pharmacy_pos.services.errors import PrescriptionGateError

logger = logging.getLogger(__name__)


@dataclass
class PendingAdd:
    medicine: object
    quantity: int
    resolved: bool = False


class PrescriptionGate:
    """
    Holds adds of prescription-only medicines until the operator confirms
    the prescription was checked. Every attempt needs its own confirmation.
    """

    def __init__(self, cart: Cart) -> None:
        self.cart = cart

    def request_add(self, medicine, quantity: int) -> Optional[PendingAdd]:
        if not getattr(medicine, "prescription_required", False):
            self.cart.add_item(medicine, quantity)
            return None
        logger.debug("Prescription check pending for medicine_id=%s", medicine.id)
        return PendingAdd(medicine=medicine, quantity=quantity)

    def confirm(self, pending: PendingAdd) -> CartLine:
        self._resolve(pending)
        logger.info("Prescription checked for medicine_id=%s qty=%s",
                    pending.medicine.id, pending.quantity)
        return self.cart.add_item(pending.medicine,
                                  pending.quantity,
                                  prescription_confirmed=True)

    def decline(self, pending: PendingAdd) -> None:
        self._resolve(pending)

    def add_with_confirmation(
        self,
        medicine,
        quantity: int,
        confirm: Callable[[object], bool],
    ) -> Optional[CartLine]:
        """
        Synchronous form: ``confirm`` is asked only for prescription
        medicines. Returns the cart line, or None when the operator declined.
        """
        pending = self.request_add(medicine, quantity)
        if pending is None:
            return self.cart.find_line(medicine.id)
        if confirm(medicine):
            return self.confirm(pending)
        self.decline(pending)
        return None

    @staticmethod
    def _resolve(pending: PendingAdd) -> None:
        if pending.resolved:
            raise PrescriptionGateError(
                "This add was already confirmed or declined.",
                details={"medicine_id": pending.medicine.id},
            )
        pending.resolved = True
