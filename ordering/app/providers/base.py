"""Base interface for delivery dispatch providers."""

from decimal import Decimal
from typing import Protocol
from uuid import UUID


class DeliveryDispatch(Protocol):
    """Courier service notified when a delivery order is accepted."""

    def request_delivery(self, order_id: UUID, price: Decimal, address: str) -> None:
        """Ask for a courier to carry ``order_id`` worth ``price`` to ``address``.

        Any exception propagates to the caller and fails the acceptance.
        """
