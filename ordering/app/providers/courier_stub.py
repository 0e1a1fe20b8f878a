"""Stub courier provider that logs dispatch requests."""

from __future__ import annotations

import logging
from decimal import Decimal
from uuid import UUID

logger = logging.getLogger("dispatch")


class StubCourier:
    """Record dispatch requests instead of sending them."""

    def __init__(self) -> None:
        self.requests: list[tuple[UUID, Decimal, str]] = []

    def request_delivery(self, order_id: UUID, price: Decimal, address: str) -> None:
        self.requests.append((order_id, price, address))
        logger.info("delivery dispatched (stub) for order %s total=%s", order_id, price)
