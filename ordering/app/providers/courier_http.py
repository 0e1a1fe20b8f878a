"""Courier dispatch provider that posts requests to an HTTP endpoint."""

from __future__ import annotations

import logging
from decimal import Decimal
from uuid import UUID

import requests

logger = logging.getLogger("dispatch")


class CourierClient:
    """Request couriers from the dispatch service over HTTP."""

    def __init__(self, url: str, timeout: float = 5.0, session: requests.Session | None = None) -> None:
        self.url = url
        self.timeout = timeout
        self._session = session or requests.Session()

    def request_delivery(self, order_id: UUID, price: Decimal, address: str) -> None:
        payload = {"orderId": str(order_id), "price": str(price), "address": address}
        resp = self._session.post(self.url, json=payload, timeout=self.timeout)
        resp.raise_for_status()
        logger.info("delivery requested for order %s total=%s", order_id, price)
