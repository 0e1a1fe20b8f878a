from __future__ import annotations

import logging
import uuid
from dataclasses import replace
from datetime import datetime, timezone
from decimal import Decimal
from typing import List, Set
from uuid import UUID

from ..domain import (
    DELIVERY_TRANSITIONS,
    DeliveryOrder,
    DeliveryOrderStatus,
    OrderStateError,
    OrderType,
    OrderValidationError,
    advance,
)
from ..obs import order_context
from ..providers import DeliveryDispatch
from ..repos import DeliveryOrderRepo, MenuRepo
from ..schemas import DeliveryOrderRequest
from ..utils import KeyedLock
from .order_common import load_order, require_type, validate_line_items

logger = logging.getLogger("orders")


def dispatch_total(order: DeliveryOrder) -> Decimal:
    """Return the amount reported to the courier service.

    Only the last line item counts: each item's ``price * quantity`` replaces
    the previous one instead of adding to it. Dispatch integrations depend on
    this figure, so it is kept as is; see DESIGN.md.
    """

    total = Decimal(0)
    for item in order.order_line_items:
        total = item.amount
    return total


class DeliveryOrderService:
    """Lifecycle of orders delivered by courier.

    ``WAITING -> ACCEPTED -> PICKED_UP -> DELIVERING -> DELIVERED -> COMPLETED``
    """

    def __init__(
        self,
        order_repo: DeliveryOrderRepo,
        menu_repo: MenuRepo,
        dispatch: DeliveryDispatch,
        order_locks: KeyedLock | None = None,
    ) -> None:
        self.order_repo = order_repo
        self.menu_repo = menu_repo
        self.dispatch = dispatch
        self.order_locks = order_locks or KeyedLock()
        # Order ids currently inside accept; the order lock is re-entrant.
        self._accepting: Set[UUID] = set()

    def create(self, request: DeliveryOrderRequest) -> DeliveryOrder:
        order_type = require_type(request.type, OrderType.DELIVERY)
        line_items = validate_line_items(
            request.order_line_items, self.menu_repo, allow_negative_quantity=False
        )
        address = request.delivery_address
        if address is None or not address.strip():
            raise OrderValidationError("delivery address is required")

        order = DeliveryOrder(
            id=uuid.uuid4(),
            type=order_type,
            status=DeliveryOrderStatus.WAITING,
            order_date_time=datetime.now(timezone.utc),
            order_line_items=tuple(line_items),
            delivery_address=address,
        )
        saved = self.order_repo.save(order)
        with order_context(saved.id):
            logger.info("delivery order created with %d line items", len(line_items))
        return saved

    def accept(self, order_id) -> DeliveryOrder:
        """Accept a waiting order and request a courier for it.

        The status check, the courier request and the save run under the
        order's lock, so one order is dispatched at most once. A dispatch
        failure propagates and the order stays ``WAITING``.
        """

        with order_context(order_id), self.order_locks.hold(order_id):
            if order_id in self._accepting:
                raise OrderStateError(
                    f"order {order_id} is already being accepted",
                    {"operation": "accept"},
                )
            self._accepting.add(order_id)
            try:
                order = load_order(self.order_repo, order_id)
                accepted = advance(order, DELIVERY_TRANSITIONS, "accept")
                if order.type == OrderType.DELIVERY:
                    total = dispatch_total(order)
                    self.dispatch.request_delivery(order.id, total, order.delivery_address)
                    logger.info("courier requested, total=%s", total)
                return self._save(order, accepted, "accept")
            finally:
                self._accepting.discard(order_id)

    def serve(self, order_id) -> DeliveryOrder:
        """Hand the order over to the courier."""
        return self._transition(order_id, "serve")

    def start_delivery(self, order_id) -> DeliveryOrder:
        with order_context(order_id):
            order = load_order(self.order_repo, order_id)
            if order.type != OrderType.DELIVERY:
                raise OrderStateError(
                    f"order of type {order.type.value} cannot be delivered",
                    {"type": order.type.value},
                )
            return self._save(
                order, advance(order, DELIVERY_TRANSITIONS, "start_delivery"), "start_delivery"
            )

    def complete_delivery(self, order_id) -> DeliveryOrder:
        return self._transition(order_id, "complete_delivery")

    def complete(self, order_id) -> DeliveryOrder:
        with order_context(order_id):
            order = load_order(self.order_repo, order_id)
            if order.type == OrderType.DELIVERY:
                completed = advance(order, DELIVERY_TRANSITIONS, "complete")
            else:
                completed = replace(order, status=DeliveryOrderStatus.COMPLETED)
            return self._save(order, completed, "complete")

    def find_all(self) -> List[DeliveryOrder]:
        return self.order_repo.find_all()

    def _transition(self, order_id, operation: str) -> DeliveryOrder:
        with order_context(order_id):
            order = load_order(self.order_repo, order_id)
            return self._save(order, advance(order, DELIVERY_TRANSITIONS, operation), operation)

    def _save(self, before: DeliveryOrder, after: DeliveryOrder, operation: str) -> DeliveryOrder:
        updated = self.order_repo.save(after)
        logger.info("order %s: %s -> %s", operation, before.status.value, updated.status.value)
        return updated
