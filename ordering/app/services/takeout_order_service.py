from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone
from typing import List

from ..domain import (
    TAKEOUT_TRANSITIONS,
    OrderType,
    TakeoutOrder,
    TakeoutOrderStatus,
    advance,
)
from ..obs import order_context
from ..repos import MenuRepo, TakeoutOrderRepo
from ..schemas import TakeoutOrderRequest
from .order_common import load_order, require_type, validate_line_items

logger = logging.getLogger("orders")


class TakeoutOrderService:
    """Lifecycle of orders collected at the counter."""

    def __init__(self, order_repo: TakeoutOrderRepo, menu_repo: MenuRepo) -> None:
        self.order_repo = order_repo
        self.menu_repo = menu_repo

    def create(self, request: TakeoutOrderRequest) -> TakeoutOrder:
        order_type = require_type(request.type, OrderType.TAKEOUT)
        line_items = validate_line_items(
            request.order_line_items, self.menu_repo, allow_negative_quantity=False
        )
        order = TakeoutOrder(
            id=uuid.uuid4(),
            type=order_type,
            status=TakeoutOrderStatus.WAITING,
            order_date_time=datetime.now(timezone.utc),
            order_line_items=tuple(line_items),
        )
        saved = self.order_repo.save(order)
        with order_context(saved.id):
            logger.info("takeout order created with %d line items", len(line_items))
        return saved

    def accept(self, order_id) -> TakeoutOrder:
        return self._transition(order_id, "accept")

    def serve(self, order_id) -> TakeoutOrder:
        return self._transition(order_id, "serve")

    def complete(self, order_id) -> TakeoutOrder:
        return self._transition(order_id, "complete")

    def find_all(self) -> List[TakeoutOrder]:
        return self.order_repo.find_all()

    def _transition(self, order_id, operation: str) -> TakeoutOrder:
        with order_context(order_id):
            order = load_order(self.order_repo, order_id)
            updated = self.order_repo.save(advance(order, TAKEOUT_TRANSITIONS, operation))
            logger.info("order %s: %s -> %s", operation, order.status.value, updated.status.value)
            return updated
