from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone
from typing import List

from ..domain import (
    EAT_IN_TRANSITIONS,
    EatInOrder,
    EatInOrderStatus,
    OrderNotFoundError,
    OrderStateError,
    OrderType,
    OrderValidationError,
    RestaurantTable,
    advance,
)
from ..obs import order_context
from ..repos import EatInOrderRepo, MenuRepo, TableRepo
from ..schemas import EatInOrderRequest
from ..utils import KeyedLock
from .order_common import load_order, require_type, validate_line_items

logger = logging.getLogger("orders")


class EatInOrderService:
    """Lifecycle of orders eaten at a table.

    ``WAITING -> ACCEPTED -> SERVED -> COMPLETED``. Completing the last open
    order on a table frees the table.
    """

    def __init__(
        self,
        order_repo: EatInOrderRepo,
        menu_repo: MenuRepo,
        table_repo: TableRepo,
        table_locks: KeyedLock | None = None,
    ) -> None:
        self.order_repo = order_repo
        self.menu_repo = menu_repo
        self.table_repo = table_repo
        self.table_locks = table_locks or KeyedLock()

    def create(self, request: EatInOrderRequest) -> EatInOrder:
        """Validate ``request`` and store a new ``WAITING`` order."""

        order_type = require_type(request.type, OrderType.EAT_IN)
        line_items = validate_line_items(
            request.order_line_items, self.menu_repo, allow_negative_quantity=True
        )
        if request.table_id is None:
            raise OrderValidationError("table is required for eat-in orders")
        table = self.table_repo.find_by_id(request.table_id)
        if table is None:
            raise OrderNotFoundError(f"table {request.table_id} not found")
        if not table.occupied:
            raise OrderStateError(f"cannot order against unoccupied table {table.id}")

        order = EatInOrder(
            id=uuid.uuid4(),
            type=order_type,
            status=EatInOrderStatus.WAITING,
            order_date_time=datetime.now(timezone.utc),
            order_line_items=tuple(line_items),
            table_id=table.id,
        )
        saved = self.order_repo.save(order)
        with order_context(saved.id):
            logger.info("eat-in order created on table %s", table.id)
        return saved

    def accept(self, order_id) -> EatInOrder:
        return self._transition(order_id, "accept")

    def serve(self, order_id) -> EatInOrder:
        return self._transition(order_id, "serve")

    def complete(self, order_id) -> EatInOrder:
        """Complete the order, then free its table if nothing else is open on it.

        Everything from the status check to the table write runs under the
        table's lock. The table is only reset when it still looks the way it
        did before the order was completed, so a party seated in the meantime
        keeps its table.
        """

        with order_context(order_id):
            table_id = load_order(self.order_repo, order_id).table_id
            with self.table_locks.hold(table_id):
                order = load_order(self.order_repo, order_id)
                completed = advance(order, EAT_IN_TRANSITIONS, "complete")
                table = self.table_repo.find_by_id(table_id)
                if table is None:
                    raise OrderNotFoundError(f"table {table_id} not found")
                updated = self._save(order, completed, "complete")
                self._release_table(table)
                return updated

    def find_all(self) -> List[EatInOrder]:
        return self.order_repo.find_all()

    def _transition(self, order_id, operation: str) -> EatInOrder:
        with order_context(order_id):
            order = load_order(self.order_repo, order_id)
            return self._save(order, advance(order, EAT_IN_TRANSITIONS, operation), operation)

    def _save(self, before: EatInOrder, after: EatInOrder, operation: str) -> EatInOrder:
        updated = self.order_repo.save(after)
        logger.info("order %s: %s -> %s", operation, before.status.value, updated.status.value)
        return updated

    def _release_table(self, seen: RestaurantTable) -> None:
        if self.order_repo.exists_by_table_and_status_not(
            seen.id, EatInOrderStatus.COMPLETED
        ):
            return
        current = self.table_repo.find_by_id(seen.id)
        if current != seen:
            logger.info("table %s changed while completing, left as is", seen.id)
            return
        self.table_repo.save(seen.clear())
        logger.info("table %s released", seen.id)
