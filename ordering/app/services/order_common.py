"""Creation checks and loading helpers shared by the channel services.

The services differ in their quantity policy and channel fields; everything
else about a creation request is checked here, in this order: type, line
items present, every menu resolvable, menu displayed, price matches,
quantity allowed.
"""

from __future__ import annotations

from typing import List, Optional, Sequence

from ..domain import (
    OrderLineItem,
    OrderNotFoundError,
    OrderStateError,
    OrderType,
    OrderValidationError,
)
from ..repos import MenuRepo, OrderRepo
from ..schemas import OrderLineItemRequest


def require_type(order_type: Optional[OrderType], channel: OrderType) -> OrderType:
    """Ensure the request names ``channel`` as its order type."""

    if order_type is None:
        raise OrderValidationError("order type is required")
    if order_type != channel:
        raise OrderValidationError(
            f"{order_type.value} orders cannot be placed through the {channel.value} channel",
            {"type": order_type.value, "channel": channel.value},
        )
    return order_type


def validate_line_items(
    requests: Optional[Sequence[OrderLineItemRequest]],
    menu_repo: MenuRepo,
    *,
    allow_negative_quantity: bool,
) -> List[OrderLineItem]:
    """Check ``requests`` against the menu and return the line items to store.

    ``allow_negative_quantity`` is set by the eat-in channel only.
    """

    if not requests:
        raise OrderValidationError("at least one order line item is required")

    menus = menu_repo.find_all_by_ids([req.menu_id for req in requests])
    if len(menus) != len(requests):
        raise OrderValidationError(
            "order references unknown or repeated menus",
            {"requested": len(requests), "resolved": len(menus)},
        )

    line_items: List[OrderLineItem] = []
    for req in requests:
        menu = menu_repo.find_by_id(req.menu_id)
        if menu is None:
            raise OrderNotFoundError(f"menu {req.menu_id} not found")
        if not menu.displayed:
            raise OrderStateError(f"menu {menu.id} is hidden and cannot be ordered")
        if req.price is None or req.price != menu.price:
            raise OrderValidationError(
                f"price for menu {menu.id} does not match the menu price",
                {"requested": str(req.price), "menu_price": str(menu.price)},
            )
        if req.quantity < 0 and not allow_negative_quantity:
            raise OrderValidationError(
                f"quantity for menu {menu.id} must not be negative",
                {"quantity": req.quantity},
            )
        line_items.append(
            OrderLineItem(menu_id=menu.id, price=req.price, quantity=req.quantity)
        )
    return line_items


def load_order(repo: OrderRepo, order_id):
    """Return the stored order or raise :class:`OrderNotFoundError`."""

    order = repo.find_by_id(order_id)
    if order is None:
        raise OrderNotFoundError(f"order {order_id} not found")
    return order
