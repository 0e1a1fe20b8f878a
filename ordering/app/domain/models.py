"""Value objects for menus, tables and the three order aggregates.

Aggregates are frozen; a status change produces a new instance via
:func:`dataclasses.replace` and only the store ``save`` commits it.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional, Tuple
from uuid import UUID

from .order_status import DeliveryOrderStatus, EatInOrderStatus, TakeoutOrderStatus


class OrderType(str, Enum):
    """Channel an order was placed through."""

    EAT_IN = "EAT_IN"
    TAKEOUT = "TAKEOUT"
    DELIVERY = "DELIVERY"


@dataclass(frozen=True)
class Menu:
    """Menu as seen by the order core: current price and visibility."""

    id: UUID
    name: str
    price: Decimal
    displayed: bool = True


@dataclass(frozen=True)
class RestaurantTable:
    """Dining table occupancy state."""

    id: UUID
    name: str
    occupied: bool = False
    guest_count: int = 0

    def clear(self) -> "RestaurantTable":
        """Return the table reset to unoccupied with no guests."""
        return RestaurantTable(id=self.id, name=self.name, occupied=False, guest_count=0)


@dataclass(frozen=True)
class OrderLineItem:
    """Menu selection with the price captured at order time."""

    menu_id: UUID
    price: Decimal
    quantity: int

    @property
    def amount(self) -> Decimal:
        return self.price * self.quantity


@dataclass(frozen=True)
class EatInOrder:
    id: UUID
    type: OrderType
    status: EatInOrderStatus
    order_date_time: datetime
    order_line_items: Tuple[OrderLineItem, ...]
    table_id: UUID
    version: int = 0


@dataclass(frozen=True)
class TakeoutOrder:
    id: UUID
    type: OrderType
    status: TakeoutOrderStatus
    order_date_time: datetime
    order_line_items: Tuple[OrderLineItem, ...]
    version: int = 0


@dataclass(frozen=True)
class DeliveryOrder:
    id: UUID
    type: OrderType
    status: DeliveryOrderStatus
    order_date_time: datetime
    order_line_items: Tuple[OrderLineItem, ...]
    delivery_address: Optional[str] = None
    version: int = 0


__all__ = [
    "OrderType",
    "Menu",
    "RestaurantTable",
    "OrderLineItem",
    "EatInOrder",
    "TakeoutOrder",
    "DeliveryOrder",
]
