"""Creation request payloads for the three order channels.

Every field is optional here; the services decide which missing value is a
validation failure so that all channels report them the same way.
"""

from __future__ import annotations

from decimal import Decimal
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel

from .domain import OrderType


class OrderLineItemRequest(BaseModel):
    """Single requested menu selection."""

    menu_id: Optional[UUID] = None
    price: Optional[Decimal] = None
    quantity: int = 0


class EatInOrderRequest(BaseModel):
    """Payload for an order eaten at a table."""

    type: Optional[OrderType] = None
    order_line_items: Optional[List[OrderLineItemRequest]] = None
    table_id: Optional[UUID] = None


class TakeoutOrderRequest(BaseModel):
    """Payload for an order collected at the counter."""

    type: Optional[OrderType] = None
    order_line_items: Optional[List[OrderLineItemRequest]] = None


class DeliveryOrderRequest(BaseModel):
    """Payload for an order delivered by courier."""

    type: Optional[OrderType] = None
    order_line_items: Optional[List[OrderLineItemRequest]] = None
    delivery_address: Optional[str] = None


__all__ = [
    "OrderLineItemRequest",
    "EatInOrderRequest",
    "TakeoutOrderRequest",
    "DeliveryOrderRequest",
]
