"""Domain models and helpers."""

from .errors import (
    ConcurrentUpdateError,
    OrderError,
    OrderNotFoundError,
    OrderStateError,
    OrderValidationError,
)
from .models import (
    DeliveryOrder,
    EatInOrder,
    Menu,
    OrderLineItem,
    OrderType,
    RestaurantTable,
    TakeoutOrder,
)
from .order_status import (
    DELIVERY_TRANSITIONS,
    EAT_IN_TRANSITIONS,
    TAKEOUT_TRANSITIONS,
    DeliveryOrderStatus,
    EatInOrderStatus,
    TakeoutOrderStatus,
    advance,
    can_transition,
    next_status,
)

__all__ = [
    "ConcurrentUpdateError",
    "OrderError",
    "OrderNotFoundError",
    "OrderStateError",
    "OrderValidationError",
    "DeliveryOrder",
    "EatInOrder",
    "Menu",
    "OrderLineItem",
    "OrderType",
    "RestaurantTable",
    "TakeoutOrder",
    "DELIVERY_TRANSITIONS",
    "EAT_IN_TRANSITIONS",
    "TAKEOUT_TRANSITIONS",
    "DeliveryOrderStatus",
    "EatInOrderStatus",
    "TakeoutOrderStatus",
    "advance",
    "can_transition",
    "next_status",
]
