"""Order lifecycle services, one per channel."""

from .delivery_order_service import DeliveryOrderService, dispatch_total
from .eat_in_order_service import EatInOrderService
from .takeout_order_service import TakeoutOrderService

__all__ = [
    "EatInOrderService",
    "TakeoutOrderService",
    "DeliveryOrderService",
    "dispatch_total",
]
