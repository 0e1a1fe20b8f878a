"""Delivery dispatch providers."""

from .base import DeliveryDispatch
from .courier_http import CourierClient
from .courier_stub import StubCourier

__all__ = ["DeliveryDispatch", "CourierClient", "StubCourier"]
