"""Collaborator contracts consumed by the order services."""

from .menu_repo import MenuRepo
from .orders_repo import DeliveryOrderRepo, EatInOrderRepo, OrderRepo, TakeoutOrderRepo
from .table_repo import TableRepo

__all__ = [
    "MenuRepo",
    "TableRepo",
    "OrderRepo",
    "EatInOrderRepo",
    "TakeoutOrderRepo",
    "DeliveryOrderRepo",
]
