"""In-memory repository implementations.

Used by default when no database is configured and throughout the tests.
Every store guards its dictionary with an ``RLock`` so that the version
check and the write in :meth:`save` happen atomically.
"""

from __future__ import annotations

import threading
from dataclasses import replace
from typing import Dict, Iterable, List, Optional
from uuid import UUID

from ..domain import ConcurrentUpdateError, Menu, RestaurantTable
from ..repos import (
    DeliveryOrderRepo,
    EatInOrderRepo,
    MenuRepo,
    TableRepo,
    TakeoutOrderRepo,
)


class InMemoryMenuRepo(MenuRepo):
    """Menu lookup backed by a dictionary."""

    def __init__(self, menus: Iterable[Menu] = ()) -> None:
        self._menus: Dict[UUID, Menu] = {m.id: m for m in menus}
        self._lock = threading.RLock()

    def save(self, menu: Menu) -> Menu:
        with self._lock:
            self._menus[menu.id] = menu
        return menu

    def find_by_id(self, menu_id) -> Optional[Menu]:
        with self._lock:
            return self._menus.get(menu_id)

    def find_all_by_ids(self, menu_ids) -> List[Menu]:
        wanted = set(menu_ids)
        with self._lock:
            return [menu for mid, menu in self._menus.items() if mid in wanted]


class InMemoryTableRepo(TableRepo):
    """Table registry backed by a dictionary."""

    def __init__(self) -> None:
        self._tables: Dict[UUID, RestaurantTable] = {}
        self._lock = threading.RLock()

    def find_by_id(self, table_id) -> Optional[RestaurantTable]:
        with self._lock:
            return self._tables.get(table_id)

    def save(self, table: RestaurantTable) -> RestaurantTable:
        with self._lock:
            self._tables[table.id] = table
        return table


class _InMemoryOrderStore:
    """Versioned order dictionary shared by the three channel stores."""

    def __init__(self) -> None:
        self._orders: Dict[UUID, object] = {}
        self._lock = threading.RLock()

    def save(self, order):
        with self._lock:
            current = self._orders.get(order.id)
            stored_version = current.version if current is not None else 0
            if stored_version != order.version:
                raise ConcurrentUpdateError(
                    f"order {order.id} was modified concurrently",
                    {"expected": order.version, "actual": stored_version},
                )
            stored = replace(order, version=order.version + 1)
            self._orders[order.id] = stored
            return stored

    def find_by_id(self, order_id):
        with self._lock:
            return self._orders.get(order_id)

    def find_all(self) -> list:
        with self._lock:
            return list(self._orders.values())


class InMemoryEatInOrderRepo(_InMemoryOrderStore, EatInOrderRepo):
    """Eat-in order store."""

    def exists_by_table_and_status_not(self, table_id, status) -> bool:
        with self._lock:
            return any(
                order.table_id == table_id and order.status != status
                for order in self._orders.values()
            )


class InMemoryTakeoutOrderRepo(_InMemoryOrderStore, TakeoutOrderRepo):
    """Takeout order store."""


class InMemoryDeliveryOrderRepo(_InMemoryOrderStore, DeliveryOrderRepo):
    """Delivery order store."""


__all__ = [
    "InMemoryMenuRepo",
    "InMemoryTableRepo",
    "InMemoryEatInOrderRepo",
    "InMemoryTakeoutOrderRepo",
    "InMemoryDeliveryOrderRepo",
]
