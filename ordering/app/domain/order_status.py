"""Order status enumerations and allowed transitions per channel.

Each table maps ``current status -> operation -> next status``. Anything not
listed is rejected, so every channel's graph is linear and never revisits an
earlier state.
"""

from __future__ import annotations

from dataclasses import replace
from enum import Enum
from typing import Mapping, TypeVar

from .errors import OrderStateError


class EatInOrderStatus(str, Enum):
    """Lifecycle states for an eat-in order."""

    WAITING = "WAITING"
    ACCEPTED = "ACCEPTED"
    SERVED = "SERVED"
    COMPLETED = "COMPLETED"


class TakeoutOrderStatus(str, Enum):
    """Lifecycle states for a takeout order."""

    WAITING = "WAITING"
    ACCEPTED = "ACCEPTED"
    SERVED = "SERVED"
    COMPLETED = "COMPLETED"


class DeliveryOrderStatus(str, Enum):
    """Lifecycle states for a delivery order."""

    WAITING = "WAITING"
    ACCEPTED = "ACCEPTED"
    PICKED_UP = "PICKED_UP"
    DELIVERING = "DELIVERING"
    DELIVERED = "DELIVERED"
    COMPLETED = "COMPLETED"


Transitions = Mapping[Enum, Mapping[str, Enum]]

EAT_IN_TRANSITIONS: dict[EatInOrderStatus, dict[str, EatInOrderStatus]] = {
    EatInOrderStatus.WAITING: {"accept": EatInOrderStatus.ACCEPTED},
    EatInOrderStatus.ACCEPTED: {"serve": EatInOrderStatus.SERVED},
    EatInOrderStatus.SERVED: {"complete": EatInOrderStatus.COMPLETED},
    EatInOrderStatus.COMPLETED: {},
}

TAKEOUT_TRANSITIONS: dict[TakeoutOrderStatus, dict[str, TakeoutOrderStatus]] = {
    TakeoutOrderStatus.WAITING: {"accept": TakeoutOrderStatus.ACCEPTED},
    TakeoutOrderStatus.ACCEPTED: {"serve": TakeoutOrderStatus.SERVED},
    TakeoutOrderStatus.SERVED: {"complete": TakeoutOrderStatus.COMPLETED},
    TakeoutOrderStatus.COMPLETED: {},
}

DELIVERY_TRANSITIONS: dict[DeliveryOrderStatus, dict[str, DeliveryOrderStatus]] = {
    DeliveryOrderStatus.WAITING: {"accept": DeliveryOrderStatus.ACCEPTED},
    DeliveryOrderStatus.ACCEPTED: {"serve": DeliveryOrderStatus.PICKED_UP},
    DeliveryOrderStatus.PICKED_UP: {"start_delivery": DeliveryOrderStatus.DELIVERING},
    DeliveryOrderStatus.DELIVERING: {"complete_delivery": DeliveryOrderStatus.DELIVERED},
    DeliveryOrderStatus.DELIVERED: {"complete": DeliveryOrderStatus.COMPLETED},
    DeliveryOrderStatus.COMPLETED: {},
}


def next_status(transitions: Transitions, current: Enum, operation: str) -> Enum:
    """Return the status ``operation`` leads to from ``current``.

    Raises :class:`OrderStateError` when the table has no such edge.
    """

    target = transitions.get(current, {}).get(operation)
    if target is None:
        raise OrderStateError(
            f"cannot {operation.replace('_', ' ')} an order in status {current.value}",
            {"status": current.value, "operation": operation},
        )
    return target


def can_transition(transitions: Transitions, src: Enum, dst: Enum) -> bool:
    """Return ``True`` if an order can move from ``src`` to ``dst`` in one step."""

    return dst in transitions.get(src, {}).values()


OrderT = TypeVar("OrderT")


def advance(order: OrderT, transitions: Transitions, operation: str) -> OrderT:
    """Return a copy of ``order`` moved along ``operation``."""

    return replace(order, status=next_status(transitions, order.status, operation))
