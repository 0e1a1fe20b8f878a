"""Repository interfaces for order aggregates, one store per channel."""

from abc import ABC, abstractmethod


class OrderRepo(ABC):
    """Contract for order persistence.

    ``save`` is a compare-and-set on ``order.version``: it stores the order
    only if the stored version still equals the one the caller loaded (``0``
    for a new order) and returns the order with the version incremented.
    A stale save raises :class:`~ordering.app.domain.ConcurrentUpdateError`.
    """

    @abstractmethod
    def save(self, order):
        """Persist ``order`` and return the stored aggregate."""
        raise NotImplementedError

    @abstractmethod
    def find_by_id(self, order_id):
        """Return the order for ``order_id`` or ``None``."""
        raise NotImplementedError

    @abstractmethod
    def find_all(self):
        """Return all orders held by this store."""
        raise NotImplementedError


class EatInOrderRepo(OrderRepo):
    """Eat-in store, which also answers the sibling query for a table."""

    @abstractmethod
    def exists_by_table_and_status_not(self, table_id, status):
        """Return ``True`` if any order on ``table_id`` is not in ``status``."""
        raise NotImplementedError


class TakeoutOrderRepo(OrderRepo):
    """Takeout order store."""


class DeliveryOrderRepo(OrderRepo):
    """Delivery order store."""
