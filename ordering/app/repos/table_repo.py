"""Repository interface for dining tables."""

from abc import ABC, abstractmethod


class TableRepo(ABC):
    """Contract for reading and updating table occupancy."""

    @abstractmethod
    def find_by_id(self, table_id):
        """Return the table for ``table_id`` or ``None``."""
        raise NotImplementedError

    @abstractmethod
    def save(self, table):
        """Persist ``table`` and return the stored value."""
        raise NotImplementedError
