"""Repository interface for menu lookups."""

from abc import ABC, abstractmethod


class MenuRepo(ABC):
    """Contract for resolving menus referenced by order line items."""

    @abstractmethod
    def find_by_id(self, menu_id):
        """Return the menu for ``menu_id`` or ``None``."""
        raise NotImplementedError

    @abstractmethod
    def find_all_by_ids(self, menu_ids):
        """Return every stored menu whose id is in ``menu_ids``.

        Each matching menu is returned once, so the result may be shorter
        than ``menu_ids``; callers compare the counts.
        """
        raise NotImplementedError
