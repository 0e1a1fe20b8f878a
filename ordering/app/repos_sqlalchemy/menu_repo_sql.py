"""SQLAlchemy implementation of the menu lookup."""

from __future__ import annotations

from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.orm import sessionmaker

from ..domain import Menu
from ..models import MenuItem
from ..repos.menu_repo import MenuRepo


def _to_domain(item: MenuItem) -> Menu:
    return Menu(id=item.id, name=item.name, price=item.price, displayed=item.displayed)


class MenuRepoSQL(MenuRepo):
    """Concrete MenuRepo reading the ``menus`` table."""

    def __init__(self, session_factory: sessionmaker) -> None:
        self._session_factory = session_factory

    def save(self, menu: Menu) -> Menu:
        """Insert or update ``menu``; used to seed the catalog."""
        with self._session_factory() as session, session.begin():
            session.merge(
                MenuItem(
                    id=menu.id,
                    name=menu.name,
                    price=menu.price,
                    displayed=menu.displayed,
                )
            )
        return menu

    def find_by_id(self, menu_id) -> Optional[Menu]:
        with self._session_factory() as session:
            item = session.get(MenuItem, menu_id)
            return _to_domain(item) if item is not None else None

    def find_all_by_ids(self, menu_ids) -> List[Menu]:
        ids = [mid for mid in menu_ids if mid is not None]
        if not ids:
            return []
        with self._session_factory() as session:
            result = session.scalars(select(MenuItem).where(MenuItem.id.in_(ids)))
            return [_to_domain(item) for item in result.all()]
