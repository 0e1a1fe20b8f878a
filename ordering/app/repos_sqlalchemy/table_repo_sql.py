"""SQLAlchemy implementation of the table registry."""

from __future__ import annotations

from typing import Optional

from sqlalchemy.orm import sessionmaker

from ..domain import RestaurantTable
from ..models import DiningTable
from ..repos.table_repo import TableRepo


class TableRepoSQL(TableRepo):
    """Concrete TableRepo reading and writing ``restaurant_tables``."""

    def __init__(self, session_factory: sessionmaker) -> None:
        self._session_factory = session_factory

    def find_by_id(self, table_id) -> Optional[RestaurantTable]:
        with self._session_factory() as session:
            row = session.get(DiningTable, table_id)
            if row is None:
                return None
            return RestaurantTable(
                id=row.id,
                name=row.name,
                occupied=row.occupied,
                guest_count=row.guest_count,
            )

    def save(self, table: RestaurantTable) -> RestaurantTable:
        with self._session_factory() as session, session.begin():
            session.merge(
                DiningTable(
                    id=table.id,
                    name=table.name,
                    occupied=table.occupied,
                    guest_count=table.guest_count,
                )
            )
        return table
