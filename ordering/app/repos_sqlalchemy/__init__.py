"""SQLAlchemy-backed repository implementations.

Each repository is constructed with a ``sessionmaker`` and opens a short
session per call, so the stores can be shared between threads.
"""

from .menu_repo_sql import MenuRepoSQL
from .orders_repo_sql import (
    DeliveryOrderRepoSQL,
    EatInOrderRepoSQL,
    TakeoutOrderRepoSQL,
)
from .table_repo_sql import TableRepoSQL

__all__ = [
    "MenuRepoSQL",
    "TableRepoSQL",
    "EatInOrderRepoSQL",
    "TakeoutOrderRepoSQL",
    "DeliveryOrderRepoSQL",
]
