"""Service wiring.

``build_services`` assembles the three channel services from settings:
SQL stores when ``database_url`` is configured, in-memory stores otherwise,
and the courier provider selected by ``dispatch_provider``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from config import DispatchProvider, Settings, get_settings

from .db import create_session_factory
from .obs import configure_logging
from .providers import CourierClient, DeliveryDispatch, StubCourier
from .repos import (
    DeliveryOrderRepo,
    EatInOrderRepo,
    MenuRepo,
    TableRepo,
    TakeoutOrderRepo,
)
from .repos_memory import (
    InMemoryDeliveryOrderRepo,
    InMemoryEatInOrderRepo,
    InMemoryMenuRepo,
    InMemoryTableRepo,
    InMemoryTakeoutOrderRepo,
)
from .repos_sqlalchemy import (
    DeliveryOrderRepoSQL,
    EatInOrderRepoSQL,
    MenuRepoSQL,
    TableRepoSQL,
    TakeoutOrderRepoSQL,
)
from .services import DeliveryOrderService, EatInOrderService, TakeoutOrderService

logger = logging.getLogger("orders")


@dataclass
class OrderServices:
    """The three channel services plus the collaborators they share."""

    eat_in: EatInOrderService
    takeout: TakeoutOrderService
    delivery: DeliveryOrderService
    menu_repo: MenuRepo
    table_repo: TableRepo
    dispatch: DeliveryDispatch


def _build_dispatch(settings: Settings) -> DeliveryDispatch:
    if settings.dispatch_provider == DispatchProvider.HTTP:
        return CourierClient(
            settings.delivery_dispatch_url, timeout=settings.delivery_dispatch_timeout
        )
    return StubCourier()


def build_services(
    settings: Settings | None = None, *, setup_logging: bool = False
) -> OrderServices:
    """Return fully wired order services for ``settings``."""

    settings = settings or get_settings()
    if setup_logging:
        configure_logging(settings.log_level.upper())

    menu_repo: MenuRepo
    table_repo: TableRepo
    eat_in_repo: EatInOrderRepo
    takeout_repo: TakeoutOrderRepo
    delivery_repo: DeliveryOrderRepo
    if settings.database_url:
        session_factory, _ = create_session_factory(
            settings.database_url, settings.slow_query_ms
        )
        menu_repo = MenuRepoSQL(session_factory)
        table_repo = TableRepoSQL(session_factory)
        eat_in_repo = EatInOrderRepoSQL(session_factory)
        takeout_repo = TakeoutOrderRepoSQL(session_factory)
        delivery_repo = DeliveryOrderRepoSQL(session_factory)
        store = "sql"
    else:
        menu_repo = InMemoryMenuRepo()
        table_repo = InMemoryTableRepo()
        eat_in_repo = InMemoryEatInOrderRepo()
        takeout_repo = InMemoryTakeoutOrderRepo()
        delivery_repo = InMemoryDeliveryOrderRepo()
        store = "memory"

    dispatch = _build_dispatch(settings)
    logger.info(
        "order services ready store=%s dispatch=%s",
        store,
        settings.dispatch_provider.value,
    )
    return OrderServices(
        eat_in=EatInOrderService(eat_in_repo, menu_repo, table_repo),
        takeout=TakeoutOrderService(takeout_repo, menu_repo),
        delivery=DeliveryOrderService(delivery_repo, menu_repo, dispatch),
        menu_repo=menu_repo,
        table_repo=table_repo,
        dispatch=dispatch,
    )
