"""Fixtures for the order lifecycle tests.

Services are wired to in-memory stores and a stub courier so that each test
starts from empty collaborators.
"""
import pathlib
import sys

import pytest

sys.path.append(str(pathlib.Path(__file__).resolve().parents[2]))

from ordering.app.providers import StubCourier  # noqa: E402
from ordering.app.repos_memory import (  # noqa: E402
    InMemoryDeliveryOrderRepo,
    InMemoryEatInOrderRepo,
    InMemoryMenuRepo,
    InMemoryTableRepo,
    InMemoryTakeoutOrderRepo,
)
from ordering.app.services import (  # noqa: E402
    DeliveryOrderService,
    EatInOrderService,
    TakeoutOrderService,
)


@pytest.fixture
def menu_repo():
    return InMemoryMenuRepo()


@pytest.fixture
def table_repo():
    return InMemoryTableRepo()


@pytest.fixture
def eat_in_repo():
    return InMemoryEatInOrderRepo()


@pytest.fixture
def takeout_repo():
    return InMemoryTakeoutOrderRepo()


@pytest.fixture
def delivery_repo():
    return InMemoryDeliveryOrderRepo()


@pytest.fixture
def courier():
    return StubCourier()


@pytest.fixture
def eat_in_service(eat_in_repo, menu_repo, table_repo):
    return EatInOrderService(eat_in_repo, menu_repo, table_repo)


@pytest.fixture
def takeout_service(takeout_repo, menu_repo):
    return TakeoutOrderService(takeout_repo, menu_repo)


@pytest.fixture
def delivery_service(delivery_repo, menu_repo, courier):
    return DeliveryOrderService(delivery_repo, menu_repo, courier)
