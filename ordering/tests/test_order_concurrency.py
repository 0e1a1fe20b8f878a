import pathlib
import sys
import threading
from concurrent.futures import ThreadPoolExecutor
from dataclasses import replace

import pytest

sys.path.append(str(pathlib.Path(__file__).resolve().parents[2]))

from ordering.app.domain import (  # noqa: E402
    TAKEOUT_TRANSITIONS,
    ConcurrentUpdateError,
    DeliveryOrderStatus,
    EatInOrderStatus,
    OrderStateError,
    TakeoutOrderStatus,
    advance,
)
from ordering.app.providers import StubCourier  # noqa: E402
from ordering.app.repos_memory import InMemoryEatInOrderRepo, InMemoryTableRepo  # noqa: E402
from ordering.app.services import DeliveryOrderService, EatInOrderService  # noqa: E402
from ordering.app.utils import KeyedLock  # noqa: E402
from ordering.tests._seed import (  # noqa: E402
    delivery_order,
    eat_in_order,
    restaurant_table,
    takeout_order,
)


def test_stale_save_is_rejected(takeout_repo):
    stored = takeout_repo.save(takeout_order(TakeoutOrderStatus.WAITING))
    takeout_repo.save(advance(stored, TAKEOUT_TRANSITIONS, "accept"))

    with pytest.raises(ConcurrentUpdateError) as excinfo:
        takeout_repo.save(advance(stored, TAKEOUT_TRANSITIONS, "accept"))

    assert excinfo.value.to_dict()["code"] == "CONCURRENT_UPDATE"
    assert takeout_repo.find_by_id(stored.id).status == TakeoutOrderStatus.ACCEPTED


def test_save_bumps_version(takeout_repo):
    first = takeout_repo.save(takeout_order(TakeoutOrderStatus.WAITING))
    second = takeout_repo.save(advance(first, TAKEOUT_TRANSITIONS, "accept"))
    assert (first.version, second.version) == (1, 2)


def _race(operation, order_id, workers=8):
    barrier = threading.Barrier(workers)

    def attempt():
        barrier.wait()
        try:
            return operation(order_id)
        except OrderStateError as exc:
            return exc

    with ThreadPoolExecutor(max_workers=workers) as pool:
        return list(pool.map(lambda _: attempt(), range(workers)))


def test_concurrent_accepts_only_one_wins(takeout_service, takeout_repo):
    order_id = takeout_repo.save(takeout_order(TakeoutOrderStatus.WAITING)).id

    results = _race(takeout_service.accept, order_id)

    winners = [r for r in results if not isinstance(r, OrderStateError)]
    assert len(winners) == 1
    assert takeout_repo.find_by_id(order_id).status == TakeoutOrderStatus.ACCEPTED


def test_concurrent_delivery_accepts_only_one_wins(delivery_service, delivery_repo, courier):
    order_id = delivery_repo.save(delivery_order(DeliveryOrderStatus.WAITING)).id

    results = _race(delivery_service.accept, order_id)

    winners = [r for r in results if not isinstance(r, OrderStateError)]
    assert len(winners) == 1
    assert delivery_repo.find_by_id(order_id).status == DeliveryOrderStatus.ACCEPTED
    assert len(courier.requests) == 1


class _CountingTableRepo(InMemoryTableRepo):
    """Table registry that counts how often a table is reset."""

    def __init__(self):
        super().__init__()
        self.releases = 0

    def save(self, table):
        if not table.occupied:
            self.releases += 1
        return super().save(table)


def _complete_together(service, order_ids):
    barrier = threading.Barrier(len(order_ids))

    def complete(order_id):
        barrier.wait()
        return service.complete(order_id)

    with ThreadPoolExecutor(max_workers=len(order_ids)) as pool:
        return list(pool.map(complete, order_ids))


def test_concurrent_completions_release_table_once(eat_in_repo, menu_repo):
    tables = _CountingTableRepo()
    service = EatInOrderService(eat_in_repo, menu_repo, tables)
    table = tables.save(restaurant_table(occupied=True, guests=6))
    order_ids = [
        eat_in_repo.save(eat_in_order(EatInOrderStatus.SERVED, table)).id for _ in range(6)
    ]

    completed = _complete_together(service, order_ids)

    assert all(order.status == EatInOrderStatus.COMPLETED for order in completed)
    assert tables.releases == 1
    released = tables.find_by_id(table.id)
    assert released.occupied is False
    assert released.guest_count == 0


def test_open_order_keeps_table_under_concurrent_completions(eat_in_repo, menu_repo):
    tables = _CountingTableRepo()
    service = EatInOrderService(eat_in_repo, menu_repo, tables)
    table = tables.save(restaurant_table(occupied=True, guests=6))
    eat_in_repo.save(eat_in_order(EatInOrderStatus.ACCEPTED, table))
    order_ids = [
        eat_in_repo.save(eat_in_order(EatInOrderStatus.SERVED, table)).id for _ in range(5)
    ]

    _complete_together(service, order_ids)

    assert tables.releases == 0
    assert tables.find_by_id(table.id).occupied is True


class _HookedEatInRepo(InMemoryEatInOrderRepo):
    """Runs ``after_complete`` once, right after the next completed order is stored."""

    def __init__(self):
        super().__init__()
        self.after_complete = None

    def save(self, order):
        stored = super().save(order)
        hook = self.after_complete
        if hook is not None and stored.status == EatInOrderStatus.COMPLETED:
            self.after_complete = None
            hook(stored)
        return stored


def test_table_reseated_during_completion_is_kept(menu_repo, table_repo):
    orders = _HookedEatInRepo()
    service = EatInOrderService(orders, menu_repo, table_repo)
    table = table_repo.save(restaurant_table(occupied=True, guests=4))
    first = orders.save(eat_in_order(EatInOrderStatus.SERVED, table))
    second = orders.save(eat_in_order(EatInOrderStatus.SERVED, table))

    def finish_second_and_reseat(_):
        service.complete(second.id)
        freed = table_repo.find_by_id(table.id)
        assert freed.occupied is False
        table_repo.save(replace(freed, occupied=True, guest_count=2))

    orders.after_complete = finish_second_and_reseat
    service.complete(first.id)

    after = table_repo.find_by_id(table.id)
    assert after.occupied is True
    assert after.guest_count == 2
    assert orders.find_by_id(second.id).status == EatInOrderStatus.COMPLETED


class _ReentrantCourier(StubCourier):
    """Courier whose first request triggers another accept of the same order."""

    def __init__(self):
        super().__init__()
        self.service = None

    def request_delivery(self, order_id, price, address):
        super().request_delivery(order_id, price, address)
        if len(self.requests) == 1:
            self.service.accept(order_id)


def test_nested_accept_dispatches_once(delivery_repo, menu_repo):
    courier = _ReentrantCourier()
    service = DeliveryOrderService(delivery_repo, menu_repo, courier)
    courier.service = service
    order_id = delivery_repo.save(delivery_order(DeliveryOrderStatus.WAITING)).id

    with pytest.raises(OrderStateError):
        service.accept(order_id)

    assert len(courier.requests) == 1
    assert delivery_repo.find_by_id(order_id).status == DeliveryOrderStatus.WAITING


def test_keyed_lock_is_per_key():
    locks = KeyedLock()
    entered = threading.Event()

    def hold_other_key():
        with locks.hold("table-2"):
            entered.set()

    with locks.hold("table-1"):
        worker = threading.Thread(target=hold_other_key)
        worker.start()
        assert entered.wait(timeout=2)
        worker.join()


def test_keyed_lock_is_reentrant():
    locks = KeyedLock()
    with locks.hold("table-1"):
        with locks.hold("table-1"):
            pass
