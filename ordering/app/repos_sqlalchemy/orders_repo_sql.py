"""SQLAlchemy-backed order stores.

Line items are written once, when the order is first saved, and carry the
menu price snapshotted at creation. Later saves only move ``status`` forward,
conditionally on the ``version`` the caller loaded:

    UPDATE orders SET status = :s, version = :v + 1
    WHERE id = :id AND channel = :channel AND version = :v

A zero row count means another writer got there first.
"""

from __future__ import annotations

from dataclasses import replace
from datetime import timezone
from typing import List

from sqlalchemy import exists, select, update
from sqlalchemy.orm import sessionmaker

from ..domain import (
    ConcurrentUpdateError,
    DeliveryOrder,
    DeliveryOrderStatus,
    EatInOrder,
    EatInOrderStatus,
    OrderLineItem,
    OrderType,
    TakeoutOrder,
    TakeoutOrderStatus,
)
from ..models import Order, OrderItem
from ..repos.orders_repo import DeliveryOrderRepo, EatInOrderRepo, TakeoutOrderRepo


def _line_items(row: Order) -> tuple[OrderLineItem, ...]:
    return tuple(
        OrderLineItem(menu_id=item.menu_id, price=item.price_snapshot, quantity=item.qty)
        for item in row.items
    )


def _order_date_time(row: Order):
    stamp = row.order_date_time
    # SQLite drops the offset on the way back.
    return stamp if stamp.tzinfo is not None else stamp.replace(tzinfo=timezone.utc)


class _OrderRepoSQL:
    """Shared persistence for one channel's rows in ``orders``."""

    channel: str = ""

    def __init__(self, session_factory: sessionmaker) -> None:
        self._session_factory = session_factory

    def _to_domain(self, row: Order):
        raise NotImplementedError

    def _channel_columns(self, order) -> dict:
        return {}

    def save(self, order):
        with self._session_factory() as session, session.begin():
            if order.version == 0:
                if session.get(Order, order.id) is not None:
                    raise ConcurrentUpdateError(f"order {order.id} already exists")
                session.add(
                    Order(
                        id=order.id,
                        channel=self.channel,
                        type=order.type.value,
                        status=order.status.value,
                        order_date_time=order.order_date_time,
                        version=1,
                        items=[
                            OrderItem(
                                seq=seq,
                                menu_id=item.menu_id,
                                price_snapshot=item.price,
                                qty=item.quantity,
                            )
                            for seq, item in enumerate(order.order_line_items)
                        ],
                        **self._channel_columns(order),
                    )
                )
            else:
                result = session.execute(
                    update(Order)
                    .where(
                        Order.id == order.id,
                        Order.channel == self.channel,
                        Order.version == order.version,
                    )
                    .values(status=order.status.value, version=order.version + 1)
                )
                if result.rowcount != 1:
                    raise ConcurrentUpdateError(
                        f"order {order.id} was modified concurrently",
                        {"expected": order.version},
                    )
        return replace(order, version=order.version + 1)

    def find_by_id(self, order_id):
        with self._session_factory() as session:
            row = session.scalar(
                select(Order).where(Order.id == order_id, Order.channel == self.channel)
            )
            return self._to_domain(row) if row is not None else None

    def find_all(self) -> List:
        with self._session_factory() as session:
            rows = session.scalars(select(Order).where(Order.channel == self.channel))
            return [self._to_domain(row) for row in rows.all()]


class EatInOrderRepoSQL(_OrderRepoSQL, EatInOrderRepo):
    """Eat-in order store."""

    channel = OrderType.EAT_IN.value

    def _to_domain(self, row: Order) -> EatInOrder:
        return EatInOrder(
            id=row.id,
            type=OrderType(row.type),
            status=EatInOrderStatus(row.status),
            order_date_time=_order_date_time(row),
            order_line_items=_line_items(row),
            table_id=row.table_id,
            version=row.version,
        )

    def _channel_columns(self, order: EatInOrder) -> dict:
        return {"table_id": order.table_id}

    def exists_by_table_and_status_not(self, table_id, status) -> bool:
        with self._session_factory() as session:
            return bool(
                session.scalar(
                    select(
                        exists().where(
                            Order.channel == self.channel,
                            Order.table_id == table_id,
                            Order.status != status.value,
                        )
                    )
                )
            )


class TakeoutOrderRepoSQL(_OrderRepoSQL, TakeoutOrderRepo):
    """Takeout order store."""

    channel = OrderType.TAKEOUT.value

    def _to_domain(self, row: Order) -> TakeoutOrder:
        return TakeoutOrder(
            id=row.id,
            type=OrderType(row.type),
            status=TakeoutOrderStatus(row.status),
            order_date_time=_order_date_time(row),
            order_line_items=_line_items(row),
            version=row.version,
        )


class DeliveryOrderRepoSQL(_OrderRepoSQL, DeliveryOrderRepo):
    """Delivery order store."""

    channel = OrderType.DELIVERY.value

    def _to_domain(self, row: Order) -> DeliveryOrder:
        return DeliveryOrder(
            id=row.id,
            type=OrderType(row.type),
            status=DeliveryOrderStatus(row.status),
            order_date_time=_order_date_time(row),
            order_line_items=_line_items(row),
            delivery_address=row.delivery_address,
            version=row.version,
        )

    def _channel_columns(self, order: DeliveryOrder) -> dict:
        return {"delivery_address": order.delivery_address}
