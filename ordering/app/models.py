"""Relational schema for the SQL-backed stores.

These models describe the tables used by :mod:`ordering.app.repos_sqlalchemy`.
They are kept isolated from any application wiring so that they can be used
in tests independently. All three channels share the ``orders`` table and are
told apart by the ``channel`` column.
"""

from __future__ import annotations

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Uuid,
)
from sqlalchemy.orm import declarative_base, relationship

Base = declarative_base()


class MenuItem(Base):
    """Menus with their current price and visibility."""

    __tablename__ = "menus"

    id = Column(Uuid, primary_key=True)
    name = Column(String, nullable=False)
    price = Column(Numeric(12, 2), nullable=False)
    displayed = Column(Boolean, nullable=False, default=True)


class DiningTable(Base):
    """Dining tables and their occupancy."""

    __tablename__ = "restaurant_tables"

    id = Column(Uuid, primary_key=True)
    name = Column(String, nullable=False)
    occupied = Column(Boolean, nullable=False, default=False)
    guest_count = Column(Integer, nullable=False, default=0)


class Order(Base):
    """Orders of every channel."""

    __tablename__ = "orders"

    id = Column(Uuid, primary_key=True)
    channel = Column(String, nullable=False, index=True)
    type = Column(String, nullable=False)
    status = Column(String, nullable=False)
    order_date_time = Column(DateTime(timezone=True), nullable=False)
    table_id = Column(Uuid, ForeignKey("restaurant_tables.id"), nullable=True, index=True)
    delivery_address = Column(String, nullable=True)
    version = Column(Integer, nullable=False, default=1)

    items = relationship(
        "OrderItem",
        order_by="OrderItem.seq",
        lazy="selectin",
        cascade="all, delete-orphan",
    )


class OrderItem(Base):
    """Line items belonging to an order with the price captured at order time."""

    __tablename__ = "order_items"

    id = Column(Integer, primary_key=True)
    order_id = Column(Uuid, ForeignKey("orders.id"), nullable=False)
    seq = Column(Integer, nullable=False)
    menu_id = Column(Uuid, ForeignKey("menus.id"), nullable=False)
    price_snapshot = Column(Numeric(12, 2), nullable=False)
    qty = Column(Integer, nullable=False)
