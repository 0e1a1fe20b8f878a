from __future__ import annotations

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from .models import Base
from .obs import add_query_logger


def create_session_factory(
    url: str, slow_query_ms: int = 200
) -> tuple[sessionmaker, Engine]:
    """Return a session factory and engine for ``url`` with the schema created."""

    connect_args = {"check_same_thread": False} if url.startswith("sqlite") else {}
    engine = create_engine(url, connect_args=connect_args)
    add_query_logger(engine, "orders", slow_query_ms)
    Base.metadata.create_all(bind=engine)
    session_factory = sessionmaker(bind=engine, autocommit=False, autoflush=False)
    return session_factory, engine


def create_test_session() -> tuple[sessionmaker, Engine]:
    """Return a session factory and engine for tests.

    The database uses an in-memory SQLite engine with a static pool so that
    multiple connections share the same data.
    """

    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    add_query_logger(engine, "test")
    Base.metadata.create_all(bind=engine)
    session_factory = sessionmaker(bind=engine, autocommit=False, autoflush=False)
    return session_factory, engine


__all__ = ["create_session_factory", "create_test_session"]
