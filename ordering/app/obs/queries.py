"""SQL timing for the order stores.

Every statement is timed; slow ones are logged as warnings and a small sample
of the rest at info level. Log lines name the store and the order bound by
:func:`order_context`, so a slow transition can be traced to its order.
"""

from __future__ import annotations

import hashlib
import logging
import random
import time

from sqlalchemy import event
from sqlalchemy.engine import Engine

from .logging import order_id_ctx

SAMPLE_RATE = 0.01
MAX_SQL_CHARS = 200

logger = logging.getLogger("obs")


def _shorten(statement: str) -> str:
    sql = " ".join(statement.split())
    if len(sql) > MAX_SQL_CHARS:
        sql = sql[: MAX_SQL_CHARS - 3] + "..."
    return sql


def _fingerprint(parameters) -> str:
    return hashlib.sha256(repr(parameters).encode()).hexdigest()[:8]


def add_query_logger(
    engine: Engine,
    store: str,
    slow_query_ms: int = 200,
    sample_rate: float = SAMPLE_RATE,
) -> None:
    """Attach statement timing to ``engine``, labelled with ``store``."""

    @event.listens_for(engine, "before_cursor_execute")
    def _start(conn, cursor, statement, parameters, context, executemany):  # type: ignore[no-untyped-def]
        context._order_query_started = time.perf_counter()

    @event.listens_for(engine, "after_cursor_execute")
    def _finish(conn, cursor, statement, parameters, context, executemany):  # type: ignore[no-untyped-def]
        elapsed_ms = (time.perf_counter() - context._order_query_started) * 1000
        slow = elapsed_ms > slow_query_ms
        if not slow and random.random() >= sample_rate:
            return
        logger.log(
            logging.WARNING if slow else logging.INFO,
            "%s query %dms store=%s order=%s sql=%s params=%s",
            "slow" if slow else "sampled",
            int(elapsed_ms),
            store,
            order_id_ctx.get(),
            _shorten(statement),
            _fingerprint(parameters),
        )
