"""Observability helpers."""

from .logging import JsonFormatter, OrderContextFilter, configure_logging, order_context
from .queries import add_query_logger

__all__ = [
    "JsonFormatter",
    "OrderContextFilter",
    "configure_logging",
    "order_context",
    "add_query_logger",
]
