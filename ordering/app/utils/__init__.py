"""Small shared utilities."""

from .keyed_lock import KeyedLock

__all__ = ["KeyedLock"]
