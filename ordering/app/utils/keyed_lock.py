"""Per-key mutual exclusion for read-then-write sequences."""

from __future__ import annotations

import threading
from collections import defaultdict
from contextlib import contextmanager
from typing import DefaultDict, Hashable, Iterator


class KeyedLock:
    """Hand out one re-entrant lock per key.

    Locks are created on first use and kept for the lifetime of the registry;
    the key space (dining tables) is small and bounded.
    """

    def __init__(self) -> None:
        self._guard = threading.Lock()
        self._locks: DefaultDict[Hashable, threading.RLock] = defaultdict(threading.RLock)

    @contextmanager
    def hold(self, key: Hashable) -> Iterator[None]:
        """Hold the lock for ``key`` for the duration of the block."""
        with self._guard:
            lock = self._locks[key]
        with lock:
            yield
