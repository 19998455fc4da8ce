"""
In-process 2Q result cache.

Shared by every request handled by the process and guarded by a single
lock.  Values are never mutated after insertion and nothing survives a
restart.

Policy
------
* ``recent``   -- probationary FIFO.  Every new key enters here.
* ``frequent`` -- protected LRU.  A key referenced again while it sits in
  ``recent``, or re-inserted while still remembered by ``ghost``, moves here.
* ``ghost``    -- keys (no values) recently evicted from ``recent``.

A scan of one-off keys only churns ``recent`` and ``ghost``; ``frequent``
entries are evicted only when ``recent`` is within its share.

Complexity: O(1) per operation (``OrderedDict`` moves / pops).
"""

from __future__ import annotations

import logging
import threading
from collections import OrderedDict
from typing import Callable, Generic, Hashable, TypeVar

logger = logging.getLogger(__name__)

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")

RECENT_RATIO = 0.25
GHOST_RATIO = 0.5


class TwoQueueCache(Generic[K, V]):
    def __init__(self, capacity: int):
        if capacity < 1:
            raise ValueError(f"Cache capacity must be positive, got {capacity}")
        self.capacity = capacity
        self.recent_capacity = max(1, int(capacity * RECENT_RATIO))
        self.ghost_capacity = max(1, int(capacity * GHOST_RATIO))

        self._recent: OrderedDict[K, V] = OrderedDict()
        self._frequent: OrderedDict[K, V] = OrderedDict()
        self._ghost: OrderedDict[K, None] = OrderedDict()
        self._lock = threading.Lock()
        self.hits = 0
        self.misses = 0

    # ── Public API ────────────────────────────────────────────────────

    def get(self, key: K) -> V | None:
        with self._lock:
            return self._get(key)

    def insert(self, key: K, value: V) -> None:
        with self._lock:
            self._insert(key, value)

    def get_or_compute(self, key: K, compute: Callable[[], V]) -> V:
        """
        Return the cached value for *key*, computing and inserting it on a
        miss.  The whole lookup-compute-insert sequence runs under the lock,
        so concurrent callers never compute the same key twice.  If
        *compute* raises, nothing is inserted.
        """
        with self._lock:
            value = self._get(key)
            if value is not None:
                return value
            value = compute()
            self._insert(key, value)
            return value

    def clear(self) -> None:
        with self._lock:
            self._recent.clear()
            self._frequent.clear()
            self._ghost.clear()
            self.hits = self.misses = 0

    def stats(self) -> dict[str, int]:
        with self._lock:
            return {
                "capacity": self.capacity,
                "size": len(self._recent) + len(self._frequent),
                "recent": len(self._recent),
                "frequent": len(self._frequent),
                "ghost": len(self._ghost),
                "hits": self.hits,
                "misses": self.misses,
            }

    def __len__(self) -> int:
        with self._lock:
            return len(self._recent) + len(self._frequent)

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._recent or key in self._frequent

    # ── Internals (caller holds the lock) ─────────────────────────────

    def _get(self, key: K) -> V | None:
        if key in self._frequent:
            self._frequent.move_to_end(key)
            self.hits += 1
            return self._frequent[key]
        if key in self._recent:
            # Second reference while on probation: promote.
            value = self._recent.pop(key)
            self._frequent[key] = value
            self.hits += 1
            return value
        self.misses += 1
        return None

    def _insert(self, key: K, value: V) -> None:
        if key in self._frequent:
            self._frequent[key] = value
            self._frequent.move_to_end(key)
            return
        if key in self._recent:
            self._recent[key] = value
            return

        self._make_room()
        if key in self._ghost:
            del self._ghost[key]
            self._frequent[key] = value
            logger.debug("Cache ghost hit, %r admitted as frequent", key)
        else:
            self._recent[key] = value

    def _make_room(self) -> None:
        if len(self._recent) + len(self._frequent) < self.capacity:
            return
        if len(self._recent) >= self.recent_capacity or not self._frequent:
            key, _ = self._recent.popitem(last=False)
            self._ghost[key] = None
            if len(self._ghost) > self.ghost_capacity:
                self._ghost.popitem(last=False)
            logger.debug("Cache evicted probationary %r", key)
        else:
            key, _ = self._frequent.popitem(last=False)
            logger.debug("Cache evicted frequent %r", key)
