"""
Bounded in-memory caches for the formatting and title-parsing helpers.

Scoring functions never read these caches. They exist so repeated
formatting of the same tracks stays cheap, and they are cleared wholesale
by a CacheSweeper owned by the service instance.

Usage:
    from encore.cache import LRUCache, CacheSweeper

    titles = LRUCache(max_size=2000)
    sweeper = CacheSweeper([titles], interval=3600)
    sweeper.start()
"""

from __future__ import annotations

import logging
import threading
from collections import OrderedDict
from collections.abc import Hashable, Iterable
from typing import Any

logger = logging.getLogger(__name__)


class LRUCache:
    """
    Access-ordered cache with a fixed capacity.

    All operations, including clear(), hold the same lock so a background
    sweep can never interleave with a get/set in flight.
    """

    def __init__(self, max_size: int, name: str = "cache"):
        if max_size < 1:
            raise ValueError("max_size must be at least 1")
        self.max_size = max_size
        self.name = name
        self._data: OrderedDict[Hashable, Any] = OrderedDict()
        self._lock = threading.RLock()
        self.hits = 0
        self.misses = 0

    def get(self, key: Hashable, default: Any = None) -> Any:
        with self._lock:
            if key not in self._data:
                self.misses += 1
                return default
            # Move to end (most recently used)
            self._data.move_to_end(key)
            self.hits += 1
            return self._data[key]

    def set(self, key: Hashable, value: Any) -> None:
        with self._lock:
            if key in self._data:
                self._data.move_to_end(key)
            elif len(self._data) >= self.max_size:
                self._data.popitem(last=False)
            self._data[key] = value

    def delete(self, key: Hashable) -> bool:
        with self._lock:
            if key not in self._data:
                return False
            del self._data[key]
            return True

    def clear(self) -> None:
        with self._lock:
            self._data.clear()

    def __contains__(self, key: Hashable) -> bool:
        with self._lock:
            return key in self._data

    def __len__(self) -> int:
        with self._lock:
            return len(self._data)

    def get_stats(self) -> dict[str, Any]:
        with self._lock:
            return {
                "name": self.name,
                "size": len(self._data),
                "max_size": self.max_size,
                "hits": self.hits,
                "misses": self.misses,
            }


class CacheSweeper:
    """
    Periodically clears a set of caches on a daemon timer thread.

    The sweeper is explicit: nothing runs until start() is called, and
    stop() cancels the pending timer. sweep() can be called directly by
    callers that schedule clearing themselves.
    """

    def __init__(self, caches: Iterable[LRUCache] = (), interval: float = 3600.0):
        if interval <= 0:
            raise ValueError("interval must be positive")
        self.caches: list[LRUCache] = list(caches)
        self.interval = interval
        self._timer: threading.Timer | None = None
        self._lock = threading.Lock()
        self._running = False
        self.sweep_count = 0

    def register(self, cache: LRUCache) -> None:
        self.caches.append(cache)

    def sweep(self) -> int:
        """Clear every registered cache. Returns the number of entries dropped."""
        dropped = 0
        for cache in self.caches:
            dropped += len(cache)
            cache.clear()
        self.sweep_count += 1
        logger.info(f"Cleared {dropped} cached entries across {len(self.caches)} caches")
        return dropped

    @property
    def running(self) -> bool:
        return self._running

    def start(self) -> None:
        with self._lock:
            if self._running:
                return
            self._running = True
            self._schedule()
        logger.info(f"Cache sweeper started (interval={self.interval}s)")

    def stop(self) -> None:
        with self._lock:
            self._running = False
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None
        logger.info("Cache sweeper stopped")

    def _schedule(self) -> None:
        self._timer = threading.Timer(self.interval, self._tick)
        self._timer.daemon = True
        self._timer.start()

    def _tick(self) -> None:
        try:
            self.sweep()
        except Exception as e:
            logger.error(f"Cache sweep failed: {e}")
        with self._lock:
            if self._running:
                self._schedule()
