"""In-process TTL cache with metrics support."""

import threading
import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, NamedTuple

from cachetools import TLRUCache

from account_store.domain.interfaces import ICache
from account_store.infrastructure.config import Settings
from account_store.infrastructure.logging.config import get_logger


logger = get_logger(__name__)


@dataclass
class CacheMetrics:
    """Cache performance metrics."""

    hits: int = 0
    misses: int = 0
    total_get_calls: int = 0
    total_set_calls: int = 0
    total_delete_calls: int = 0

    @property
    def hit_rate(self) -> float:
        """Calculate cache hit rate."""
        if self.total_get_calls == 0:
            return 0.0
        return (self.hits / self.total_get_calls) * 100

    def to_dict(self) -> dict[str, Any]:
        """Convert metrics to dictionary."""
        return {
            "hits": self.hits,
            "misses": self.misses,
            "total_get_calls": self.total_get_calls,
            "total_set_calls": self.total_set_calls,
            "total_delete_calls": self.total_delete_calls,
            "hit_rate_percent": round(self.hit_rate, 2),
        }


class _Entry(NamedTuple):
    value: Any
    ttl: float


def _time_to_use(_key: str, entry: _Entry, now: float) -> float:
    return now + entry.ttl


class MemoryCache(ICache):
    """Bounded in-memory cache with per-entry TTL and metrics.

    Features:
    - Fixed default TTL (5 minutes) with optional per-key override
    - Size bound with least-recently-used eviction
    - get/set/delete each run under one lock, so they are atomic with
      respect to each other
    - Performance metrics tracking

    The cache is never authoritative: entries expire on their own and a
    disabled cache answers every ``get`` with a miss.
    """

    def __init__(
        self,
        settings: Settings,
        timer: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize memory cache.

        Args:
            settings: Application settings (cache_enabled, cache_ttl, cache_max_size)
            timer: Clock used for expiry (monotonic seconds)
        """
        self._enabled = settings.cache_enabled
        self._default_ttl = settings.cache_ttl
        self._store: TLRUCache[str, _Entry] = TLRUCache(
            maxsize=settings.cache_max_size,
            ttu=_time_to_use,
            timer=timer,
        )
        self._lock = threading.RLock()
        self._metrics = CacheMetrics()

        if not self._enabled:
            logger.info("cache_disabled")

    @property
    def default_ttl(self) -> int:
        """TTL applied when ``set`` is called without one."""
        return self._default_ttl

    async def get(self, key: str) -> Any | None:
        """Get value from cache.

        Args:
            key: Cache key

        Returns:
            Cached value if found and not expired, None otherwise
        """
        if not self._enabled:
            return None

        with self._lock:
            self._metrics.total_get_calls += 1
            entry = self._store.get(key)
            if entry is None:
                self._metrics.misses += 1
                logger.debug("cache_miss", key=key)
                return None
            self._metrics.hits += 1

        logger.debug("cache_hit", key=key)
        return entry.value

    async def set(self, key: str, value: Any, ttl: int | None = None) -> bool:
        """Set value in cache.

        Args:
            key: Cache key
            value: Value to cache
            ttl: Time to live in seconds (default: configured cache TTL)

        Returns:
            True if stored, False if the cache is disabled
        """
        if not self._enabled:
            return False

        effective_ttl = ttl if ttl is not None else self._default_ttl
        with self._lock:
            self._metrics.total_set_calls += 1
            self._store[key] = _Entry(value, effective_ttl)

        logger.debug("cache_set", key=key, ttl=effective_ttl)
        return True

    async def delete(self, key: str) -> bool:
        """Delete value from cache.

        Args:
            key: Cache key

        Returns:
            True if deleted, False otherwise
        """
        if not self._enabled:
            return False

        with self._lock:
            self._metrics.total_delete_calls += 1
            removed = self._store.pop(key, None) is not None

        logger.debug("cache_delete", key=key, deleted=removed)
        return removed

    async def clear(self) -> None:
        """Drop every cached entry."""
        with self._lock:
            self._store.clear()
        logger.info("cache_cleared")

    def __len__(self) -> int:
        with self._lock:
            self._store.expire()
            return len(self._store)

    def get_metrics(self) -> dict[str, Any]:
        """Get current cache metrics.

        Returns:
            Dictionary containing cache performance metrics
        """
        return self._metrics.to_dict()

    def reset_metrics(self) -> None:
        """Reset cache metrics to zero."""
        self._metrics = CacheMetrics()
        logger.info("cache_metrics_reset")
