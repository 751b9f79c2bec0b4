"""Short-lived in-memory cache for normalized weather lookups."""

from __future__ import annotations

import math
import time
from collections.abc import Callable
from typing import Any

from cachetools import TTLCache
from prometheus_client import Counter, Gauge

from weather_pwa.config import Settings

# Metrics
cache_hits = Counter("cache_hits_total", "Total cache hits")
cache_misses = Counter("cache_misses_total", "Total cache misses")
cache_size_gauge = Gauge("cache_size", "Current number of cache entries")


class CacheService:
    """Key/value store whose entries expire ``cache_ttl_seconds`` after insertion.

    An entry is fresh while ``now - inserted < ttl``. Expiry is only checked
    when the cache is read; there is no background sweeper.
    """

    def __init__(
        self,
        settings: Settings,
        timer: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize cache with settings and an optional clock."""
        maxsize = settings.cache_max_size if settings.cache_max_size is not None else math.inf
        self._cache: TTLCache[str, Any] = TTLCache(
            maxsize=maxsize,
            ttl=settings.cache_ttl_seconds,
            timer=timer,
        )
        self._settings = settings

    def get(self, key: str) -> Any | None:
        """Return the cached value for ``key``, or None if absent or stale.

        Stale entries are dropped as part of the read.
        """
        self._cache.expire()
        cache_size_gauge.set(len(self._cache))

        value = self._cache.get(key)
        if value is not None:
            cache_hits.inc()
            return value
        cache_misses.inc()
        return None

    def set(self, key: str, value: Any) -> None:
        """Store ``value`` under ``key``, replacing any previous entry."""
        self._cache[key] = value
        cache_size_gauge.set(len(self._cache))

    def clear(self) -> None:
        """Clear all cache entries."""
        self._cache.clear()
        cache_size_gauge.set(0)

    @property
    def size(self) -> int:
        """Return current cache size."""
        return len(self._cache)

    def is_healthy(self) -> bool:
        """Check if cache is operational."""
        return self._cache is not None and isinstance(len(self._cache), int)
