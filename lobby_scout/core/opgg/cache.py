"""
Caching layer for OP.GG responses using a TTL-based in-memory cache.
"""

import json
import time
from typing import Any, Callable, Dict, Optional, Tuple

import structlog

logger = structlog.get_logger(__name__)


class TTLCache:
    """Simple TTL cache owned by a single transport.

    All access happens on one event loop, so no lock is taken; expiry is
    checked when an entry is read.
    """

    def __init__(
        self,
        maxsize: int = 1000,
        ttl: float = 300,
        clock: Callable[[], float] = time.monotonic,
    ):
        """
        Initialize TTL cache.

        Args:
            maxsize: Maximum number of entries
            ttl: Time to live in seconds
            clock: Monotonic time source, replaceable in tests
        """
        self.maxsize = maxsize
        self.ttl = ttl
        self.clock = clock
        self.cache: Dict[str, Tuple[Any, float]] = {}
        self._hits = 0
        self._misses = 0

    def get(self, key: str) -> Optional[Any]:
        """
        Get value from cache if not expired.

        Args:
            key: Cache key

        Returns:
            Cached value if exists and not expired, None otherwise
        """
        if key in self.cache:
            value, expiry = self.cache[key]
            if self.clock() < expiry:
                self._hits += 1
                logger.debug("Cache hit", key=key, hits=self._hits)
                return value
            # Remove expired entry
            del self.cache[key]
            logger.debug("Cache expired", key=key)
        self._misses += 1
        return None

    def set(self, key: str, value: Any) -> None:
        """
        Set value in cache with TTL.

        Args:
            key: Cache key
            value: Value to cache
        """
        # If cache is full, drop the oldest insertion
        if len(self.cache) >= self.maxsize and key not in self.cache:
            oldest_key = next(iter(self.cache))
            del self.cache[oldest_key]
            logger.debug("Cache eviction", key=oldest_key, reason="full")

        self.cache[key] = (value, self.clock() + self.ttl)
        logger.debug("Cache set", key=key, ttl=self.ttl)

    def clear(self) -> None:
        """Clear all entries from cache."""
        count = len(self.cache)
        self.cache.clear()
        self._hits = 0
        self._misses = 0
        logger.info("Cache cleared", entries_removed=count)

    def stats(self) -> Dict[str, Any]:
        """Get cache statistics."""
        total = self._hits + self._misses
        return {
            "size": len(self.cache),
            "maxsize": self.maxsize,
            "hits": self._hits,
            "misses": self._misses,
            "hit_rate": self._hits / total if total > 0 else 0.0,
        }

    def __len__(self) -> int:
        """Get number of entries in cache."""
        return len(self.cache)


def make_cache_key(endpoint: str, params: Dict[str, Any]) -> str:
    """Build the cache key for an endpoint call.

    Params are serialized with sorted keys so equal parameter objects share
    an entry regardless of insertion order.
    """
    return f"{endpoint}-{json.dumps(params, sort_keys=True, default=str)}"
