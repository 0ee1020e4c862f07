"""
Cache store interface and the in-process implementation.

The gateway only talks to a CacheStore, so an edge key-value store or a test
fake can stand in for the in-memory one.
"""
import logging
import threading
from datetime import datetime, timezone
from typing import Any, Dict, Optional, Protocol

from .core import CacheEntry, CachedResponse

logger = logging.getLogger("cache.store")


class CacheStore(Protocol):
    """
    Shared key-value store for rendered responses.

    get and put are independent atomic operations; there is no locking
    across them, and the last write for a key wins.
    """

    def get(self, key: str) -> Optional[CachedResponse]:
        """Return the fresh cached response for key, or None."""
        ...

    def put(self, key: str, value: CachedResponse, ttl_seconds: int) -> None:
        """Store value under key for ttl_seconds."""
        ...


class InMemoryCacheStore:
    """
    Thread-safe dict store.

    Expired entries are evicted when read and swept every sweep_interval
    writes. Past max_entries the oldest writes are evicted first.
    """

    def __init__(self, max_entries: int = 1024, sweep_interval: int = 64):
        self._cache: Dict[str, CacheEntry] = {}
        self._max_entries = max_entries
        self._sweep_interval = sweep_interval
        self._writes_since_sweep = 0
        self._cache_lock = threading.RLock()
        self._stats = {
            "hits": 0,
            "misses": 0,
            "expired": 0,
            "evicted": 0,
            "writes": 0,
        }

    def get(self, key: str) -> Optional[CachedResponse]:
        with self._cache_lock:
            entry = self._cache.get(key)
            if entry is None:
                self._stats["misses"] += 1
                return None
            if entry.is_expired:
                logger.debug(f"Evicting expired entry: {key} [age={entry.age_seconds:.1f}s]")
                del self._cache[key]
                self._stats["expired"] += 1
                self._stats["misses"] += 1
                return None
            self._stats["hits"] += 1
            return entry.value

    def put(self, key: str, value: CachedResponse, ttl_seconds: int) -> None:
        entry = CacheEntry(
            value=value,
            stored_at=datetime.now(timezone.utc),
            ttl_seconds=ttl_seconds,
        )
        with self._cache_lock:
            # Re-inserting moves the key to the end, keeping dict order = write order
            self._cache.pop(key, None)
            self._cache[key] = entry
            self._stats["writes"] += 1

            self._writes_since_sweep += 1
            if self._writes_since_sweep >= self._sweep_interval:
                self._writes_since_sweep = 0
                self._sweep_expired()

            while len(self._cache) > self._max_entries:
                oldest = next(iter(self._cache))
                del self._cache[oldest]
                self._stats["evicted"] += 1

    def _sweep_expired(self) -> int:
        """Drop every expired entry. Caller holds the lock."""
        expired = [k for k, entry in self._cache.items() if entry.is_expired]
        for key in expired:
            del self._cache[key]
        if expired:
            self._stats["expired"] += len(expired)
            logger.debug(f"Swept {len(expired)} expired entries")
        return len(expired)

    def invalidate(self, key: str) -> bool:
        """
        Invalidate a specific cache entry.

        Returns:
            True if entry was found and removed
        """
        with self._cache_lock:
            if key in self._cache:
                del self._cache[key]
                logger.info(f"Invalidated cache: {key}")
                return True
            return False

    def clear(self) -> int:
        """
        Clear all cache entries.

        Returns:
            Number of entries cleared
        """
        with self._cache_lock:
            count = len(self._cache)
            self._cache.clear()
            logger.info(f"Cleared {count} cache entries")
            return count

    def get_stats(self) -> Dict[str, Any]:
        with self._cache_lock:
            return {"entries": len(self._cache), **self._stats}
