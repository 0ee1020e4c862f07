"""
Cache-then-origin orchestration with per-route TTL and background population.
"""
import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor, wait
from typing import Any, Callable, Dict, Optional, Set, Tuple

from .core import CachedResponse, CacheSource, RouteCategory
from .store import CacheStore, InMemoryCacheStore
from .ttl_policies import get_policy

logger = logging.getLogger("cache.manager")


class CacheGateway:
    """
    Serves rendered responses from a CacheStore, falling back to a render
    function on a miss.

    - Hits short-circuit the render function entirely
    - Misses are rendered, tagged with the route's TTL and returned right
      away; the store write happens on a background worker
    - Failed writes are logged and never retried
    - Render failures propagate; stale entries are never served
    """

    def __init__(
        self,
        store: CacheStore,
        max_populate_workers: int = 2,
    ):
        """
        Initialize the gateway.

        Args:
            store: Shared cache store
            max_populate_workers: Thread pool size for background cache writes
        """
        self._store = store
        self._populate_pool = ThreadPoolExecutor(
            max_workers=max_populate_workers,
            thread_name_prefix="cache-populate",
        )
        self._pending: Set[Future] = set()
        self._pending_lock = threading.Lock()

        self._stats_lock = threading.Lock()
        self._stats = {
            "hits": 0,
            "misses": 0,
            "bypassed": 0,
            "writes_failed": 0,
        }

    @property
    def store(self) -> CacheStore:
        return self._store

    def serve(
        self,
        cache_key: str,
        render_fn: Callable[[], bytes],
        category: RouteCategory,
        use_store: bool = True,
    ) -> Tuple[CachedResponse, CacheSource]:
        """
        Get a response from the store or render it from the origin.

        Args:
            cache_key: Full request URL
            render_fn: Produces the response body on a miss
            category: Route category, selects TTL and content type
            use_store: False to always render and skip the store

        Returns:
            (response, cache_source) tuple
        """
        policy = get_policy(category)

        if not use_store:
            self._count("bypassed")
            body = render_fn()
            return (
                CachedResponse(body=body, media_type=policy.media_type, ttl_seconds=policy.ttl_seconds),
                CacheSource.UPSTREAM,
            )

        cached = self._lookup(cache_key)
        if cached is not None:
            logger.info(f"CACHE HIT: {cache_key}")
            self._count("hits")
            return cached, CacheSource.FRESH

        logger.info(f"CACHE MISS: {cache_key}")
        self._count("misses")
        body = render_fn()
        response = CachedResponse(
            body=body,
            media_type=policy.media_type,
            ttl_seconds=policy.ttl_seconds,
        )
        self._populate_in_background(cache_key, response)
        return response, CacheSource.UPSTREAM

    def _count(self, stat: str) -> None:
        with self._stats_lock:
            self._stats[stat] += 1

    def _lookup(self, cache_key: str) -> Optional[CachedResponse]:
        """Read from the store. A failing store counts as a miss."""
        try:
            return self._store.get(cache_key)
        except Exception as e:
            logger.warning(f"Cache read failed: {cache_key} - {e}")
            return None

    def _populate_in_background(self, cache_key: str, response: CachedResponse) -> None:
        """Write to the store without blocking the response."""

        def do_populate():
            self._store.put(cache_key, response, response.ttl_seconds)
            logger.debug(f"Cache populated: {cache_key} [ttl={response.ttl_seconds}s]")

        future = self._populate_pool.submit(do_populate)
        with self._pending_lock:
            self._pending.add(future)
        future.add_done_callback(lambda f: self._on_populate_done(cache_key, f))

    def _on_populate_done(self, cache_key: str, future: Future) -> None:
        with self._pending_lock:
            self._pending.discard(future)
        error = future.exception()
        if error is not None:
            self._count("writes_failed")
            logger.warning(f"Cache write failed: {cache_key} - {error}")

    def drain(self, timeout: Optional[float] = None) -> bool:
        """
        Wait for pending cache writes.

        Returns:
            True if every pending write finished within the timeout
        """
        with self._pending_lock:
            pending = list(self._pending)
        if not pending:
            return True
        _, not_done = wait(pending, timeout=timeout)
        return not not_done

    def shutdown(self, wait_for_writes: bool = True) -> None:
        self._populate_pool.shutdown(wait=wait_for_writes)

    def get_stats(self) -> Dict[str, Any]:
        """Get gateway statistics."""
        with self._stats_lock:
            stats = dict(self._stats)
        total = stats["hits"] + stats["misses"]
        hit_rate = (stats["hits"] / total * 100) if total > 0 else 0
        with self._pending_lock:
            pending = len(self._pending)
        return {
            **stats,
            "hit_rate_percent": round(hit_rate, 1),
            "pending_writes": pending,
        }


# Default gateway, created on first use
_cache_gateway: Optional[CacheGateway] = None
_cache_gateway_lock = threading.Lock()


def get_cache_gateway() -> CacheGateway:
    """Get or create the default gateway backed by an in-memory store."""
    global _cache_gateway
    if _cache_gateway is None:
        with _cache_gateway_lock:
            if _cache_gateway is None:
                from config.settings import settings
                _cache_gateway = CacheGateway(
                    InMemoryCacheStore(max_entries=settings.cache_max_entries),
                    max_populate_workers=settings.cache_populate_workers,
                )
    return _cache_gateway


def close_cache_gateway(timeout: Optional[float] = 5.0) -> None:
    """Drain and stop the default gateway. The next get creates a new one."""
    global _cache_gateway
    with _cache_gateway_lock:
        gateway, _cache_gateway = _cache_gateway, None
    if gateway is None:
        return
    if not gateway.drain(timeout=timeout):
        logger.warning("Shutting down with cache writes still pending")
    gateway.shutdown()
