"""
Response caching with per-route TTL and background population.
"""
from .core import CacheEntry, CachedResponse, CacheSource, RouteCategory
from .ttl_policies import (
    ROUTE_POLICIES,
    RoutePolicy,
    get_policy,
)
from .store import CacheStore, InMemoryCacheStore
from .manager import CacheGateway, close_cache_gateway, get_cache_gateway

__all__ = [
    # Core types
    "CacheEntry",
    "CachedResponse",
    "CacheSource",
    "RouteCategory",
    # TTL policies
    "ROUTE_POLICIES",
    "RoutePolicy",
    "get_policy",
    # Stores
    "CacheStore",
    "InMemoryCacheStore",
    # Gateway
    "CacheGateway",
    "get_cache_gateway",
    "close_cache_gateway",
]
