"""
Core cache data structures.
"""
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum


class RouteCategory(Enum):
    """Routes with different freshness windows."""
    LIVE_LIST = "live_list"   # /live.txt passthrough, 1 hour
    FEED = "feed"             # rewritten channel feed, 30 minutes


class CacheSource(Enum):
    """Where a served response came from."""
    FRESH = "fresh"       # Within TTL, served from the store
    UPSTREAM = "upstream" # Rendered from the origin


@dataclass(frozen=True)
class CachedResponse:
    """A fully rendered response body with its content type and TTL."""
    body: bytes
    media_type: str
    ttl_seconds: int

    @property
    def cache_control(self) -> str:
        return f"public, max-age={self.ttl_seconds}"


@dataclass
class CacheEntry:
    """
    A stored response with the time it was written.
    """
    value: CachedResponse
    stored_at: datetime
    ttl_seconds: int

    @property
    def age_seconds(self) -> float:
        """Seconds since the entry was stored."""
        return (datetime.now(timezone.utc) - self.stored_at).total_seconds()

    @property
    def is_fresh(self) -> bool:
        """Check if the entry is within its TTL."""
        return self.age_seconds < self.ttl_seconds

    @property
    def is_expired(self) -> bool:
        return not self.is_fresh
