"""
Freshness window and content type for each route.
"""
from dataclasses import dataclass
from typing import Dict

from .core import RouteCategory


@dataclass(frozen=True)
class RoutePolicy:
    ttl_seconds: int
    media_type: str


ROUTE_POLICIES: Dict[RouteCategory, RoutePolicy] = {
    RouteCategory.LIVE_LIST: RoutePolicy(
        ttl_seconds=3600,         # 1 hour
        media_type="text/plain; charset=utf-8",
    ),
    RouteCategory.FEED: RoutePolicy(
        ttl_seconds=1800,         # 30 minutes
        media_type="application/json; charset=utf-8",
    ),
}


def get_policy(category: RouteCategory) -> RoutePolicy:
    """Get the caching policy for a route category."""
    return ROUTE_POLICIES[category]