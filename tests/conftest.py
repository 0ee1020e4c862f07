"""
Shared fixtures: a stub origin and an isolated cache gateway.
"""
from typing import Dict, List, Union

import pytest

from app.cache import CacheGateway, InMemoryCacheStore
from app.errors import ConfigurationError, UpstreamError


class StubOrigin:
    """Serves canned bodies by URL and records every fetch."""

    def __init__(self, responses: Dict[str, Union[bytes, Exception]] = None):
        self.responses = dict(responses or {})
        self.fetches: List[str] = []

    def fetch(self, url: str, setting_name: str = "origin URL") -> bytes:
        if not url:
            raise ConfigurationError(f"{setting_name} is not configured in environment variables.")
        self.fetches.append(url)
        result = self.responses.get(url)
        if result is None:
            raise UpstreamError(url, reason="Not Found", status_code=404)
        if isinstance(result, Exception):
            raise result
        return result

    def fetch_count(self, url: str) -> int:
        return self.fetches.count(url)


@pytest.fixture
def stub_origin():
    return StubOrigin()


@pytest.fixture
def gateway():
    gw = CacheGateway(InMemoryCacheStore())
    yield gw
    gw.drain(timeout=5.0)
    gw.shutdown()
