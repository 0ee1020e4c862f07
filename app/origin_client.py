"""
HTTP client for the origin feed and live list.
No retries: upstream failures are surfaced to the route handler.
"""
import logging
from typing import Optional

import requests

from app.errors import ConfigurationError, UpstreamError

logger = logging.getLogger("origin_client")


class OriginClient:
    """Fetches raw bytes from a configured origin URL."""

    def __init__(
        self,
        timeout: float = 30.0,
        session: Optional[requests.Session] = None,
    ):
        """
        Args:
            timeout: Seconds before an origin request is abandoned
            session: Optional requests session for connection pooling
        """
        self._timeout = timeout
        self._session = session or requests.Session()

    def fetch(self, url: str, setting_name: str = "origin URL") -> bytes:
        """
        GET the URL and return the response body.

        Args:
            url: Origin URL
            setting_name: Name of the setting the URL came from, used in errors

        Raises:
            ConfigurationError: if url is empty
            UpstreamError: on transport failure or non-2xx status
        """
        if not url:
            raise ConfigurationError(
                f"{setting_name} is not configured in environment variables."
            )

        try:
            response = self._session.get(url, timeout=self._timeout)
        except requests.RequestException as e:
            logger.error(f"Origin request failed: {url} - {e}")
            raise UpstreamError(url, reason=str(e)) from e

        if not 200 <= response.status_code < 300:
            logger.error(f"Origin returned {response.status_code}: {url}")
            raise UpstreamError(
                url,
                reason=response.reason or "",
                status_code=response.status_code,
            )

        logger.debug(f"Fetched {len(response.content)} bytes from {url}")
        return response.content

    def close(self) -> None:
        self._session.close()
