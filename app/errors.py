"""
Exception taxonomy for the feed proxy.

Every error names the pipeline stage it came from so route handlers can
report it in the 500 response body.
"""
from typing import Optional


class FeedProxyError(Exception):
    """Base class for failures that abort a proxied response."""
    stage = "pipeline"


class ConfigurationError(FeedProxyError):
    """Raised when a required origin URL is not configured."""
    stage = "configuration"


class UpstreamError(FeedProxyError):
    """Raised when an origin fetch fails or returns a non-2xx status."""
    stage = "origin fetch"

    def __init__(self, url: str, reason: str, status_code: Optional[int] = None):
        self.url = url
        self.reason = reason
        self.status_code = status_code
        if status_code is not None:
            message = f"Failed to fetch {url}: {status_code} {reason}"
        else:
            message = f"Failed to fetch {url}: {reason}"
        super().__init__(message)


class MalformedDocumentError(FeedProxyError):
    """Raised when the origin feed cannot be parsed into an object."""
    stage = "parse"
