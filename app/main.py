"""
Channel Feed Proxy - Main FastAPI Application
Rewrites the origin channel feed and passes the live list through, with
route-specific caching.
"""
import logging
import threading
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import Depends, FastAPI, Request
from fastapi.responses import PlainTextResponse, Response
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.cache import (
    CachedResponse,
    CacheGateway,
    CacheSource,
    RouteCategory,
    close_cache_gateway,
    get_cache_gateway,
)
from app.errors import FeedProxyError
from app.feed import FeedPipeline
from app.origin_client import OriginClient
from config.settings import Settings, settings

logging.basicConfig(level=getattr(logging, settings.log_level.upper(), logging.INFO))
logger = logging.getLogger("main")

APP_VERSION = "v0.1.0"
APP_NAME = "Channel Feed Proxy"

LIVE_LIST_SETTING = "LIVETXT_URL"

_origin_client: Optional[OriginClient] = None
_origin_client_lock = threading.Lock()


def get_settings() -> Settings:
    return settings


def get_origin_client() -> OriginClient:
    """Get or create the shared origin client."""
    global _origin_client
    if _origin_client is None:
        with _origin_client_lock:
            if _origin_client is None:
                _origin_client = OriginClient(timeout=settings.upstream_timeout_seconds)
    return _origin_client


@asynccontextmanager
async def lifespan(app: FastAPI):
    global _origin_client
    yield
    close_cache_gateway()
    with _origin_client_lock:
        client, _origin_client = _origin_client, None
    if client is not None:
        client.close()


app = FastAPI(
    title=APP_NAME,
    description="Channel feed rewriting proxy with cached live list passthrough",
    version=APP_VERSION,
    lifespan=lifespan,
    redirect_slashes=False,
    # Only the two proxy routes are served
    docs_url=None,
    redoc_url=None,
    openapi_url=None,
)


def _render(cached: CachedResponse, source: CacheSource) -> Response:
    return Response(
        content=cached.body,
        media_type=cached.media_type,
        headers={
            "Cache-Control": cached.cache_control,
            "X-Cache-Source": source.value,
        },
    )


@app.exception_handler(StarletteHTTPException)
async def not_found_handler(request: Request, exc: StarletteHTTPException):
    """Unknown paths and unsupported methods are plain-text 404s."""
    if exc.status_code in (404, 405):
        return PlainTextResponse("Not Found", status_code=404)
    return PlainTextResponse(str(exc.detail), status_code=exc.status_code)


@app.api_route("/live.txt", methods=["GET", "HEAD"])
def live_list(
    request: Request,
    config: Settings = Depends(get_settings),
    origin: OriginClient = Depends(get_origin_client),
    gateway: CacheGateway = Depends(get_cache_gateway),
):
    """Origin live list, cached for an hour."""
    cache_key = str(request.url)

    def render() -> bytes:
        return origin.fetch(config.livetxt_url, setting_name=LIVE_LIST_SETTING)

    try:
        cached, source = gateway.serve(cache_key, render, RouteCategory.LIVE_LIST)
    except FeedProxyError as e:
        logger.error(f"Error fetching live.txt [{e.stage}]: {e}")
        return PlainTextResponse(
            f"Internal Server Error fetching live.txt ({e.stage}): {e}",
            status_code=500,
        )
    except Exception as e:
        logger.error(f"Unexpected error serving live.txt: {e}", exc_info=True)
        return PlainTextResponse(f"Internal Server Error fetching live.txt: {e}", status_code=500)

    return _render(cached, source)


@app.api_route("/", methods=["GET", "HEAD"])
def channel_feed(
    request: Request,
    config: Settings = Depends(get_settings),
    origin: OriginClient = Depends(get_origin_client),
    gateway: CacheGateway = Depends(get_cache_gateway),
):
    """
    Rewritten channel feed.

    Rules are re-read on every request. The store is only consulted when
    FEED_CACHE_ENABLED is set; otherwise the pipeline always runs and the
    response just carries the 30 minute freshness header.
    """
    cache_key = str(request.url)
    host = request.url.netloc
    pipeline = FeedPipeline.from_settings(config)

    def render() -> bytes:
        return pipeline.run(origin, host)

    try:
        cached, source = gateway.serve(
            cache_key,
            render,
            RouteCategory.FEED,
            use_store=config.feed_cache_enabled,
        )
    except FeedProxyError as e:
        logger.error(f"Error processing feed [{e.stage}]: {e}")
        return PlainTextResponse(f"Internal Server Error ({e.stage}): {e}", status_code=500)
    except Exception as e:
        logger.error(f"Unexpected error processing feed: {e}", exc_info=True)
        return PlainTextResponse(f"Internal Server Error: {e}", status_code=500)

    return _render(cached, source)
