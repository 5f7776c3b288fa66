"""FastAPI application serving podcast feeds at GET /get/{name}.

The route handler is synchronous so FastAPI runs the blocking upstream
request in its worker thread pool.
"""
from __future__ import annotations

import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse, Response

from archive_feed import __version__
from archive_feed.config import Config
from archive_feed.services import feed as feed_svc
from archive_feed.services import metadata as metadata_svc
from archive_feed.services.errors import BuildError, DecodeError, NetworkError
from .cache import CachedPage, PageCache

logger = logging.getLogger(__name__)

RSS_MEDIA_TYPE = "application/rss+xml"


def _bad_gateway(stage: str, error: Exception) -> Response:
    return PlainTextResponse(f"error while {stage}: {error}", status_code=502)


def create_app(config: Optional[Config] = None, page_cache: Optional[PageCache] = None) -> FastAPI:
    """Build the application.

    ``page_cache`` defaults to a fresh in-memory cache using the configured
    lifetime, or no cache at all when caching is disabled.
    """
    config = config or Config()
    if page_cache is None and config.cache_enabled:
        page_cache = PageCache(ttl_seconds=config.cache_ttl_seconds)

    app = FastAPI(title="archive-podcast-feed", version=__version__)
    app.state.config = config
    app.state.page_cache = page_cache

    @app.get("/get/{name}")
    def get_feed(name: str, request: Request) -> Response:
        key = request.url.path
        if page_cache is not None:
            cached = page_cache.get(key)
            if cached is not None:
                logger.debug("Serving %s from cache", key)
                return Response(content=cached.body, status_code=cached.status_code, media_type=cached.media_type)

        try:
            item = metadata_svc.get_item(
                name,
                base_url=config.get("metadata_url") or metadata_svc.DEFAULT_METADATA_URL,
                timeout=config.get("request_timeout"),
                user_agent=config.get("user_agent") or metadata_svc.DEFAULT_USER_AGENT,
                verify_tls=config.get("verify_tls", True),
            )
        except (NetworkError, DecodeError) as e:
            logger.warning("Getting data for %s failed: %s", name, e)
            return _bad_gateway("getting data", e)

        try:
            reply = feed_svc.build_feed(item, item_url=config.get("item_url") or feed_svc.DEFAULT_ITEM_URL)
        except BuildError as e:
            logger.warning("Creating rss feed for %s failed: %s", name, e)
            return _bad_gateway("creating rss feed", e)

        if page_cache is not None:
            page_cache.set(key, CachedPage(status_code=200, media_type=RSS_MEDIA_TYPE, body=reply))
        return Response(content=reply, media_type=RSS_MEDIA_TYPE)

    return app
