"""Metadata fetching and decoding services.

Split between network I/O (fetch_metadata) and pure decoding (decode_item) so
the decoder can be tested offline by supplying response bodies directly.
"""
from __future__ import annotations

import json
import logging
import ssl
import urllib.request
from urllib.parse import quote

from archive_feed.core import ArchiveItem
from .errors import DecodeError, NetworkError

logger = logging.getLogger(__name__)

DEFAULT_METADATA_URL = "https://archive.org/metadata/"
DEFAULT_TIMEOUT = 30
DEFAULT_USER_AGENT = "archive-podcast-feed/0.1.0"


def metadata_url(identifier: str, base_url: str = DEFAULT_METADATA_URL) -> str:
    """Return the metadata endpoint for ``identifier``."""
    return base_url.rstrip("/") + "/" + quote(identifier, safe="")


def _ssl_context(verify_tls: bool) -> ssl.SSLContext:
    ssl_context = ssl.create_default_context()
    if not verify_tls:
        ssl_context.check_hostname = False
        ssl_context.verify_mode = ssl.CERT_NONE
    return ssl_context


def fetch_metadata(
    identifier: str,
    base_url: str = DEFAULT_METADATA_URL,
    timeout: float = DEFAULT_TIMEOUT,
    user_agent: str = DEFAULT_USER_AGENT,
    verify_tls: bool = True,
) -> bytes:
    """Fetch the raw metadata document for ``identifier``.

    Returns the undecoded response body. Raises ``NetworkError`` when the
    request fails, including HTTP error statuses and timeouts.
    """
    url = metadata_url(identifier, base_url)
    logger.info("Fetching metadata: %s", url)

    try:
        request = urllib.request.Request(url, headers={"User-Agent": user_agent})
        with urllib.request.urlopen(request, context=_ssl_context(verify_tls), timeout=timeout) as response:
            body = response.read()
            logger.debug("Fetched metadata for %s (%d bytes)", identifier, len(body))
            return body
    except Exception as e:
        logger.error("Failed to fetch metadata from %s: %s", url, e)
        raise NetworkError(str(e)) from e


def decode_item(body: bytes) -> ArchiveItem:
    """Decode a metadata response body into an ``ArchiveItem``.

    Raises ``DecodeError`` if the body is not JSON or does not have the
    layout of an item document.
    """
    try:
        return ArchiveItem.from_dict(json.loads(body))
    except ValueError as e:
        logger.error("Failed to decode metadata: %s", e)
        raise DecodeError(str(e)) from e


def get_item(
    identifier: str,
    base_url: str = DEFAULT_METADATA_URL,
    timeout: float = DEFAULT_TIMEOUT,
    user_agent: str = DEFAULT_USER_AGENT,
    verify_tls: bool = True,
) -> ArchiveItem:
    """Fetch and decode an item, keeping only its original files."""
    body = fetch_metadata(
        identifier,
        base_url=base_url,
        timeout=timeout,
        user_agent=user_agent,
        verify_tls=verify_tls,
    )
    item = decode_item(body)
    total = len(item.files)
    item.only_originals()
    logger.debug("Item %s: %d of %d files are originals", identifier, len(item.files), total)
    return item
