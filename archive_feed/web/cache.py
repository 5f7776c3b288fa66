"""In-memory page cache for rendered responses.

Entries are keyed by request path and expire after a fixed lifetime. The
cache is advisory: nothing is persisted and there is no invalidation hook.
"""
from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from threading import Lock
from typing import Callable, Dict, Optional

logger = logging.getLogger(__name__)

DEFAULT_TTL_SECONDS = 32 * 3600


@dataclass(frozen=True)
class CachedPage:
    status_code: int
    media_type: str
    body: str


class _CacheEntry:
    def __init__(self, page: CachedPage, expires_at: float) -> None:
        self.page = page
        self.expires_at = expires_at


class PageCache:
    """Thread-safe TTL store of rendered pages."""

    def __init__(self, ttl_seconds: float = DEFAULT_TTL_SECONDS, clock: Callable[[], float] = time.monotonic) -> None:
        self.ttl_seconds = ttl_seconds
        self.clock = clock
        self.data: Dict[str, _CacheEntry] = {}
        self.lock = Lock()

    def get(self, key: str) -> Optional[CachedPage]:
        with self.lock:
            entry = self.data.get(key)
            if entry is None:
                return None
            if self.clock() < entry.expires_at:
                return entry.page
            self.data.pop(key, None)
            logger.debug("Cache entry expired: %s", key)
            return None

    def set(self, key: str, page: CachedPage) -> None:
        """Store ``page`` and drop every entry that has already expired."""
        with self.lock:
            now = self.clock()
            expired = [k for k, e in self.data.items() if e.expires_at <= now]
            for k in expired:
                del self.data[k]
            if expired:
                logger.debug("Evicted %d expired cache entries", len(expired))
            self.data[key] = _CacheEntry(page, now + self.ttl_seconds)

    def clear(self) -> None:
        with self.lock:
            self.data.clear()

    def __len__(self) -> int:
        with self.lock:
            return len(self.data)
