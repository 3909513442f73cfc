"""
Short-lived request cache for in-flight and recent reads.

Maps a fully-resolved request URL to the future of its fetch. Concurrent
reads of the same URL share one request, and repeated reads inside the TTL
window are answered from the same future without touching the network.

Manifesto:
    A realtime client keeps one socket open and gets reads for free; a REST
    emulation pays one HTTP request per read. UI code written for the
    realtime client happily reads the same node many times in a burst, so
    a small, per-client coalescing layer keeps request volume sane while
    staleness stays bounded by a short TTL.

    - **Coalescing:** Same key while pending or recent → same future
    - **Fixed TTL:** Every entry is evicted ``ttl_seconds`` after creation
    - **Outcome-blind:** Failed fetches are cached for the TTL as well
    - **Per client:** One cache per client instance, created empty

Architecture:
    ::

        RequestCache(ttl_seconds=2.0)
            get_or_fetch(key, factory) → asyncio.Future
              ├── hit  → existing future (pending, resolved or failed)
              └── miss → loop.create_task(factory())
                         loop.call_later(ttl, evict, key)

        API: get(key) → future | None
             get_or_fetch(key, factory) → future
             delete(key)
             exists(key) → bool
             clear()
             size() → int

Examples:
    >>> cache = RequestCache(ttl_seconds=2.0)
    >>> future = cache.get_or_fetch(url, lambda: fetch_snapshot(url))
    >>> future is cache.get_or_fetch(url, lambda: fetch_snapshot(url))
    True

Guardrails:
    ❌ DON'T: Expect writes to invalidate entries (they don't)
    ✅ DO: Keep the TTL short; it is the only staleness bound

    ❌ DON'T: Expect eviction to cancel the request
    ✅ DO: Treat eviction as forgetting the future, nothing more

Tags:
    cache, request-coalescing, ttl, asyncio, firebase-rest

Doc-Types:
    - API Reference
    - Technical Design
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from typing import Any

from firebase_rest.core.logging import get_logger

logger = get_logger(__name__)

DEFAULT_TTL_SECONDS = 2.0


class RequestCache:
    """Per-client map of request URL → fetch future with fixed-TTL eviction.

    Entries are removed unconditionally once ``ttl_seconds`` have elapsed
    since they were created, whether the fetch succeeded, failed, or is
    still pending. Must be used from inside a running event loop.

    Attributes:
        ttl_seconds: Lifetime of each entry.
    """

    def __init__(self, *, ttl_seconds: float = DEFAULT_TTL_SECONDS):
        self._store: dict[str, tuple[asyncio.Future[Any], asyncio.TimerHandle]] = {}
        self.ttl_seconds = ttl_seconds

    def get(self, key: str) -> asyncio.Future[Any] | None:
        """Return the cached future for ``key``, or ``None``."""
        entry = self._store.get(key)
        return entry[0] if entry is not None else None

    def get_or_fetch(
        self,
        key: str,
        factory: Callable[[], Awaitable[Any]],
    ) -> asyncio.Future[Any]:
        """Return the future cached under ``key`` or start and cache a new one.

        Args:
            key: Fully-resolved request URL.
            factory: Zero-argument callable producing the fetch coroutine.
                Only called on a miss.
        """
        cached = self.get(key)
        if cached is not None:
            logger.debug("cache_hit", key=key)
            return cached

        loop = asyncio.get_running_loop()
        future = asyncio.ensure_future(factory())
        handle = loop.call_later(self.ttl_seconds, self._evict, key, future)
        self._store[key] = (future, handle)
        logger.debug("cache_miss", key=key, ttl_seconds=self.ttl_seconds)
        return future

    def _evict(self, key: str, future: asyncio.Future[Any]) -> None:
        entry = self._store.get(key)
        # Only drop the entry this timer was scheduled for
        if entry is not None and entry[0] is future:
            del self._store[key]
            logger.debug("cache_evicted", key=key)

    def delete(self, key: str) -> None:
        """Remove a key from the cache. No-op if the key does not exist."""
        entry = self._store.pop(key, None)
        if entry is not None:
            entry[1].cancel()

    def exists(self, key: str) -> bool:
        """Check if a key is currently cached."""
        return key in self._store

    def __contains__(self, key: object) -> bool:
        return key in self._store

    def clear(self) -> None:
        """Remove all keys and cancel their pending evictions."""
        for _, handle in self._store.values():
            handle.cancel()
        self._store.clear()

    def size(self) -> int:
        """Return current number of cached keys."""
        return len(self._store)


__all__ = [
    "DEFAULT_TTL_SECONDS",
    "RequestCache",
]
