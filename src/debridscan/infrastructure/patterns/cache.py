"""In-memory TTL cache for the hoster pattern set."""

from __future__ import annotations

import asyncio
import time
from dataclasses import dataclass
from typing import Callable

import structlog

from debridscan.domain.ports.background import BackgroundClientPort
from debridscan.infrastructure.patterns.parser import Pattern, parse_patterns

log = structlog.get_logger(__name__)

DEFAULT_TTL_SECONDS = 300.0


@dataclass(frozen=True)
class _CacheEntry:
    patterns: list[Pattern]
    fetched_at: float


class HostPatternCache:
    """Fetches and memoizes the hoster patterns for ``ttl_seconds``.

    :meth:`get_patterns` never raises.  Any failure (transport error,
    error envelope, malformed payload) resolves to an empty list so
    scanning degrades to "no hoster matches" instead of failing.  Failed
    fetches are not cached; the next call tries again.

    Concurrent callers during a refresh share one fetch.
    """

    def __init__(
        self,
        client: BackgroundClientPort,
        *,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._client = client
        self._ttl = ttl_seconds
        self._clock = clock
        self._entry: _CacheEntry | None = None
        self._lock = asyncio.Lock()

    def _fresh(self, now: float) -> list[Pattern] | None:
        entry = self._entry
        if entry is not None and now - entry.fetched_at < self._ttl:
            return entry.patterns
        return None

    async def get_patterns(self) -> list[Pattern]:
        cached = self._fresh(self._clock())
        if cached is not None:
            log.debug("host_patterns_cache_hit", count=len(cached))
            return cached

        async with self._lock:
            now = self._clock()
            cached = self._fresh(now)
            if cached is not None:
                return cached
            return await self._refresh(now)

    async def _refresh(self, now: float) -> list[Pattern]:
        try:
            sources = await self._client.get_hosts_regex()
        except Exception as e:  # noqa: BLE001
            log.warning("host_patterns_fetch_failed", error=str(e))
            return []

        if not isinstance(sources, list):
            log.warning("host_patterns_fetch_failed", error="payload is not a list")
            return []

        patterns = parse_patterns(sources)
        self._entry = _CacheEntry(patterns=patterns, fetched_at=now)
        log.info(
            "host_patterns_fetched",
            received=len(sources),
            compiled=len(patterns),
        )
        return patterns

    def invalidate(self) -> None:
        """Drop the cached entry; the next call refetches."""
        self._entry = None
