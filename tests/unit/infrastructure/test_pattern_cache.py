"""Tests for the hoster pattern TTL cache."""

from __future__ import annotations

import asyncio
from unittest.mock import AsyncMock

import pytest

from debridscan.domain.exceptions import BackgroundError
from debridscan.infrastructure.patterns.cache import HostPatternCache
from tests.conftest import FakeClock


def _cache(client: AsyncMock, clock: FakeClock, ttl: float = 300.0) -> HostPatternCache:
    return HostPatternCache(client, ttl_seconds=ttl, clock=clock)


class TestHostPatternCache:
    @pytest.mark.asyncio
    async def test_first_call_fetches_and_compiles(
        self, mock_client: AsyncMock, clock: FakeClock
    ) -> None:
        patterns = await _cache(mock_client, clock).get_patterns()

        assert [p.pattern for p in patterns] == ["host-a\\.example", "host-b\\.example"]
        mock_client.get_hosts_regex.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_fresh_entry_served_without_fetch(
        self, mock_client: AsyncMock, clock: FakeClock
    ) -> None:
        cache = _cache(mock_client, clock)
        await cache.get_patterns()

        clock.now += 300.0 - 1
        await cache.get_patterns()

        assert mock_client.get_hosts_regex.await_count == 1

    @pytest.mark.asyncio
    async def test_stale_entry_refetched(
        self, mock_client: AsyncMock, clock: FakeClock
    ) -> None:
        cache = _cache(mock_client, clock)
        await cache.get_patterns()

        clock.now += 300.0 + 1
        await cache.get_patterns()

        assert mock_client.get_hosts_regex.await_count == 2

    @pytest.mark.asyncio
    async def test_fetch_error_fails_open(
        self, mock_client: AsyncMock, clock: FakeClock
    ) -> None:
        mock_client.get_hosts_regex.side_effect = BackgroundError("offline")

        assert await _cache(mock_client, clock).get_patterns() == []

    @pytest.mark.asyncio
    async def test_unexpected_error_fails_open(
        self, mock_client: AsyncMock, clock: FakeClock
    ) -> None:
        mock_client.get_hosts_regex.side_effect = RuntimeError("boom")

        assert await _cache(mock_client, clock).get_patterns() == []

    @pytest.mark.asyncio
    async def test_failure_is_not_cached(
        self, mock_client: AsyncMock, clock: FakeClock
    ) -> None:
        mock_client.get_hosts_regex.side_effect = [BackgroundError("offline"), ["/x/"]]
        cache = _cache(mock_client, clock)

        assert await cache.get_patterns() == []
        patterns = await cache.get_patterns()

        assert [p.pattern for p in patterns] == ["x"]
        assert mock_client.get_hosts_regex.await_count == 2

    @pytest.mark.asyncio
    async def test_malformed_payload_fails_open(
        self, mock_client: AsyncMock, clock: FakeClock
    ) -> None:
        mock_client.get_hosts_regex.return_value = "not-a-list"

        assert await _cache(mock_client, clock).get_patterns() == []

    @pytest.mark.asyncio
    async def test_uncompilable_pattern_yields_empty_set(
        self, mock_client: AsyncMock, clock: FakeClock
    ) -> None:
        mock_client.get_hosts_regex.return_value = ["/host-(a/"]

        assert await _cache(mock_client, clock).get_patterns() == []

    @pytest.mark.asyncio
    async def test_concurrent_refresh_is_coalesced(
        self, mock_client: AsyncMock, clock: FakeClock
    ) -> None:
        release = asyncio.Event()

        async def slow_fetch() -> list[str]:
            await release.wait()
            return ["/host-a\\.example/"]

        mock_client.get_hosts_regex.side_effect = slow_fetch
        cache = _cache(mock_client, clock)

        first = asyncio.create_task(cache.get_patterns())
        second = asyncio.create_task(cache.get_patterns())
        await asyncio.sleep(0)
        release.set()
        results = await asyncio.gather(first, second)

        assert mock_client.get_hosts_regex.await_count == 1
        assert results[0] is results[1]

    @pytest.mark.asyncio
    async def test_invalidate_forces_refetch(
        self, mock_client: AsyncMock, clock: FakeClock
    ) -> None:
        cache = _cache(mock_client, clock)
        await cache.get_patterns()

        cache.invalidate()
        await cache.get_patterns()

        assert mock_client.get_hosts_regex.await_count == 2
