"""Shared fixtures for integration tests.

These tests use real infrastructure components (HttpxBackgroundClient,
load_config) with mocked HTTP via respx.
"""

from __future__ import annotations

import httpx
import pytest
import respx

from debridscan.infrastructure.background.httpx_client import HttpxBackgroundClient

BACKGROUND_URL = "http://background.test"


@pytest.fixture()
async def http_client() -> httpx.AsyncClient:
    """Real httpx.AsyncClient for use with respx mocking."""
    async with httpx.AsyncClient() as client:
        yield client


@pytest.fixture()
def background(http_client: httpx.AsyncClient) -> HttpxBackgroundClient:
    return HttpxBackgroundClient(base_url=BACKGROUND_URL, http_client=http_client)


@pytest.fixture()
def respx_mock() -> respx.MockRouter:
    """Explicit respx mock router for request interception."""
    with respx.mock(assert_all_called=False) as router:
        yield router
