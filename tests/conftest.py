"""Shared test fixtures for debridscan test suite."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable
from unittest.mock import AsyncMock

import pytest

from debridscan.infrastructure.document.html_document import HtmlDocument
from debridscan.infrastructure.preferences.memory import InMemoryPreferenceStore

HOSTER_PATTERNS = ["/host-a\\.example/", "/host-b\\.example/"]

# ---------------------------------------------------------------------------
# Virtual clock
# ---------------------------------------------------------------------------


@dataclass
class _FakeTimer:
    when: float
    callback: Callable[[], None]
    cancelled: bool = False

    def cancel(self) -> None:
        self.cancelled = True


class FakeClock:
    """Monotonic clock plus ``call_later`` driven by :meth:`advance`."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start
        self._timers: list[_FakeTimer] = []

    def __call__(self) -> float:
        return self.now

    @property
    def pending(self) -> int:
        return sum(1 for t in self._timers if not t.cancelled)

    def call_later(self, delay: float, callback: Callable[[], None]) -> _FakeTimer:
        timer = _FakeTimer(when=self.now + delay, callback=callback)
        self._timers.append(timer)
        return timer

    def advance(self, seconds: float) -> None:
        target = self.now + seconds
        while True:
            due = [t for t in self._timers if not t.cancelled and t.when <= target]
            if not due:
                break
            timer = min(due, key=lambda t: t.when)
            self._timers.remove(timer)
            self.now = timer.when
            timer.callback()
        self.now = target
        self._timers = [t for t in self._timers if not t.cancelled]


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


# ---------------------------------------------------------------------------
# Mock port fixtures
# ---------------------------------------------------------------------------


def _unrestrict(link: str) -> dict[str, str]:
    return {"link": link, "download": f"{link}?direct=1", "filename": "file.bin"}


@pytest.fixture()
def mock_client() -> AsyncMock:
    """Mock BackgroundClientPort that knows two hosters."""
    client = AsyncMock()
    client.get_hosts_regex = AsyncMock(return_value=list(HOSTER_PATTERNS))
    client.report_detected_links = AsyncMock(return_value=None)
    client.unrestrict_link = AsyncMock(side_effect=_unrestrict)
    return client


@pytest.fixture()
def preferences() -> InMemoryPreferenceStore:
    return InMemoryPreferenceStore()


# ---------------------------------------------------------------------------
# Document fixtures
# ---------------------------------------------------------------------------

EXAMPLE_PAGE = """
<html>
  <head><title>Thread</title></head>
  <body>
    <a href="https://host-a.example/file/1">mirror 1</a>
    <p>grab it: https://host-a.example/file/2.</p>
    <a href="magnet:?xt=abc">magnet</a>
  </body>
</html>
"""


@pytest.fixture()
def example_document() -> HtmlDocument:
    return HtmlDocument(EXAMPLE_PAGE, base_url="https://forum.example/thread/1")
