"""Debounced, preference-gated rescanning driven by document mutations.

States:

- ``idle``: nothing pending, no scan running.
- ``scan-pending``: the debounce timer is armed.
- ``scanning``: a scan cycle holds the reentrancy guard.

The watch subscription and the debounce timer are the only long-lived
resources.  Enabling creates the watch once; disabling releases it and
cancels the timer.  In-flight scans are never cancelled.  After
:meth:`ScanScheduler.shutdown` no queued work may enable again.

Link reports are fire-and-forget: they run as tracked tasks so that a
slow background service never delays a scan cycle, and shutdown still
drains them.
"""

from __future__ import annotations

import asyncio
import dataclasses
from enum import Enum
from typing import Any, Callable, Coroutine, Protocol

import structlog

from debridscan.application.auto_unrestrict import AutoUnrestrictOrchestrator
from debridscan.application.reporting import report_links
from debridscan.application.scan_engine import ScanEngine
from debridscan.domain.entities.links import DetectedLink, Preferences
from debridscan.domain.ports.background import BackgroundClientPort
from debridscan.domain.ports.document import DocumentPort, WatchHandle
from debridscan.domain.ports.preferences import PreferenceStorePort

log = structlog.get_logger(__name__)

DEFAULT_DEBOUNCE_SECONDS = 1.0


class TimerHandle(Protocol):
    def cancel(self) -> None: ...


CallLater = Callable[[float, Callable[[], None]], TimerHandle]


def _loop_call_later(delay: float, callback: Callable[[], None]) -> TimerHandle:
    return asyncio.get_running_loop().call_later(delay, callback)


class SchedulerState(str, Enum):
    IDLE = "idle"
    SCAN_PENDING = "scan-pending"
    SCANNING = "scanning"


class DebounceTimer:
    """Resettable one-shot timer.

    Every :meth:`trigger` cancels the armed timer and arms a new one, so
    a burst of triggers fires *callback* once, ``delay`` seconds after
    the last trigger.  *call_later* defaults to the running event loop
    and can be swapped for a virtual clock.
    """

    def __init__(
        self,
        delay: float,
        callback: Callable[[], None],
        *,
        call_later: CallLater | None = None,
    ) -> None:
        self._delay = delay
        self._callback = callback
        self._call_later = call_later or _loop_call_later
        self._handle: TimerHandle | None = None

    @property
    def armed(self) -> bool:
        return self._handle is not None

    def trigger(self) -> None:
        self.cancel()
        self._handle = self._call_later(self._delay, self._fire)

    def cancel(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def _fire(self) -> None:
        self._handle = None
        self._callback()


class ScanScheduler:
    """Owns the reentrancy guard, the debounce timer and the document watch."""

    def __init__(
        self,
        *,
        document: DocumentPort,
        engine: ScanEngine,
        orchestrator: AutoUnrestrictOrchestrator,
        client: BackgroundClientPort,
        preferences: PreferenceStorePort,
        debounce_seconds: float = DEFAULT_DEBOUNCE_SECONDS,
        call_later: CallLater | None = None,
    ) -> None:
        self._document = document
        self._engine = engine
        self._orchestrator = orchestrator
        self._client = client
        self._preferences = preferences
        self._timer = DebounceTimer(
            debounce_seconds, self._on_timer_fired, call_later=call_later
        )
        self._watch: WatchHandle | None = None
        self._is_scanning = False
        self._closed = False
        self._tasks: set[asyncio.Task[Any]] = set()

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    @property
    def state(self) -> SchedulerState:
        if self._is_scanning:
            return SchedulerState.SCANNING
        if self._timer.armed:
            return SchedulerState.SCAN_PENDING
        return SchedulerState.IDLE

    @property
    def watching(self) -> bool:
        return self._watch is not None

    @property
    def closed(self) -> bool:
        return self._closed

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def trigger_scan(self) -> None:
        """(Re)arm the debounce timer."""
        if self._closed:
            return
        self._timer.trigger()

    def submit_report(self, links: list[DetectedLink]) -> None:
        """Report a snapshot of *links* without waiting for delivery."""
        snapshot = [dataclasses.replace(link) for link in links]
        self._spawn(report_links(self._client, snapshot))

    async def perform_auto_scan(self) -> list[DetectedLink]:
        """Run one scan cycle unless another one is already running.

        Returns the links found, or an empty list when the cycle was
        skipped or failed.
        """
        if self._closed:
            log.debug("auto_scan_skipped", reason="closed")
            return []
        if self._is_scanning:
            log.debug("auto_scan_skipped", reason="already_scanning")
            return []
        self._is_scanning = True

        try:
            prefs = await self._preferences.get_preferences()
            if not prefs.auto_scan_enabled:
                log.debug("auto_scan_skipped", reason="disabled")
                return []

            log.debug("auto_scan_started")
            links = await self._engine.scan(self._document)
            updated = False
            if links:
                self.submit_report(links)
                if prefs.auto_unrestrict:
                    updated = await self._orchestrator.process(links)
                    if updated:
                        self.submit_report(links)
            log.info("auto_scan_finished", links=len(links), updated=updated)
            return links
        except Exception:
            log.error("auto_scan_failed", exc_info=True)
            return []
        finally:
            self._is_scanning = False

    async def init_auto_scan(self) -> None:
        """Apply the current auto-scan preference.

        Enabled: start one immediate scan and install the watch (once).
        Disabled: release the watch and cancel any pending scan.
        """
        if self._closed:
            return
        prefs = await self._preferences.get_preferences()
        # Shutdown may have run while the preferences were read.
        if self._closed:
            return
        if prefs.auto_scan_enabled:
            self._spawn(self.perform_auto_scan())
            if self._watch is None:
                self._watch = self._document.watch(self._on_nodes_added)
                log.debug("document_watch_installed")
        else:
            self._disable()

    def on_preferences_changed(self, prefs: Preferences) -> None:
        """Change-feed listener: re-evaluate auto-scan state."""
        if self._closed:
            return
        log.debug(
            "preferences_changed",
            auto_scan_enabled=prefs.auto_scan_enabled,
            auto_unrestrict=prefs.auto_unrestrict,
        )
        self._spawn(self.init_auto_scan())

    async def wait_idle(self) -> None:
        """Wait until every scan and report task spawned so far has finished."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    async def shutdown(self) -> None:
        """Stop accepting work, release the watch and timer, then drain tasks.

        Queued enables that run during the drain see the closed flag and
        return without installing anything.  Idempotent.
        """
        self._closed = True
        self._disable()
        await self.wait_idle()

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _disable(self) -> None:
        if self._watch is not None:
            self._watch.release()
            self._watch = None
            log.debug("document_watch_released")
        self._timer.cancel()

    def _on_nodes_added(self, count: int) -> None:
        if count > 0:
            self.trigger_scan()

    def _on_timer_fired(self) -> None:
        if self._closed:
            return
        self._spawn(self.perform_auto_scan())

    def _spawn(self, coro: Coroutine[Any, Any, Any]) -> None:
        task = asyncio.get_running_loop().create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
