"""Per-document engine context: owns the session, scanner, orchestrator and scheduler."""

from __future__ import annotations

import structlog

from debridscan.application.auto_unrestrict import AutoUnrestrictOrchestrator
from debridscan.application.scan_engine import ScanEngine
from debridscan.application.scheduler import (
    DEFAULT_DEBOUNCE_SECONDS,
    CallLater,
    ScanScheduler,
)
from debridscan.application.session import ScanSession
from debridscan.domain.entities.messages import (
    Message,
    MessageResponse,
    MessageType,
    error,
    success,
)
from debridscan.domain.ports.background import BackgroundClientPort
from debridscan.domain.ports.document import DocumentPort, WatchHandle
from debridscan.domain.ports.preferences import PreferenceStorePort
from debridscan.domain.ports.scanning import LinkExtractorPort, PatternSourcePort

log = structlog.get_logger(__name__)


class LinkScanner:
    """Everything that lives as long as one loaded document.

    Usage::

        scanner = create_link_scanner(document=doc, client=client, preferences=prefs)
        async with scanner:
            ...  # auto-scan runs while the document is open

    Construction creates fresh session caches; :meth:`close` releases the
    preference subscription, the document watch and the debounce timer.
    """

    def __init__(
        self,
        *,
        document: DocumentPort,
        client: BackgroundClientPort,
        preferences: PreferenceStorePort,
        pattern_source: PatternSourcePort,
        extractor: LinkExtractorPort,
        debounce_seconds: float = DEFAULT_DEBOUNCE_SECONDS,
        call_later: CallLater | None = None,
    ) -> None:
        self._document = document
        self._preferences = preferences
        self.session = ScanSession()
        self.pattern_source = pattern_source
        self.engine = ScanEngine(
            pattern_source=pattern_source, extractor=extractor, session=self.session
        )
        self.orchestrator = AutoUnrestrictOrchestrator(client=client, session=self.session)
        self.scheduler = ScanScheduler(
            document=document,
            engine=self.engine,
            orchestrator=self.orchestrator,
            client=client,
            preferences=preferences,
            debounce_seconds=debounce_seconds,
            call_later=call_later,
        )
        self._prefs_subscription: WatchHandle | None = None

    async def start(self) -> None:
        """Subscribe to preference changes and apply the current state."""
        if self._prefs_subscription is None:
            self._prefs_subscription = self._preferences.subscribe(
                self.scheduler.on_preferences_changed
            )
        await self.scheduler.init_auto_scan()
        log.debug("link_scanner_started")

    async def close(self) -> None:
        if self._prefs_subscription is not None:
            self._prefs_subscription.release()
            self._prefs_subscription = None
        await self.scheduler.shutdown()
        log.debug("link_scanner_closed")

    async def __aenter__(self) -> LinkScanner:
        await self.start()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    async def handle_message(self, message: Message) -> MessageResponse | None:
        """Answer an in-context request; ``None`` means "not handled here"."""
        if message.type is not MessageType.SCAN_PAGE_LINKS:
            return None

        try:
            links = await self.engine.scan(self._document)
        except Exception as e:
            log.error("scan_request_failed", error=str(e))
            return error(str(e) or "Failed to scan page")

        self.scheduler.submit_report(links)
        return success([link.to_dict() for link in links])
