from __future__ import annotations

import time
from typing import Callable

import structlog

from debridscan.application.link_scanner import LinkScanner
from debridscan.application.scheduler import CallLater
from debridscan.domain.ports.background import BackgroundClientPort
from debridscan.domain.ports.document import DocumentPort
from debridscan.domain.ports.preferences import PreferenceStorePort
from debridscan.infrastructure.config.schema import ScanConfig
from debridscan.infrastructure.patterns.cache import HostPatternCache
from debridscan.infrastructure.scanning.extractor import LinkExtractor

log = structlog.get_logger(__name__)


def create_link_scanner(
    *,
    document: DocumentPort,
    client: BackgroundClientPort,
    preferences: PreferenceStorePort,
    config: ScanConfig | None = None,
    clock: Callable[[], float] = time.monotonic,
    call_later: CallLater | None = None,
) -> LinkScanner:
    """Composition root for one document: wires the concrete adapters.

    *clock* drives the pattern cache TTL and *call_later* the debounce
    timer; both default to real time.
    """
    config = config or ScanConfig()
    pattern_cache = HostPatternCache(
        client, ttl_seconds=config.pattern_ttl_seconds, clock=clock
    )
    scanner = LinkScanner(
        document=document,
        client=client,
        preferences=preferences,
        pattern_source=pattern_cache,
        extractor=LinkExtractor(),
        debounce_seconds=config.debounce_seconds,
        call_later=call_later,
    )
    log.debug(
        "link_scanner_created",
        pattern_ttl_seconds=config.pattern_ttl_seconds,
        debounce_seconds=config.debounce_seconds,
    )
    return scanner
