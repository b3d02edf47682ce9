"""Full-document scan: patterns + extraction + session enrichment."""

from __future__ import annotations

import structlog

from debridscan.application.session import ScanSession
from debridscan.domain.entities.links import DetectedLink
from debridscan.domain.ports.document import DocumentPort
from debridscan.domain.ports.scanning import LinkExtractorPort, PatternSourcePort

log = structlog.get_logger(__name__)


class ScanEngine:
    """Produces a fresh, deduplicated link list for one document.

    Reads the pattern source once per scan and attaches any unrestrict
    result already held by the session.
    """

    def __init__(
        self,
        *,
        pattern_source: PatternSourcePort,
        extractor: LinkExtractorPort,
        session: ScanSession,
    ) -> None:
        self._patterns = pattern_source
        self._extractor = extractor
        self._session = session

    async def scan(self, document: DocumentPort) -> list[DetectedLink]:
        patterns = await self._patterns.get_patterns()
        links = self._extractor.extract(document, patterns)
        for link in links:
            link.unrestricted_link = self._session.cached_result(link.url)
        log.debug("page_scanned", links=len(links), patterns=len(patterns))
        return links
