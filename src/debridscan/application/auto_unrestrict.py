"""Submit newly detected hoster links to the unrestrict service."""

from __future__ import annotations

import structlog

from debridscan.application.session import ScanSession
from debridscan.domain.entities.links import DetectedLink, LinkType
from debridscan.domain.ports.background import BackgroundClientPort

log = structlog.get_logger(__name__)


class AutoUnrestrictOrchestrator:
    """Unrestricts each hoster link at most once per session.

    Links are processed sequentially in list order.  A URL is marked
    processed before its request is issued, so an overlapping scan never
    submits it twice.  A failed link is logged and left without a result;
    it does not stop the remaining links.
    """

    def __init__(self, *, client: BackgroundClientPort, session: ScanSession) -> None:
        self._client = client
        self._session = session

    async def process(self, links: list[DetectedLink]) -> bool:
        """Unrestrict new hoster links in place.

        Returns:
            True if at least one link gained a new unrestricted result.
        """
        updated = False
        for link in links:
            if link.type is not LinkType.HOSTER:
                continue
            if self._session.is_processed(link.url):
                continue
            self._session.mark_processed(link.url)

            try:
                result = await self._client.unrestrict_link(link.url)
            except Exception as e:  # noqa: BLE001
                log.error("auto_unrestrict_failed", url=link.url, error=str(e))
                continue

            if result is None:
                log.warning("auto_unrestrict_empty_result", url=link.url)
                continue

            self._session.store_result(link.url, result)
            link.unrestricted_link = result
            updated = True
            log.info("auto_unrestrict_succeeded", url=link.url, host=link.host)

        return updated
