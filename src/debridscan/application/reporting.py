"""Fire-and-forget link reporting."""

from __future__ import annotations

import structlog

from debridscan.domain.entities.links import DetectedLink
from debridscan.domain.ports.background import BackgroundClientPort

log = structlog.get_logger(__name__)


async def report_links(client: BackgroundClientPort, links: list[DetectedLink]) -> None:
    """Send *links* to the background service, discarding any failure.

    The background service may not be ready yet; a lost report is
    replaced by the next scan cycle.
    """
    try:
        await client.report_detected_links(links)
    except Exception as e:  # noqa: BLE001
        log.debug("report_links_dropped", links=len(links), error=str(e))
