"""Port for the background service reached across the host boundary."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from debridscan.domain.entities.links import DetectedLink, UnrestrictedLink


@runtime_checkable
class BackgroundClientPort(Protocol):
    """Typed async request/response client, one method per message kind.

    The production adapter speaks HTTP; tests substitute an ``AsyncMock``.
    """

    async def get_hosts_regex(self) -> list[str]:
        """Fetch the wire-format hoster patterns (``GET_HOSTS_REGEX``).

        Raises:
            BackgroundError: The service failed or answered with an error.
        """
        ...

    async def report_detected_links(self, links: list[DetectedLink]) -> None:
        """Report the current link list (``REPORT_DETECTED_LINKS``).

        Callers treat this as fire-and-forget and discard failures.

        Raises:
            BackgroundError: The report could not be delivered.
        """
        ...

    async def unrestrict_link(self, link: str) -> UnrestrictedLink:
        """Exchange a hoster link for a direct resource (``UNRESTRICT_LINK``).

        Raises:
            UnrestrictError: The link could not be unrestricted.
        """
        ...
