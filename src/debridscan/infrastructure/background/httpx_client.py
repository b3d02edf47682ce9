"""Background service client over HTTP (async httpx).

Every message is POSTed as ``{"type": ..., "payload": ...}`` to the
service's ``/messages`` endpoint and answered with the uniform
``{success, data, error}`` envelope.
"""

from __future__ import annotations

from typing import Any

import httpx
import structlog

from debridscan.domain.entities.links import DetectedLink, UnrestrictedLink
from debridscan.domain.entities.messages import Message, MessageResponse, MessageType
from debridscan.domain.exceptions import BackgroundError, UnrestrictError

log = structlog.get_logger(__name__)

_MESSAGES_PATH = "/messages"


class HttpxBackgroundClient:
    """Async background client using httpx.

    Implements ``BackgroundClientPort`` from domain.ports.background.
    """

    def __init__(
        self,
        *,
        base_url: str,
        http_client: httpx.AsyncClient,
    ) -> None:
        self._url = f"{base_url.rstrip('/')}{_MESSAGES_PATH}"
        self._http = http_client

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    async def _send(self, message: Message) -> MessageResponse:
        """POST one message and parse the envelope.

        Raises:
            BackgroundError: Transport failure, non-2xx status or bad JSON.
        """
        body: dict[str, Any] = {"type": message.type.value, "payload": message.payload}
        try:
            resp = await self._http.post(self._url, json=body)
            resp.raise_for_status()
            data = resp.json()
        except httpx.HTTPStatusError as e:
            raise BackgroundError(
                f"{message.type.value} failed with HTTP {e.response.status_code}"
            ) from e
        except httpx.HTTPError as e:
            raise BackgroundError(f"{message.type.value} failed: {e}") from e
        except ValueError as e:
            raise BackgroundError(f"{message.type.value} returned invalid JSON") from e
        return MessageResponse.from_dict(data)

    # ------------------------------------------------------------------
    # BackgroundClientPort
    # ------------------------------------------------------------------

    async def get_hosts_regex(self) -> list[str]:
        response = await self._send(Message(MessageType.GET_HOSTS_REGEX))
        if not response.success or response.data is None:
            raise BackgroundError(response.error or "No hoster patterns returned")
        if not isinstance(response.data, list):
            raise BackgroundError("Hoster patterns payload is not a list")
        return response.data

    async def report_detected_links(self, links: list[DetectedLink]) -> None:
        response = await self._send(
            Message(
                MessageType.REPORT_DETECTED_LINKS,
                {"links": [link.to_dict() for link in links]},
            )
        )
        if not response.success:
            raise BackgroundError(response.error or "Report rejected")
        log.debug("links_reported", links=len(links))

    async def unrestrict_link(self, link: str) -> UnrestrictedLink:
        try:
            response = await self._send(
                Message(MessageType.UNRESTRICT_LINK, {"link": link})
            )
        except BackgroundError as e:
            raise UnrestrictError(link, str(e)) from e
        if not response.success or response.data is None:
            raise UnrestrictError(link, response.error or "Unrestrict failed")
        if not isinstance(response.data, dict):
            raise UnrestrictError(link, "Unrestrict payload is not an object")
        return response.data
