"""Find magnet and hoster links in anchors and free text."""

from __future__ import annotations

import re
from urllib.parse import urlparse

import structlog

from debridscan.domain.entities.links import (
    MAGNET_HOST,
    UNKNOWN_HOST,
    DetectedLink,
    LinkType,
)
from debridscan.domain.ports.document import DocumentPort
from debridscan.infrastructure.patterns.parser import Pattern, matches_any

log = structlog.get_logger(__name__)

_TEXT_URL_RE = re.compile(r"https?://[^\s<>\"']+", re.IGNORECASE)
_TRAILING_PUNCT_RE = re.compile(r"[.,;)]+$")


def _is_magnet(url: str) -> bool:
    return url[:7].lower() == "magnet:"


def _is_script(url: str) -> bool:
    return url[:11].lower() == "javascript:"


def extract_host(url: str) -> str:
    """Return a display hostname for *url*.

    ``"magnet"`` for magnet URIs, the hostname without a leading
    ``www.`` otherwise, ``"unknown"`` when no hostname can be parsed.
    """
    if _is_magnet(url):
        return MAGNET_HOST
    try:
        hostname = urlparse(url).hostname
    except ValueError:
        return UNKNOWN_HOST
    if not hostname:
        return UNKNOWN_HOST
    return hostname[4:] if hostname.startswith("www.") else hostname


def extract_urls_from_text(text: str) -> list[str]:
    """Find bare http(s) URLs in *text*, trailing punctuation removed."""
    urls: list[str] = []
    for match in _TEXT_URL_RE.findall(text):
        cleaned = _TRAILING_PUNCT_RE.sub("", match)
        if cleaned:
            urls.append(cleaned)
    return urls


class LinkExtractor:
    """Two-pass extraction: anchors first, then text nodes.

    Both passes share one seen-set keyed by exact URL, so a link that
    appears as an anchor and in text is reported once, in anchor order.
    """

    def extract(
        self, document: DocumentPort, patterns: list[Pattern]
    ) -> list[DetectedLink]:
        seen: set[str] = set()
        links = self._scan_anchors(document, patterns, seen)
        anchor_count = len(links)
        links.extend(self._scan_text(document, patterns, seen))
        log.debug(
            "links_extracted",
            anchors=anchor_count,
            text=len(links) - anchor_count,
        )
        return links

    def _scan_anchors(
        self, document: DocumentPort, patterns: list[Pattern], seen: set[str]
    ) -> list[DetectedLink]:
        links: list[DetectedLink] = []
        for href in document.anchor_targets():
            if not href or _is_script(href) or href in seen:
                continue
            seen.add(href)

            if _is_magnet(href):
                links.append(DetectedLink(url=href, host=MAGNET_HOST, type=LinkType.MAGNET))
                continue

            if matches_any(href, patterns):
                links.append(
                    DetectedLink(url=href, host=extract_host(href), type=LinkType.HOSTER)
                )
        return links

    def _scan_text(
        self, document: DocumentPort, patterns: list[Pattern], seen: set[str]
    ) -> list[DetectedLink]:
        links: list[DetectedLink] = []
        if not patterns:
            return links
        for text in document.text_nodes():
            for url in extract_urls_from_text(text):
                if url in seen or not matches_any(url, patterns):
                    continue
                seen.add(url)
                links.append(
                    DetectedLink(url=url, host=extract_host(url), type=LinkType.HOSTER)
                )
        return links
