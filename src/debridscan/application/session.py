"""Session-scoped caches, reset when the page is (re)loaded."""

from __future__ import annotations

from dataclasses import dataclass, field

from debridscan.domain.entities.links import UnrestrictedLink


@dataclass
class ScanSession:
    """Per-document state shared by the scan engine and the orchestrator.

    ``processed_links`` holds every URL ever submitted to the unrestrict
    service; ``unrestricted_cache`` holds the successful results.
    Neither is ever invalidated within a session.
    """

    processed_links: set[str] = field(default_factory=set)
    unrestricted_cache: dict[str, UnrestrictedLink] = field(default_factory=dict)

    def is_processed(self, url: str) -> bool:
        return url in self.processed_links

    def mark_processed(self, url: str) -> None:
        self.processed_links.add(url)

    def cached_result(self, url: str) -> UnrestrictedLink | None:
        return self.unrestricted_cache.get(url)

    def store_result(self, url: str, result: UnrestrictedLink) -> None:
        self.unrestricted_cache[url] = result
