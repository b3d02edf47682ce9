"""Ports used by the scan engine: where patterns come from and how links are found."""

from __future__ import annotations

import re
from typing import Protocol, runtime_checkable

from debridscan.domain.entities.links import DetectedLink
from debridscan.domain.ports.document import DocumentPort


@runtime_checkable
class PatternSourcePort(Protocol):
    """Supplies the current compiled hoster patterns."""

    async def get_patterns(self) -> list[re.Pattern[str]]:
        """Return the active pattern set.

        Never raises; an unavailable source yields an empty list so that
        magnet detection keeps working.
        """
        ...


@runtime_checkable
class LinkExtractorPort(Protocol):
    def extract(
        self, document: DocumentPort, patterns: list[re.Pattern[str]]
    ) -> list[DetectedLink]:
        """Deduplicated links of *document* in first-seen order."""
        ...
