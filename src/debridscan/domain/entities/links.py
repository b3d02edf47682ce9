"""Domain entities for detected page links.

Pure value objects, no framework dependencies, no I/O.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping

# Opaque payload produced by the unrestrict service; carried, never inspected.
UnrestrictedLink = dict[str, Any]

MAGNET_HOST = "magnet"
UNKNOWN_HOST = "unknown"


class LinkType(str, Enum):
    """Classification of a detected link."""

    HOSTER = "hoster"
    MAGNET = "magnet"


@dataclass
class DetectedLink:
    """A link found on the page.

    Identity is ``url`` (case-sensitive, as received).  ``unrestricted_link``
    is filled from the session cache at scan time and may be set later in
    the same cycle by the auto-unrestrict pipeline.
    """

    url: str
    host: str
    type: LinkType
    unrestricted_link: UnrestrictedLink | None = None

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the wire shape used across the host boundary."""
        data: dict[str, Any] = {
            "url": self.url,
            "host": self.host,
            "type": self.type.value,
        }
        if self.unrestricted_link is not None:
            data["unrestrictedLink"] = self.unrestricted_link
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> DetectedLink:
        return cls(
            url=str(data["url"]),
            host=str(data.get("host", UNKNOWN_HOST)),
            type=LinkType(data["type"]),
            unrestricted_link=data.get("unrestrictedLink"),
        )


@dataclass(frozen=True)
class Preferences:
    """User preferences gating auto-scan behaviour.

    Both flags default to ``True`` when the record or the field is absent;
    only an explicit ``False`` disables a feature.
    """

    auto_scan_enabled: bool = True
    auto_unrestrict: bool = True

    @classmethod
    def from_record(cls, record: Mapping[str, Any] | None) -> Preferences:
        record = record or {}
        return cls(
            auto_scan_enabled=record.get("autoScanEnabled") is not False,
            auto_unrestrict=record.get("autoUnrestrict") is not False,
        )

    def to_record(self) -> dict[str, bool]:
        return {
            "autoScanEnabled": self.auto_scan_enabled,
            "autoUnrestrict": self.auto_unrestrict,
        }
