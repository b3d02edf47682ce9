"""Message contract between the page context and the background service."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class MessageType(str, Enum):
    GET_HOSTS_REGEX = "GET_HOSTS_REGEX"
    SCAN_PAGE_LINKS = "SCAN_PAGE_LINKS"
    REPORT_DETECTED_LINKS = "REPORT_DETECTED_LINKS"
    UNRESTRICT_LINK = "UNRESTRICT_LINK"


@dataclass(frozen=True)
class Message:
    """A request sent across the host boundary."""

    type: MessageType
    payload: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class MessageResponse:
    """Uniform response envelope: ``{success, data, error}``."""

    success: bool
    data: Any = None
    error: str | None = None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"success": self.success}
        if self.data is not None:
            out["data"] = self.data
        if self.error is not None:
            out["error"] = self.error
        return out

    @classmethod
    def from_dict(cls, data: Any) -> MessageResponse:
        """Parse a raw envelope; anything that is not a mapping is a failure."""
        if not isinstance(data, dict):
            return cls(success=False, error="Malformed response envelope")
        error = data.get("error")
        return cls(
            success=data.get("success") is True,
            data=data.get("data"),
            error=str(error) if error is not None else None,
        )


def success(data: Any = None) -> MessageResponse:
    return MessageResponse(success=True, data=data)


def error(message: str) -> MessageResponse:
    return MessageResponse(success=False, error=message)
