"""Domain exceptions."""

from __future__ import annotations


class DebridScanError(Exception):
    """Base class for all debridscan errors."""


class PatternParseError(DebridScanError):
    """Raised when a hoster pattern string cannot be compiled."""

    def __init__(self, source: str, reason: str) -> None:
        super().__init__(f"Invalid hoster pattern {source!r}: {reason}")
        self.source = source
        self.reason = reason


class BackgroundError(DebridScanError):
    """Raised when the background service fails or answers with an error."""


class UnrestrictError(BackgroundError):
    """Raised when a single link could not be unrestricted."""

    def __init__(self, link: str, message: str) -> None:
        super().__init__(message)
        self.link = link
