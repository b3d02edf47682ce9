"""Parse wire-format hoster patterns into compiled regexes.

The background service sends patterns as strings, usually wrapped in
slash delimiters (``/rapidgator\\.net/``).  One pair of delimiters is
stripped and the body is compiled case-insensitively.  Anything after
the closing slash is part of the body: ``/download/gym`` is compiled
verbatim.
"""

from __future__ import annotations

import re
from typing import Any

import structlog

from debridscan.domain.exceptions import PatternParseError

log = structlog.get_logger(__name__)

Pattern = re.Pattern[str]


def _strip_delimiters(source: str) -> str:
    if len(source) >= 2 and source.startswith("/") and source.endswith("/"):
        return source[1:-1]
    return source


def parse_pattern(source: str) -> Pattern:
    """Compile one wire-format pattern.

    Raises:
        PatternParseError: *source* is not a string, is empty once
            unwrapped, or does not compile.
    """
    if not isinstance(source, str):
        raise PatternParseError(repr(source), "pattern is not a string")
    body = _strip_delimiters(source)
    if not body:
        raise PatternParseError(source, "empty pattern")
    try:
        return re.compile(body, re.IGNORECASE)
    except re.error as e:
        raise PatternParseError(source, str(e)) from e


def parse_patterns(sources: Any) -> list[Pattern]:
    """Compile a batch of patterns, dropping entries that fail to parse.

    A payload that is not a list yields an empty pattern set.
    """
    if not isinstance(sources, list):
        log.warning("host_patterns_malformed", payload_type=type(sources).__name__)
        return []

    patterns: list[Pattern] = []
    for source in sources:
        try:
            patterns.append(parse_pattern(source))
        except PatternParseError as e:
            log.warning("host_pattern_dropped", pattern=e.source, reason=e.reason)
    return patterns


def matches_any(url: str, patterns: list[Pattern]) -> bool:
    """Return True if any pattern matches anywhere in *url*."""
    return any(p.search(url) for p in patterns)
