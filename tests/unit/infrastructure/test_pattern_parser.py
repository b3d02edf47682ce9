"""Tests for wire-format hoster pattern parsing."""

from __future__ import annotations

import re

import pytest

from debridscan.domain.exceptions import PatternParseError
from debridscan.infrastructure.patterns.parser import (
    matches_any,
    parse_pattern,
    parse_patterns,
)


class TestParsePattern:
    def test_strips_slash_delimiters(self) -> None:
        pattern = parse_pattern("/rapidgator\\.net/")
        assert pattern.pattern == "rapidgator\\.net"

    def test_unwrapped_pattern_kept_verbatim(self) -> None:
        assert parse_pattern("rapidgator\\.net").pattern == "rapidgator\\.net"

    def test_case_insensitive(self) -> None:
        pattern = parse_pattern("/host-a\\.example/")
        assert pattern.search("HTTPS://HOST-A.EXAMPLE/FILE")

    def test_trailing_letters_are_part_of_the_body(self) -> None:
        pattern = parse_pattern("/download/gym")
        assert pattern.pattern == "/download/gym"
        assert pattern.search("https://host-a.example/download/gym")
        assert not pattern.search("https://host-a.example/download/file")

    def test_only_one_delimiter_pair_is_stripped(self) -> None:
        assert parse_pattern("//host-a//").pattern == "/host-a/"

    def test_no_flags_besides_ignorecase(self) -> None:
        assert parse_pattern("/^x$/").flags & re.MULTILINE == 0

    def test_path_like_string_is_not_a_literal(self) -> None:
        assert parse_pattern("/folder/abc").pattern == "/folder/abc"

    def test_single_slash(self) -> None:
        assert parse_pattern("/").pattern == "/"

    def test_invalid_regex_raises(self) -> None:
        with pytest.raises(PatternParseError) as exc_info:
            parse_pattern("/host-(a\\.example/")
        assert exc_info.value.source == "/host-(a\\.example/"

    def test_empty_body_raises(self) -> None:
        with pytest.raises(PatternParseError):
            parse_pattern("//")

    def test_non_string_raises(self) -> None:
        with pytest.raises(PatternParseError):
            parse_pattern(42)  # type: ignore[arg-type]


class TestParsePatterns:
    def test_drops_only_bad_entries(self) -> None:
        patterns = parse_patterns(["/host-a\\.example/", "/(/", "/host-b\\.example/"])
        assert [p.pattern for p in patterns] == ["host-a\\.example", "host-b\\.example"]

    def test_single_bad_pattern_yields_empty_set(self) -> None:
        assert parse_patterns(["/[unclosed/"]) == []

    def test_non_list_payload_yields_empty_set(self) -> None:
        assert parse_patterns({"hosts": ["x"]}) == []


class TestMatchesAny:
    def test_any_pattern_matches(self) -> None:
        patterns = parse_patterns(["/host-a\\.example/", "/host-b\\.example/"])
        assert matches_any("https://host-b.example/f/1", patterns)

    def test_no_patterns_never_match(self) -> None:
        assert not matches_any("https://host-a.example/f/1", [])
