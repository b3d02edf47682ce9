"""Tests for link and message entities."""

from __future__ import annotations

from debridscan.domain.entities import (
    DetectedLink,
    LinkType,
    MessageResponse,
    Preferences,
    error,
    success,
)


class TestPreferences:
    def test_missing_record_enables_everything(self) -> None:
        prefs = Preferences.from_record(None)
        assert prefs.auto_scan_enabled is True
        assert prefs.auto_unrestrict is True

    def test_missing_field_defaults_to_true(self) -> None:
        prefs = Preferences.from_record({"autoScanEnabled": False})
        assert prefs.auto_scan_enabled is False
        assert prefs.auto_unrestrict is True

    def test_only_explicit_false_disables(self) -> None:
        prefs = Preferences.from_record({"autoScanEnabled": None, "autoUnrestrict": 0})
        assert prefs.auto_scan_enabled is True
        assert prefs.auto_unrestrict is True

    def test_to_record_uses_wire_names(self) -> None:
        prefs = Preferences(auto_scan_enabled=True, auto_unrestrict=False)
        assert prefs.to_record() == {"autoScanEnabled": True, "autoUnrestrict": False}


class TestDetectedLink:
    def test_to_dict_omits_unset_unrestricted_link(self) -> None:
        link = DetectedLink(url="magnet:?xt=abc", host="magnet", type=LinkType.MAGNET)
        assert link.to_dict() == {
            "url": "magnet:?xt=abc",
            "host": "magnet",
            "type": "magnet",
        }

    def test_to_dict_includes_unrestricted_link(self) -> None:
        link = DetectedLink(
            url="https://host-a.example/f/1",
            host="host-a.example",
            type=LinkType.HOSTER,
            unrestricted_link={"download": "https://cdn.example/1"},
        )
        assert link.to_dict()["unrestrictedLink"] == {"download": "https://cdn.example/1"}

    def test_from_dict(self) -> None:
        link = DetectedLink.from_dict(
            {"url": "https://host-a.example/f/1", "host": "host-a.example", "type": "hoster"}
        )
        assert link.type is LinkType.HOSTER
        assert link.unrestricted_link is None


class TestMessageResponse:
    def test_helpers(self) -> None:
        assert success([1]).to_dict() == {"success": True, "data": [1]}
        assert error("boom").to_dict() == {"success": False, "error": "boom"}

    def test_from_dict_requires_literal_true(self) -> None:
        assert MessageResponse.from_dict({"success": "yes"}).success is False

    def test_from_dict_non_mapping_is_failure(self) -> None:
        response = MessageResponse.from_dict(["not", "an", "envelope"])
        assert response.success is False
        assert response.error == "Malformed response envelope"
