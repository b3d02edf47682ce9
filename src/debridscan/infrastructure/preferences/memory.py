"""Process-local preference store with a change feed."""

from __future__ import annotations

from typing import Any, Mapping

import structlog

from debridscan.domain.entities.links import Preferences
from debridscan.domain.ports.document import WatchHandle
from debridscan.domain.ports.preferences import PreferencesListener
from debridscan.infrastructure.common.subscriptions import ListenerRegistry

log = structlog.get_logger(__name__)


class InMemoryPreferenceStore:
    """Holds the raw ``preferences`` record.  Implements ``PreferenceStorePort``.

    The record is kept as received, so absent fields keep defaulting to
    ``True`` on every read.
    """

    def __init__(self, record: Mapping[str, Any] | None = None) -> None:
        self._record: dict[str, Any] | None = dict(record) if record is not None else None
        self._listeners: ListenerRegistry[Preferences] = ListenerRegistry("preferences")

    async def get_preferences(self) -> Preferences:
        return Preferences.from_record(self._record)

    def subscribe(self, listener: PreferencesListener) -> WatchHandle:
        return self._listeners.add(listener)

    def update(self, **fields: Any) -> Preferences:
        """Merge *fields* into the record and notify subscribers.

        Keys use the wire names (``autoScanEnabled``, ``autoUnrestrict``).
        """
        record = dict(self._record or {})
        record.update(fields)
        self._record = record
        prefs = Preferences.from_record(record)
        log.debug("preferences_updated", **prefs.to_record())
        self._listeners.notify(prefs)
        return prefs
