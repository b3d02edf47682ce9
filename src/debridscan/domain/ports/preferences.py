"""Port for the user preference backend."""

from __future__ import annotations

from typing import Callable, Protocol, runtime_checkable

from debridscan.domain.entities.links import Preferences
from debridscan.domain.ports.document import WatchHandle

PreferencesListener = Callable[[Preferences], None]


@runtime_checkable
class PreferenceStorePort(Protocol):
    """Key-value read of the ``preferences`` record plus a change feed."""

    async def get_preferences(self) -> Preferences:
        """Return current preferences (absent fields default to ``True``)."""
        ...

    def subscribe(self, listener: PreferencesListener) -> WatchHandle:
        """Call *listener* with the new record whenever it is modified."""
        ...
