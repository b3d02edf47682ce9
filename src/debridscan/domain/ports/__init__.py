from .background import BackgroundClientPort
from .document import DocumentPort, NodesAddedListener, WatchHandle
from .preferences import PreferencesListener, PreferenceStorePort
from .scanning import LinkExtractorPort, PatternSourcePort

__all__ = [
    "BackgroundClientPort",
    "DocumentPort",
    "LinkExtractorPort",
    "NodesAddedListener",
    "PatternSourcePort",
    "PreferenceStorePort",
    "PreferencesListener",
    "WatchHandle",
]
