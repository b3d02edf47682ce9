from .auto_unrestrict import AutoUnrestrictOrchestrator
from .link_scanner import LinkScanner
from .scan_engine import ScanEngine
from .scheduler import DebounceTimer, ScanScheduler, SchedulerState
from .session import ScanSession

__all__ = [
    "AutoUnrestrictOrchestrator",
    "DebounceTimer",
    "LinkScanner",
    "ScanEngine",
    "ScanScheduler",
    "ScanSession",
    "SchedulerState",
]
