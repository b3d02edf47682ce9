from .memory import InMemoryPreferenceStore

__all__ = ["InMemoryPreferenceStore"]
