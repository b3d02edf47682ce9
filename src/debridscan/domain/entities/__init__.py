from .links import (
    MAGNET_HOST,
    UNKNOWN_HOST,
    DetectedLink,
    LinkType,
    Preferences,
    UnrestrictedLink,
)
from .messages import Message, MessageResponse, MessageType, error, success

__all__ = [
    "MAGNET_HOST",
    "UNKNOWN_HOST",
    "DetectedLink",
    "LinkType",
    "Message",
    "MessageResponse",
    "MessageType",
    "Preferences",
    "UnrestrictedLink",
    "error",
    "success",
]
