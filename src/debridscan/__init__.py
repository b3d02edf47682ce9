"""Page link scanner with hoster detection and auto-unrestrict."""

__version__ = "0.1.0"
