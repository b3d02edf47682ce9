"""Hardcoded default configuration values."""

from __future__ import annotations

from typing import Any

DEFAULT_CONFIG: dict[str, Any] = {
    "app_name": "debridscan",
    "environment": "dev",
    "background": {
        "base_url": "http://127.0.0.1:7980",
        "timeout_seconds": 10.0,
    },
    "scan": {
        "pattern_ttl_seconds": 300.0,
        "debounce_seconds": 1.0,
    },
    "logging": {
        "level": "INFO",
        "format": None,  # Derived from environment in schema.py
    },
}
