from __future__ import annotations

from .load import load_config
from .schema import AppConfig, BackgroundConfig, EnvOverrides, ScanConfig

__all__ = ["AppConfig", "BackgroundConfig", "EnvOverrides", "ScanConfig", "load_config"]
