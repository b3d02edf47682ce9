"""Layered configuration: defaults < YAML file < environment < CLI overrides."""

from __future__ import annotations

from copy import deepcopy
from pathlib import Path
from typing import Any, Mapping

import yaml
from dotenv import load_dotenv

from .defaults import DEFAULT_CONFIG
from .schema import AppConfig, EnvOverrides

_TOP_LEVEL_KEYS = ("app_name", "environment")

# Flat names accepted from env vars and CLI overrides, keyed to their section.
_FLAT_KEYS: dict[str, tuple[str, str]] = {
    "background_url": ("background", "base_url"),
    "background_timeout_seconds": ("background", "timeout_seconds"),
    "pattern_ttl_seconds": ("scan", "pattern_ttl_seconds"),
    "debounce_seconds": ("scan", "debounce_seconds"),
    "log_level": ("logging", "level"),
    "log_format": ("logging", "format"),
}

_SECTIONS = frozenset(section for section, _ in _FLAT_KEYS.values())


def _deep_merge(base: dict[str, Any], override: Mapping[str, Any]) -> dict[str, Any]:
    """Merge *override* into *base* in place; nested mappings merge, anything else replaces."""
    for key, value in override.items():
        current = base.get(key)
        if isinstance(current, dict) and isinstance(value, Mapping):
            _deep_merge(current, value)
        else:
            base[key] = value
    return base


def _normalize_layer(data: Mapping[str, Any]) -> dict[str, Any]:
    """Bring one layer into sectioned form.

    A layer may mix sections (``{"scan": {...}}``) and flat keys
    (``{"debounce_seconds": 2}``); flat keys win within the same layer.
    Unknown keys are dropped.
    """
    out: dict[str, Any] = {
        section: dict(data[section])
        for section in _SECTIONS
        if isinstance(data.get(section), Mapping)
    }
    out.update({key: data[key] for key in _TOP_LEVEL_KEYS if key in data})

    for flat_key, (section, field) in _FLAT_KEYS.items():
        if flat_key in data:
            out.setdefault(section, {})[field] = data[flat_key]
    return out


def _read_yaml_config(config_path: Path) -> dict[str, Any]:
    if not config_path.exists():
        raise FileNotFoundError(config_path)
    parsed = yaml.safe_load(config_path.read_text(encoding="utf-8"))
    if parsed is None:
        return {}
    if not isinstance(parsed, dict):
        raise ValueError(f"Config YAML must be a mapping, got: {type(parsed)!r}")
    return parsed


def load_config(
    *,
    config_path: Path | None = None,
    dotenv_path: Path | None = None,
    cli_overrides: dict[str, Any] | None = None,
) -> AppConfig:
    """Build the validated :class:`AppConfig`.

    A ``.env`` file only fills variables that are not already set in the
    process environment.  Nothing is written to disk.

    Raises:
        FileNotFoundError: *config_path* or *dotenv_path* does not exist.
        pydantic.ValidationError: The merged values are invalid.
    """
    if dotenv_path is not None:
        if not dotenv_path.exists():
            raise FileNotFoundError(dotenv_path)
        load_dotenv(dotenv_path, override=False)

    layers: list[Mapping[str, Any]] = [deepcopy(DEFAULT_CONFIG)]
    if config_path is not None:
        layers.append(_read_yaml_config(config_path))
    layers.append(EnvOverrides().to_update_dict())
    layers.append(cli_overrides or {})

    merged: dict[str, Any] = {}
    for layer in layers:
        _deep_merge(merged, _normalize_layer(layer))
    return AppConfig.model_validate(merged)
