"""Gateway: YAML configuration loader — optional user overrides for the fixed defaults."""

from __future__ import annotations

from pathlib import Path

import yaml

from term_whisper.l3_interface_adapters.gateways.paths import DEFAULT_CONFIG_PATHS


class YamlConfigLoader:
    """Reads the first existing user config file into a raw dict (before validation)."""

    def __init__(self, search_paths: list[Path] | None = None) -> None:
        self._search_paths = search_paths if search_paths is not None else DEFAULT_CONFIG_PATHS

    def load_raw(self) -> dict:
        """Contents of the first existing search path, or an empty dict when none exists."""
        for path in self._search_paths:
            if path.exists():
                return _read_yaml(path)
        return {}


def _read_yaml(path: Path) -> dict:
    data = yaml.safe_load(path.read_text(encoding='utf-8')) or {}
    if not isinstance(data, dict):
        raise ValueError(f'Config file must contain a mapping: {path}')
    return data


def deep_merge(base: dict, override: dict) -> dict:
    """Recursively merge *override* into *base* (mutates base)."""
    for key, value in override.items():
        if key in base and isinstance(base[key], dict) and isinstance(value, dict):
            deep_merge(base[key], value)
        else:
            base[key] = value
    return base
