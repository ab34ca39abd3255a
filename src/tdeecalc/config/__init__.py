"""Configuration module."""

from __future__ import annotations

from tdeecalc.config.settings import (
    EngineConfig,
    Settings,
    default_config_path,
    get_settings,
    reload_settings,
)

__all__ = [
    "EngineConfig",
    "Settings",
    "default_config_path",
    "get_settings",
    "reload_settings",
]
