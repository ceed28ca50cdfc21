"""Collection settings and their loader."""

from __future__ import annotations

from ordered_collection.config.loader import (
    CollectionSettings,
    ConfigLoadError,
    load_settings,
    load_settings_file,
)

__all__ = [
    "CollectionSettings",
    "ConfigLoadError",
    "load_settings",
    "load_settings_file",
]
