"""Stable constants shared across the collection modules."""

from __future__ import annotations

from typing import Final

# Ordering defaults.
DEFAULT_PRIORITY: Final[int] = 0

# Item id generation and collision handling.
DEFAULT_GENERATED_ID_PREFIX: Final[str] = "item"
ID_SUFFIX_SEPARATOR: Final[str] = "-"

# Settings sources.
SETTINGS_TABLE: Final[str] = "ordered_collection"
ENV_PREFIX: Final[str] = "ORDERED_COLLECTION_"
LOG_FORMATS: Final[tuple[str, ...]] = ("json", "console")

__all__ = [
    "DEFAULT_GENERATED_ID_PREFIX",
    "DEFAULT_PRIORITY",
    "ENV_PREFIX",
    "ID_SUFFIX_SEPARATOR",
    "LOG_FORMATS",
    "SETTINGS_TABLE",
]
