"""
ordered-collection — package root.

Purpose
- Ordered containers: values are added with a priority or with before/after
  rules naming other items, and are read back in one deterministic order
  satisfying every rule.

Public surface
- ``MultiOrderedCollection``: any number of before/after rules per item.
- ``OrderedCollection``: at most one rule per item.
- ``CycleFound``: raised on read when the rules contradict each other.

Import boundary
- No side effects at import time (no settings loading, no logging setup).
"""

from __future__ import annotations

from ordered_collection.collection import MultiOrderedCollection, OrderableCollection
from ordered_collection.config.loader import CollectionSettings, ConfigLoadError, load_settings
from ordered_collection.ordering.result import CycleFound, SortFailure, SortResult, SortSuccess
from ordered_collection.restricted import OrderedCollection

__version__ = "0.1.0"

__all__ = [
    "CollectionSettings",
    "ConfigLoadError",
    "CycleFound",
    "MultiOrderedCollection",
    "OrderableCollection",
    "OrderedCollection",
    "SortFailure",
    "SortResult",
    "SortSuccess",
    "__version__",
    "load_settings",
]
