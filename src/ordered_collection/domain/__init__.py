"""Domain records and identifiers for ordered collections."""

from __future__ import annotations

from ordered_collection.domain.ids import disambiguate_id, generate_item_id, prefixed_id_factory
from ordered_collection.domain.item import OrderedItem

__all__ = [
    "OrderedItem",
    "disambiguate_id",
    "generate_item_id",
    "prefixed_id_factory",
]
