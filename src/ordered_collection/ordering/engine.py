"""
Ordering engine: item arena, lazy sort, and mutation-invalidated cache.

Inserts only record items and mark the cache ``Dirty``. The first read
afterwards rebuilds the constraint graph from the full item arena, sorts it
once, and stores the outcome as ``Fresh`` until the next insert.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

import structlog

from ordered_collection.config.loader import CollectionSettings
from ordered_collection.constants import DEFAULT_PRIORITY
from ordered_collection.domain.ids import (
    IdFactory,
    disambiguate_id,
    prefixed_id_factory,
    validate_item_id,
)
from ordered_collection.domain.item import OrderedItem, normalize_references, validate_priority
from ordered_collection.ordering.normalize import build_constraint_graph
from ordered_collection.ordering.result import SortFailure, SortResult


@dataclass(frozen=True, slots=True)
class Dirty:
    """No valid sort result; the next read sorts."""


@dataclass(frozen=True, slots=True)
class Fresh:
    """Sort result valid until the next insert."""

    result: SortResult


CacheState = Dirty | Fresh

_DIRTY = Dirty()


class OrderingEngine:
    """Stores ordered items and resolves them into one deterministic total order."""

    __slots__ = ("_items", "_state", "_id_factory", "_settings", "_logger")

    def __init__(
        self,
        *,
        settings: CollectionSettings | None = None,
        id_factory: IdFactory | None = None,
        logger: Any | None = None,
    ) -> None:
        self._settings = settings if settings is not None else CollectionSettings()
        self._id_factory = (
            id_factory
            if id_factory is not None
            else prefixed_id_factory(self._settings.generated_id_prefix)
        )
        self._logger = logger if logger is not None else structlog.get_logger(__name__)
        self._items: dict[str, OrderedItem] = {}
        self._state: CacheState = _DIRTY

    @property
    def state(self) -> CacheState:
        return self._state

    @property
    def is_fresh(self) -> bool:
        return isinstance(self._state, Fresh)

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, item_id: object) -> bool:
        return item_id in self._items

    def get(self, item_id: str) -> OrderedItem:
        try:
            return self._items[item_id]
        except KeyError:
            raise KeyError(f"Unknown item: {item_id}") from None

    def items(self) -> tuple[OrderedItem, ...]:
        """All items in insertion order."""
        return tuple(self._items.values())

    def insert(
        self,
        payload: object,
        *,
        item_id: str | None = None,
        priority: int | None = None,
        before: Iterable[str] | None = None,
        after: Iterable[str] | None = None,
    ) -> str:
        """
        Store ``payload`` and return the ID it is known by.

        A duplicate ``item_id`` is suffixed (``X``, ``X-1``, ``X-2``...) and the
        stored ID is returned. With no priority and no relative constraints
        the item sits at priority 0, so other items can be placed around it.
        """
        before_ids = normalize_references("before", before)
        after_ids = normalize_references("after", after)
        resolved_priority = validate_priority(priority)
        if resolved_priority is None and not before_ids and not after_ids:
            resolved_priority = DEFAULT_PRIORITY

        candidate = self._id_factory() if item_id is None else validate_item_id(item_id)
        stored_id = disambiguate_id(candidate, self._items)

        self._items[stored_id] = OrderedItem(
            id=stored_id,
            payload=payload,
            sequence=len(self._items),
            priority=resolved_priority,
            before=before_ids,
            after=after_ids,
        )
        self._state = _DIRTY
        return stored_id

    def sort(self) -> SortResult:
        """Return the cached sort result, sorting first if an insert invalidated it."""
        state = self._state
        if isinstance(state, Fresh):
            return state.result

        result = self._resolve()
        self._state = Fresh(result)
        return result

    def ordered_ids(self) -> tuple[str, ...]:
        """Item IDs in sorted order; raises ``CycleFound`` if none exists."""
        return self.sort().unwrap()

    def payloads(self) -> tuple[object, ...]:
        """Payloads in sorted order; raises ``CycleFound`` if none exists."""
        return tuple(self._items[item_id].payload for item_id in self.ordered_ids())

    def _resolve(self) -> SortResult:
        graph = build_constraint_graph(tuple(self._items.values()))
        self._log_dropped_references(graph.dropped_edges)

        result = graph.topological_sort()
        if isinstance(result, SortFailure):
            self._logger.warning(
                "ordered_collection_cycle_detected",
                unresolved_ids=list(result.unresolved),
                item_count=len(self._items),
            )
            return result

        self._logger.debug(
            "ordered_collection_sorted",
            item_count=len(self._items),
            edge_count=graph.edge_count,
            dropped_edge_count=len(graph.dropped_edges),
        )
        return result

    def _log_dropped_references(self, dropped: tuple[tuple[str, str], ...]) -> None:
        log = self._logger.warning if self._settings.warn_on_dangling else self._logger.debug
        for parent, child in dropped:
            # Exactly one endpoint is the inserted item; the other never existed.
            if parent in self._items:
                log(
                    "ordered_collection_dangling_reference",
                    source_id=parent,
                    target_id=child,
                    direction="before",
                )
            else:
                log(
                    "ordered_collection_dangling_reference",
                    source_id=child,
                    target_id=parent,
                    direction="after",
                )


__all__ = ["CacheState", "Dirty", "Fresh", "OrderingEngine"]
