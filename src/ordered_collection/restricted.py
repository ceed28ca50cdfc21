"""Single-constraint ordered collection."""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any

from ordered_collection.config.loader import CollectionSettings
from ordered_collection.constants import DEFAULT_PRIORITY
from ordered_collection.domain.ids import IdFactory
from ordered_collection.ordering.engine import OrderingEngine


class OrderedCollection:
    """
    Ordered collection where each item has a priority or one before/after rule.

    Shares the engine, tie-break, and dangling-reference handling of
    ``MultiOrderedCollection``; it only omits the general ``add`` so no item
    can carry more than one relative rule.
    """

    __slots__ = ("_engine",)

    def __init__(
        self,
        *,
        settings: CollectionSettings | None = None,
        id_factory: IdFactory | None = None,
        logger: Any | None = None,
    ) -> None:
        self._engine = OrderingEngine(settings=settings, id_factory=id_factory, logger=logger)

    def add_item(
        self, payload: object, priority: int = DEFAULT_PRIORITY, item_id: str | None = None
    ) -> str:
        return self._engine.insert(payload, item_id=item_id, priority=priority)

    def add_item_before(self, pivot_id: str, payload: object, item_id: str | None = None) -> str:
        return self._engine.insert(payload, item_id=item_id, before=(_pivot(pivot_id),))

    def add_item_after(self, pivot_id: str, payload: object, item_id: str | None = None) -> str:
        return self._engine.insert(payload, item_id=item_id, after=(_pivot(pivot_id),))

    def __iter__(self) -> Iterator[Any]:
        yield from self._engine.payloads()

    def __len__(self) -> int:
        return len(self._engine)

    def __contains__(self, item_id: object) -> bool:
        return item_id in self._engine

    def sorted_ids(self) -> tuple[str, ...]:
        return self._engine.ordered_ids()


def _pivot(pivot_id: str) -> str:
    if not isinstance(pivot_id, str):
        raise TypeError(f"pivot_id must be a string, got {type(pivot_id).__name__}")
    return pivot_id


__all__ = ["OrderedCollection"]
