"""Public collection facade over the ordering engine."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from typing import Any, Protocol, runtime_checkable

from ordered_collection.config.loader import CollectionSettings
from ordered_collection.constants import DEFAULT_PRIORITY
from ordered_collection.domain.ids import IdFactory
from ordered_collection.ordering.engine import OrderingEngine
from ordered_collection.ordering.result import SortResult


@runtime_checkable
class OrderableCollection(Protocol):
    """A collection of arbitrary values returned in priority / before-after order."""

    def add_item(self, payload: object, priority: int = 0, item_id: str | None = None) -> str:
        """Add ``payload`` at ``priority`` (higher comes first) and return its ID."""
        ...

    def add_item_before(self, pivot_id: str, payload: object, item_id: str | None = None) -> str:
        """
        Add ``payload`` so it is returned before the item ``pivot_id``.

        Nothing is promised about its position relative to any other item.
        """
        ...

    def add_item_after(self, pivot_id: str, payload: object, item_id: str | None = None) -> str:
        """
        Add ``payload`` so it is returned after the item ``pivot_id``.

        Nothing is promised about its position relative to any other item.
        """
        ...

    def __iter__(self) -> Iterator[Any]: ...


class MultiOrderedCollection:
    """
    Ordered collection allowing any number of before/after rules per item.

    Priorities are turned into before edges between adjacent priority levels
    and the whole set is topologically sorted on first read. Unconstrained
    items of equal priority come out in insertion order in practice, but
    callers should not depend on that.

    Iteration raises ``CycleFound`` when the rules contradict each other.
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
        return self.add(payload, item_id=item_id, priority=priority)

    def add_item_before(self, pivot_id: str, payload: object, item_id: str | None = None) -> str:
        return self.add(payload, item_id=item_id, before=(pivot_id,))

    def add_item_after(self, pivot_id: str, payload: object, item_id: str | None = None) -> str:
        return self.add(payload, item_id=item_id, after=(pivot_id,))

    def add(
        self,
        payload: object,
        *,
        item_id: str | None = None,
        priority: int | None = None,
        before: Iterable[str] | None = None,
        after: Iterable[str] | None = None,
    ) -> str:
        """
        Add ``payload`` to the collection.

        Parameters
        ----------
        payload:
            Any value; it is stored and returned untouched.
        item_id:
            Opaque ID for later reference. If it is taken, a ``-<n>`` suffix is
            added. Omit it to have one generated.
        priority:
            Higher numbers sort first. May be combined with ``before``/``after``.
            When nothing at all is given the item sits at priority 0.
        before / after:
            IDs this item must precede / follow. IDs not in the collection when
            it is read are ignored.

        Returns the ID actually stored.
        """
        return self._engine.insert(
            payload, item_id=item_id, priority=priority, before=before, after=after
        )

    def __iter__(self) -> Iterator[Any]:
        yield from self._engine.payloads()

    def __len__(self) -> int:
        return len(self._engine)

    def __contains__(self, item_id: object) -> bool:
        return item_id in self._engine

    def sorted_ids(self) -> tuple[str, ...]:
        return self._engine.ordered_ids()

    def sort_result(self) -> SortResult:
        """Sort outcome without raising; inspect ``ok`` to tell success from a cycle."""
        return self._engine.sort()


__all__ = ["MultiOrderedCollection", "OrderableCollection"]
