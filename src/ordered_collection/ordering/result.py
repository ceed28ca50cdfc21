"""Sort outcomes: an ordered ID sequence or the set of IDs blocked by a cycle."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Literal, NoReturn


class CycleFound(ValueError):
    """Raised when the ordering constraints admit no total order."""

    ids: tuple[str, ...]

    def __init__(self, ids: Iterable[str]) -> None:
        self.ids = tuple(ids)
        super().__init__(f"Cycle detected involving entries: {', '.join(self.ids)}")

    @property
    def id_set(self) -> frozenset[str]:
        return frozenset(self.ids)


@dataclass(frozen=True, slots=True)
class SortSuccess:
    order: tuple[str, ...]
    ok: Literal[True] = True

    def unwrap(self) -> tuple[str, ...]:
        return self.order


@dataclass(frozen=True, slots=True)
class SortFailure:
    """
    Kahn's algorithm stalled.

    ``unresolved`` holds every ID that was never emitted, in insertion order.
    That is the cycle members plus anything downstream of them, so it is a
    superset of any minimal cycle.
    """

    unresolved: tuple[str, ...]
    ok: Literal[False] = False

    def unwrap(self) -> NoReturn:
        raise CycleFound(self.unresolved)


SortResult = SortSuccess | SortFailure

__all__ = ["CycleFound", "SortFailure", "SortResult", "SortSuccess"]
