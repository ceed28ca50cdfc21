"""Immutable item record held by the ordering engine."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class OrderedItem:
    """
    One inserted payload plus its ordering metadata.

    ``priority`` is ``None`` for items that carry only relative constraints;
    such items are placed purely by their ``before``/``after`` edges. The
    payload is never inspected by the engine.
    """

    id: str
    payload: object
    sequence: int
    priority: int | None = None
    before: tuple[str, ...] = ()
    after: tuple[str, ...] = ()


def normalize_references(field_name: str, raw: Iterable[str] | None) -> tuple[str, ...]:
    """Return referenced IDs deduplicated in first-seen order."""
    if raw is None:
        return ()
    if isinstance(raw, (str, bytes, bytearray)):
        raise TypeError(f"'{field_name}' must be an iterable of item IDs, not a single string")

    seen: dict[str, None] = {}
    for index, reference in enumerate(raw):
        if not isinstance(reference, str):
            raise TypeError(f"'{field_name}[{index}]' must be a string.")
        seen.setdefault(reference, None)
    return tuple(seen)


def validate_priority(priority: int | None) -> int | None:
    if priority is None:
        return None
    if isinstance(priority, bool) or not isinstance(priority, int):
        raise TypeError(f"priority must be an int, got {type(priority).__name__}")
    return priority


__all__ = ["OrderedItem", "normalize_references", "validate_priority"]
