"""Translate item ordering metadata into a single ``before`` constraint graph."""

from __future__ import annotations

from collections.abc import Sequence

from ordered_collection.domain.item import OrderedItem
from ordered_collection.ordering.graph import ConstraintGraph


def build_constraint_graph(items: Sequence[OrderedItem]) -> ConstraintGraph:
    """
    Build the constraint graph for ``items`` (given in insertion order).

    Edges are added in three passes: each item's own ``before`` entries, then
    ``after`` entries rewritten as ``target -> item``, then priority bucket
    edges. References to unknown IDs are dropped by the graph.
    """
    graph = ConstraintGraph(nodes=(item.id for item in items))

    for item in items:
        for target in item.before:
            graph.add_edge(item.id, target)

    for item in items:
        for target in item.after:
            graph.add_edge(target, item.id)

    _link_priority_buckets(graph, items)
    return graph


def _link_priority_buckets(graph: ConstraintGraph, items: Sequence[OrderedItem]) -> None:
    buckets: dict[int, list[str]] = {}
    for item in items:
        if item.priority is not None:
            buckets.setdefault(item.priority, []).append(item.id)

    # Only adjacent buckets are linked; the sort carries order across the rest.
    ordered = [buckets[priority] for priority in sorted(buckets, reverse=True)]
    for higher, lower in zip(ordered, ordered[1:]):
        graph.link_groups(higher, lower)


__all__ = ["build_constraint_graph"]
