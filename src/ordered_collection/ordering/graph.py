"""Insertion-ordered constraint graph with FIFO topological sorting."""

from __future__ import annotations

from collections import deque
from collections.abc import Iterable, Sequence

from ordered_collection.ordering.result import SortFailure, SortResult, SortSuccess


class _Barrier:
    """Synthetic node ordering one group of nodes before another."""

    __slots__ = ()


_Node = str | _Barrier


class ConstraintGraph:
    """
    Directed graph over item IDs where ``u -> v`` means ``u`` precedes ``v``.

    Nodes and each node's successors keep the order in which they were added,
    so traversal never depends on string hashing. Edges that touch an unknown
    node are not an error: they are dropped and remembered in
    :attr:`dropped_edges`.

    Group ordering (:meth:`link_groups`) goes through barrier nodes. Barriers
    are identity-compared objects, so they never collide with an item ID, and
    they never appear in a sort result.
    """

    __slots__ = ("_children", "_parent_count", "_dropped")

    def __init__(
        self,
        nodes: Iterable[str] | None = None,
        edges: Iterable[tuple[str, str]] | None = None,
    ) -> None:
        # dict values double as insertion-ordered sets of successors.
        self._children: dict[_Node, dict[_Node, None]] = {}
        self._parent_count: dict[_Node, int] = {}
        self._dropped: list[tuple[str, str]] = []

        if nodes is not None:
            for node_id in nodes:
                self.add_node(node_id)

        if edges is not None:
            for parent, child in edges:
                self.add_edge(parent, child)

    @property
    def edge_count(self) -> int:
        return sum(self._parent_count.values())

    @property
    def dropped_edges(self) -> tuple[tuple[str, str], ...]:
        """Edges rejected because one endpoint is not a node."""
        return tuple(self._dropped)

    def add_node(self, node_id: str) -> None:
        """Add a node if it does not already exist."""
        if not isinstance(node_id, str) or not node_id:
            raise ValueError("Node ID must be a non-empty string.")
        if node_id in self._children:
            return
        self._children[node_id] = {}
        self._parent_count[node_id] = 0

    def add_edge(self, parent: str, child: str) -> bool:
        """
        Add ``parent -> child`` and report whether the edge is present afterwards.

        Repeated edges are kept once. Edges naming an unknown node are dropped.
        """
        if parent not in self._children or child not in self._children:
            self._dropped.append((parent, child))
            return False
        self._link(parent, child)
        return True

    def link_groups(self, parents: Sequence[str], children: Sequence[str]) -> None:
        """
        Order every node of ``parents`` before every node of ``children``.

        One barrier node sits between the groups, so this adds
        ``len(parents) + len(children)`` edges instead of their product.
        Both groups must consist of known nodes.
        """
        if not parents or not children:
            return

        barrier = _Barrier()
        self._children[barrier] = {}
        self._parent_count[barrier] = 0
        for parent in parents:
            self._link(self._known(parent), barrier)
        for child in children:
            self._link(barrier, self._known(child))

    def topological_sort(self) -> SortResult:
        """
        Order nodes with Kahn's algorithm using a FIFO ready queue.

        The queue is seeded with zero in-degree nodes in insertion order and
        newly freed nodes join at the back, so unconstrained nodes come out
        in the order they were added. A barrier is never queued: the moment
        its last parent is emitted its children are released in place.
        """
        indegree = dict(self._parent_count)
        ready: deque[str] = deque(
            node for node, degree in indegree.items() if degree == 0 and isinstance(node, str)
        )

        order: list[str] = []
        while ready:
            node = ready.popleft()
            order.append(node)
            self._release_children(node, indegree, ready)

        item_count = sum(1 for node in self._children if isinstance(node, str))
        if len(order) != item_count:
            emitted = set(order)
            return SortFailure(
                tuple(
                    node
                    for node in self._children
                    if isinstance(node, str) and node not in emitted
                )
            )

        return SortSuccess(tuple(order))

    def _release_children(
        self, node: _Node, indegree: dict[_Node, int], ready: deque[str]
    ) -> None:
        for child in self._children[node]:
            indegree[child] -= 1
            if indegree[child] != 0:
                continue
            if isinstance(child, _Barrier):
                self._release_children(child, indegree, ready)
            else:
                ready.append(child)

    def _link(self, parent: _Node, child: _Node) -> None:
        successors = self._children[parent]
        if child in successors:
            return
        successors[child] = None
        self._parent_count[child] += 1

    def _known(self, node_id: str) -> str:
        if node_id not in self._children:
            raise KeyError(f"Unknown node: {node_id}")
        return node_id


__all__ = ["ConstraintGraph"]
