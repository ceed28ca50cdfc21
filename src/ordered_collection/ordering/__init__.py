"""Constraint normalization, topological sorting, and the caching engine."""

from __future__ import annotations

from ordered_collection.ordering.engine import CacheState, Dirty, Fresh, OrderingEngine
from ordered_collection.ordering.graph import ConstraintGraph
from ordered_collection.ordering.normalize import build_constraint_graph
from ordered_collection.ordering.result import CycleFound, SortFailure, SortResult, SortSuccess

__all__ = [
    "CacheState",
    "ConstraintGraph",
    "CycleFound",
    "Dirty",
    "Fresh",
    "OrderingEngine",
    "SortFailure",
    "SortResult",
    "SortSuccess",
    "build_constraint_graph",
]
