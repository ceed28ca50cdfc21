"""Unit tests for the single-constraint collection."""

from __future__ import annotations

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from ordered_collection import (
    CycleFound,
    MultiOrderedCollection,
    OrderableCollection,
    OrderedCollection,
)


@pytest.mark.unit
def test_priorities_and_insertion_order() -> None:
    c = OrderedCollection()
    c.add_item("C", 2, "C")
    c.add_item("B", 3, "B")
    c.add_item("A", 4, "A")
    c.add_item("D", 1, "D")
    c.add_item("E", 1, "E")
    c.add_item("F", 1, "F")

    assert "".join(c) == "ABCDEF"


@pytest.mark.unit
def test_before_and_after_pivots() -> None:
    c = OrderedCollection()
    c.add_item("B", 0, "b")
    c.add_item_before("b", "A", "a")
    c.add_item_after("b", "C", "c")

    assert "".join(c) == "ABC"
    assert c.sorted_ids() == ("a", "b", "c")
    assert len(c) == 3
    assert "a" in c


@pytest.mark.unit
def test_missing_pivot_is_ignored() -> None:
    c = OrderedCollection()
    c.add_item_after("nowhere", "A")
    assert list(c) == ["A"]


@pytest.mark.unit
def test_contradicting_single_rules_still_raise() -> None:
    c = OrderedCollection()
    c.add_item_before("b", "A", "a")
    c.add_item_before("a", "B", "b")

    with pytest.raises(CycleFound) as error:
        list(c)
    assert error.value.id_set == {"a", "b"}


@pytest.mark.unit
def test_no_general_add_and_pivot_must_be_string() -> None:
    c = OrderedCollection()
    assert not hasattr(c, "add")
    with pytest.raises(TypeError, match="pivot_id must be a string"):
        c.add_item_before(["a", "b"], "X")  # type: ignore[arg-type]


@pytest.mark.unit
def test_restricted_facade_satisfies_orderable_protocol() -> None:
    assert isinstance(OrderedCollection(), OrderableCollection)


_operation = st.one_of(
    st.tuples(st.just("priority"), st.integers(min_value=-3, max_value=3)),
    st.tuples(st.just("before"), st.integers(min_value=0, max_value=30)),
    st.tuples(st.just("after"), st.integers(min_value=0, max_value=30)),
)


@pytest.mark.unit
@settings(max_examples=75, deadline=None)
@given(operations=st.lists(_operation, max_size=30))
def test_matches_multi_collection_for_single_rule_input(
    operations: list[tuple[str, int]],
) -> None:
    restricted = OrderedCollection()
    multi = MultiOrderedCollection()

    for index, (kind, argument) in enumerate(operations):
        item_id = f"i{index}"
        for target in (restricted, multi):
            if kind == "priority":
                target.add_item(index, argument, item_id)
            elif kind == "before":
                target.add_item_before(f"i{argument}", index, item_id)
            else:
                target.add_item_after(f"i{argument}", index, item_id)

    assert _outcome(restricted) == _outcome(multi)


def _outcome(collection: OrderableCollection) -> object:
    try:
        return list(collection)
    except CycleFound as exc:
        return exc.id_set
