"""Unit tests for the multi-constraint collection facade."""

from __future__ import annotations

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from ordered_collection import CycleFound, MultiOrderedCollection, OrderableCollection
from ordered_collection.ordering.result import SortFailure, SortSuccess


def _joined(collection: MultiOrderedCollection) -> str:
    return "".join(list(collection))


@pytest.mark.unit
def test_same_priority_items_come_back_in_insertion_order() -> None:
    c = MultiOrderedCollection()
    c.add_item("A", 1)
    c.add_item("B", 1)
    c.add_item("C", 1)

    assert _joined(c) == "ABC"


@pytest.mark.unit
def test_higher_priority_comes_first() -> None:
    c = MultiOrderedCollection()
    c.add_item("C", 1)
    c.add_item("B", 2)
    c.add_item("A", 3)

    assert _joined(c) == "ABC"


@pytest.mark.unit
def test_mixed_same_and_different_priorities() -> None:
    c = MultiOrderedCollection()
    c.add_item("C", 2, "C")
    c.add_item("B", 3, "B")
    c.add_item("A", 4, "A")
    c.add_item("D", 1, "D")
    c.add_item("E", 1, "E")
    c.add_item("F", 1, "F")

    assert _joined(c) == "ABCDEF"


@pytest.mark.unit
def test_add_item_before_places_new_item_ahead_of_pivot() -> None:
    c = MultiOrderedCollection()
    cid = c.add_item("C", 2)
    c.add_item("D", 1)
    c.add_item("A", 3)
    c.add_item_before(cid, "B")

    results = _joined(c)
    assert results.index("B") < results.index("C")


@pytest.mark.unit
def test_add_item_after_places_new_item_behind_pivot() -> None:
    c = MultiOrderedCollection()
    c.add_item("C", 2, "C")
    c.add_item("D", 1, "D")
    aid = c.add_item("A", 3, "A")
    c.add_item_after(aid, "B", "B")

    results = _joined(c)
    assert results.index("B") > results.index("A")


@pytest.mark.unit
def test_explicit_id_can_be_referenced() -> None:
    c = MultiOrderedCollection()
    c.add_item("A", 1, "item_a")
    c.add_item_after("item_a", "B")

    assert _joined(c) == "AB"


@pytest.mark.unit
def test_colliding_explicit_ids_are_both_kept() -> None:
    c = MultiOrderedCollection()
    a = c.add_item("A", 1, "an_item")
    b = c.add_item("B", 1, "an_item")
    c.add_item_after(b, "C")

    assert (a, b) == ("an_item", "an_item-1")
    assert "an_item" in c and "an_item-1" in c
    assert _joined(c) == "ABC"


@pytest.mark.unit
def test_pivot_may_be_added_after_items_that_reference_it() -> None:
    c = MultiOrderedCollection()
    c.add_item_after("b", "C", "c")
    c.add_item_before("b", "A", "a")
    c.add_item("B", 3, "b")

    assert _joined(c) == "ABC"


@pytest.mark.unit
def test_reference_to_missing_item_is_ignored() -> None:
    c = MultiOrderedCollection()
    c.add_item_before("nonexistent", "A", "a")

    assert list(c) == ["A"]


@pytest.mark.unit
def test_multiple_before_after_rules_combine() -> None:
    c = MultiOrderedCollection()
    cid = c.add_item("C")
    aid = c.add_item_before(cid, "A")
    c.add("B", before=[cid], after=[aid])

    assert _joined(c) == "ABC"


@pytest.mark.unit
def test_cyclic_rules_raise_with_exact_id_set() -> None:
    c = MultiOrderedCollection()
    cid = c.add_item("C", item_id="C")
    aid = c.add_item_before(cid, "A", "A")
    c.add("B", item_id="B", before=[aid], after=[cid])

    with pytest.raises(CycleFound) as error:
        list(c)
    assert error.value.id_set == {"A", "B", "C"}

    with pytest.raises(CycleFound):
        c.sorted_ids()
    result = c.sort_result()
    assert isinstance(result, SortFailure)


@pytest.mark.unit
def test_iteration_is_restartable_and_idempotent() -> None:
    c = MultiOrderedCollection()
    payloads = [object(), object(), object()]
    for priority, payload in enumerate(payloads):
        c.add_item(payload, priority)

    first = list(c)
    second = list(c)
    assert first == second == list(reversed(payloads))
    assert all(a is b for a, b in zip(first, second))


@pytest.mark.unit
def test_add_after_iteration_is_reflected_on_next_read() -> None:
    c = MultiOrderedCollection()
    c.add_item("A", 2, "A")
    c.add_item("C", 0, "C")
    assert _joined(c) == "AC"

    c.add("B", item_id="B", after=["A"], before=["C"])
    assert _joined(c) == "ABC"
    assert c.sorted_ids() == ("A", "B", "C")
    assert len(c) == 3


@pytest.mark.unit
def test_payloads_are_stored_untouched() -> None:
    c = MultiOrderedCollection()
    unhashable = {"nested": [1, 2]}
    c.add_item(unhashable)
    c.add_item(None, 5)

    assert list(c) == [None, unhashable]
    assert list(c)[1] is unhashable


@pytest.mark.unit
def test_sort_result_exposes_success_without_raising() -> None:
    c = MultiOrderedCollection(id_factory=lambda: "generated")
    c.add_item("x")
    assert c.sort_result() == SortSuccess(("generated",))


@pytest.mark.unit
def test_facade_satisfies_orderable_protocol() -> None:
    assert isinstance(MultiOrderedCollection(), OrderableCollection)


_priorities = st.lists(st.integers(min_value=-5, max_value=5), min_size=0, max_size=40)


@pytest.mark.unit
@settings(max_examples=75, deadline=None)
@given(priorities=_priorities)
def test_priority_only_input_sorts_by_priority_then_insertion(priorities: list[int]) -> None:
    c = MultiOrderedCollection()
    for index, priority in enumerate(priorities):
        c.add_item((priority, index), priority, f"i{index}")

    expected = sorted(
        ((priority, index) for index, priority in enumerate(priorities)),
        key=lambda pair: (-pair[0], pair[1]),
    )
    assert list(c) == expected


@pytest.mark.unit
@settings(max_examples=75, deadline=None)
@given(
    data=st.data(),
    count=st.integers(min_value=1, max_value=25),
)
def test_acyclic_relative_rules_are_all_satisfied(data: st.DataObject, count: int) -> None:
    # Rules only point from lower to higher index, so the input is always acyclic.
    c = MultiOrderedCollection()
    rules: list[tuple[str, str]] = []
    for index in range(count):
        earlier = [f"i{other}" for other in range(index)]
        after = data.draw(st.lists(st.sampled_from(earlier), max_size=3)) if earlier else []
        dangling = data.draw(st.booleans())
        before = ["missing"] if dangling else []
        c.add(index, item_id=f"i{index}", after=after, before=before)
        rules.extend((target, f"i{index}") for target in after)

    order = c.sorted_ids()
    assert sorted(order) == sorted(f"i{index}" for index in range(count))
    position = {item_id: index for index, item_id in enumerate(order)}
    for first, second in rules:
        assert position[first] < position[second]
