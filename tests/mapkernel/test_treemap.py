"""Tests for the weight-balanced tree backed TreeMap."""

from typing import Any, List

import pytest
from hypothesis import given
from hypothesis import strategies as st

from mapkernel import Map, MissingKeyError, Pair, ReferenceMap, TreeMap
from mapkernel.constants import TREE_DELTA
from mapkernel.treemap import Tree, TreeBranch, TreeTip, _tree_iter
from tests.mapkernel.conformance import MapConformance
from tests.mapkernel.hypo import configure_hypo

configure_hypo()


class TestTreeMapConformance(MapConformance):
    def constructor_test(self) -> Map[str, str]:
        return TreeMap()

    def constructor_ref(self) -> Map[str, str]:
        return ReferenceMap()


def assert_valid(tree: Tree[Any, Any]) -> None:
    """Check sizes, key order and weight balance at every node."""
    match tree:
        case TreeTip():
            pass
        case TreeBranch(size, left, key, _, right):
            assert size == left.size() + 1 + right.size()
            assert left.weight() <= TREE_DELTA * right.weight()
            assert right.weight() <= TREE_DELTA * left.weight()
            assert all(left_key < key for left_key in tree_keys(left))
            assert all(right_key > key for right_key in tree_keys(right))
            assert_valid(left)
            assert_valid(right)


def tree_keys(tree: Tree[Any, Any]) -> List[Any]:
    return [key for key, _ in _tree_iter(tree)]


def test_empty_map():
    tmap: TreeMap[int, str] = TreeMap()
    assert tmap.null()
    assert tmap.size() == 0
    assert tmap.list() == []


def test_iterates_in_key_order():
    tmap: TreeMap[int, str] = TreeMap()
    for key in [5, 2, 8, 1, 9, 3]:
        tmap.add(key, str(key))
    assert [key for key, _ in tmap.iter()] == [1, 2, 3, 5, 8, 9]
    assert tmap.list()[0] == (1, "1")


def test_ascending_inserts_stay_balanced():
    tmap: TreeMap[int, int] = TreeMap()
    for i in range(200):
        tmap.add(i, i)
        assert_valid(tmap._root)
    assert tmap.size() == 200


def test_remove_any_takes_root():
    tmap: TreeMap[int, int] = TreeMap()
    for i in range(7):
        tmap.add(i, -i)
    match tmap._root:
        case TreeBranch(_, _, root_key, root_value, _):
            assert tmap.remove_any() == Pair(root_key, root_value)
        case _:
            raise AssertionError("expected a branch")
    assert tmap.size() == 6
    assert_valid(tmap._root)


def test_remove_returns_stored_entry():
    tmap: TreeMap[str, int] = TreeMap()
    tmap.add("a", 1)
    tmap.add("b", 2)
    assert tmap.remove("a") == Pair("a", 1)
    assert tmap.list() == [("b", 2)]


def test_failed_remove_keeps_tree():
    tmap: TreeMap[int, int] = TreeMap()
    for i in range(10):
        tmap.add(i, i)
    root = tmap._root
    with pytest.raises(MissingKeyError) as exc_info:
        tmap.remove(42)
    assert exc_info.value.key == 42
    assert tmap._root is root


def test_transfer_from_tree_map():
    source: TreeMap[int, int] = TreeMap()
    source.add(1, 10)
    target: TreeMap[int, int] = TreeMap()
    target.add(2, 20)

    target.transfer_from(source)

    assert source.null()
    assert target.list() == [(1, 10)]


@given(st.lists(st.integers(), max_size=60), st.data())
def test_balanced_after_any_ops(keys: List[int], data: st.DataObject) -> None:
    """Adds and removes in any order keep the tree valid."""
    tmap: TreeMap[int, int] = TreeMap()
    for key in keys:
        if not tmap.has_key(key):
            tmap.add(key, key)
            assert_valid(tmap._root)
    present = sorted(set(keys))
    for key in data.draw(st.permutations(present)):
        if data.draw(st.booleans()) and tmap:
            pair = tmap.remove_any()
            assert pair.key == pair.value
        elif tmap.has_key(key):
            assert tmap.remove(key) == Pair(key, key)
        assert_valid(tmap._root)
    remaining = [key for key, _ in tmap.iter()]
    assert remaining == sorted(remaining)


def test_incomparable_key_is_absent():
    tmap: TreeMap[str, int] = TreeMap()
    tmap.add("red", 1)
    assert not tmap.has_key(1)  # type: ignore[arg-type]
    with pytest.raises(MissingKeyError):
        tmap.value(1)  # type: ignore[arg-type]
    assert tmap.list() == [("red", 1)]


def test_identical_key_is_found():
    nan = float("nan")
    tmap: TreeMap[float, int] = TreeMap()
    tmap.add(nan, 1)
    assert tmap.has_key(nan)
    assert tmap.value(nan) == 1
    assert tmap.remove(nan) == Pair(nan, 1)
