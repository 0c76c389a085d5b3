"""Map implementation based on weight-balanced trees.

Nodes are immutable; a TreeMap owns a single root reference and replaces it
on every mutation. Keys need a total order (__eq__ and __lt__).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterator, Optional, Tuple, override

from mapkernel.common import Impossible, Ordering, Pair, compare
from mapkernel.constants import TREE_DELTA, TREE_RATIO
from mapkernel.errors import DuplicateKeyError, EmptyMapError, MissingKeyError
from mapkernel.kernel import Map

__all__ = ["Tree", "TreeBranch", "TreeMap", "TreeTip"]


# sealed
class Tree[K, V]:
    def size(self) -> int:
        match self:
            case TreeTip():
                return 0
            case TreeBranch(_size, _, _, _, _):
                return _size
            case _:
                raise Impossible

    def weight(self) -> int:
        return self.size() + 1


@dataclass(frozen=True, eq=False)
class TreeTip[K, V](Tree[K, V]):
    pass


_TIP: Tree[Any, Any] = TreeTip()


@dataclass(frozen=True, eq=False)
class TreeBranch[K, V](Tree[K, V]):
    _size: int
    _left: Tree[K, V]
    _key: K
    _value: V
    _right: Tree[K, V]


class TreeMap[K, V](Map[K, V]):
    """A Map over totally ordered keys with O(log n) kernel operations.

    Iteration visits entries in key order. remove_any takes the entry at
    the root, which is always O(log n) to splice out.

    Example:
        >>> m = TreeMap()
        >>> m.add("red", "one")
        >>> m.add("blue", "three")
        >>> m.list()
        [('blue', 'three'), ('red', 'one')]
    """

    def __init__(self) -> None:
        self._root: Tree[K, V] = _TIP

    @override
    def add(self, key: K, value: V) -> None:
        self._root = _tree_insert(self._root, key, value)

    @override
    def remove(self, key: K) -> Pair[K, V]:
        removed_key, removed_value, self._root = _tree_delete(self._root, key)
        return Pair(removed_key, removed_value)

    @override
    def remove_any(self) -> Pair[K, V]:
        match self._root:
            case TreeTip():
                raise EmptyMapError()
            case TreeBranch(_, left, key, value, right):
                self._root = _tree_glue(left, right)
                return Pair(key, value)
            case _:
                raise Impossible

    def _lookup(self, key: K) -> Optional[TreeBranch[K, V]]:
        try:
            return _tree_lookup(self._root, key)
        except TypeError:
            # Keys incomparable with the stored ones cannot be present
            return None

    @override
    def value(self, key: K) -> V:
        node = self._lookup(key)
        if node is None:
            raise MissingKeyError(key)
        return node._value

    @override
    def has_key(self, key: K) -> bool:
        return self._lookup(key) is not None

    @override
    def size(self) -> int:
        return self._root.size()

    @override
    def iter(self) -> Iterator[Tuple[K, V]]:
        """Iterate over all key-value pairs in key order.

        Time Complexity: O(n) for complete iteration
        Space Complexity: O(log n) for recursion stack
        """
        return _tree_iter(self._root)

    @override
    def clear(self) -> None:
        self._root = _TIP

    @override
    def transfer_from(self, source: Map[K, V]) -> None:
        if isinstance(source, TreeMap) and source is not self:
            self._root = source._root
            source._root = _TIP
        else:
            super().transfer_from(source)


def _tree_iter[K, V](tree: Tree[K, V]) -> Iterator[Tuple[K, V]]:
    match tree:
        case TreeTip():
            return
        case TreeBranch(_, left, key, value, right):
            yield from _tree_iter(left)
            yield (key, value)
            yield from _tree_iter(right)
        case _:
            raise Impossible


def _tree_lookup[K, V](tree: Tree[K, V], key: K) -> Optional[TreeBranch[K, V]]:
    while True:
        match tree:
            case TreeTip():
                return None
            case TreeBranch(_, left, branch_key, _, right):
                cmp = compare(key, branch_key)
                if cmp == Ordering.Eq:
                    return tree
                elif cmp == Ordering.Lt:
                    tree = left
                else:
                    tree = right
            case _:
                raise Impossible


def _tree_insert[K, V](tree: Tree[K, V], key: K, value: V) -> Tree[K, V]:
    match tree:
        case TreeTip():
            return TreeBranch(1, _TIP, key, value, _TIP)
        case TreeBranch(_, left, branch_key, branch_value, right):
            cmp = compare(key, branch_key)
            if cmp == Ordering.Lt:
                new_left = _tree_insert(left, key, value)
                return _tree_balance(new_left, branch_key, branch_value, right)
            elif cmp == Ordering.Gt:
                new_right = _tree_insert(right, key, value)
                return _tree_balance(left, branch_key, branch_value, new_right)
            else:
                raise DuplicateKeyError(key)
        case _:
            raise Impossible


def _tree_delete[K, V](tree: Tree[K, V], key: K) -> Tuple[K, V, Tree[K, V]]:
    """Remove a key, returning the stored key, its value and the new tree."""
    match tree:
        case TreeTip():
            raise MissingKeyError(key)
        case TreeBranch(_, left, branch_key, branch_value, right):
            cmp = compare(key, branch_key)
            if cmp == Ordering.Lt:
                found_key, found_value, new_left = _tree_delete(left, key)
                new_tree = _tree_balance(new_left, branch_key, branch_value, right)
                return (found_key, found_value, new_tree)
            elif cmp == Ordering.Gt:
                found_key, found_value, new_right = _tree_delete(right, key)
                new_tree = _tree_balance(left, branch_key, branch_value, new_right)
                return (found_key, found_value, new_tree)
            else:
                return (branch_key, branch_value, _tree_glue(left, right))
        case _:
            raise Impossible


def _tree_glue[K, V](left: Tree[K, V], right: Tree[K, V]) -> Tree[K, V]:
    """Join balanced siblings where every key in left is below every key in right."""
    match (left, right):
        case (TreeTip(), _):
            return right
        case (_, TreeTip()):
            return left
        case (TreeBranch(), TreeBranch()):
            # Promote from the heavier side so the result stays balanced
            if left.size() > right.size():
                new_left, max_key, max_value = _tree_pop_max(left)
                return _tree_balance(new_left, max_key, max_value, right)
            else:
                min_key, min_value, new_right = _tree_pop_min(right)
                return _tree_balance(left, min_key, min_value, new_right)
        case _:
            raise Impossible


def _tree_pop_min[K, V](tree: Tree[K, V]) -> Tuple[K, V, Tree[K, V]]:
    match tree:
        case TreeBranch(_, left, key, value, right):
            if isinstance(left, TreeTip):
                return (key, value, right)
            min_key, min_value, new_left = _tree_pop_min(left)
            return (min_key, min_value, _tree_balance(new_left, key, value, right))
        case _:
            raise Impossible


def _tree_pop_max[K, V](tree: Tree[K, V]) -> Tuple[Tree[K, V], K, V]:
    match tree:
        case TreeBranch(_, left, key, value, right):
            if isinstance(right, TreeTip):
                return (left, key, value)
            new_right, max_key, max_value = _tree_pop_max(right)
            return (_tree_balance(left, key, value, new_right), max_key, max_value)
        case _:
            raise Impossible


def _tree_branch[K, V](
    left: Tree[K, V], key: K, value: V, right: Tree[K, V]
) -> Tree[K, V]:
    return TreeBranch(left.size() + 1 + right.size(), left, key, value, right)


def _tree_balance[K, V](
    left: Tree[K, V], key: K, value: V, right: Tree[K, V]
) -> Tree[K, V]:
    """Rebuild a node whose subtrees drifted out of balance by at most one entry.

    Weights are subtree sizes plus one. Siblings are balanced when neither
    weighs more than TREE_DELTA times the other; TREE_RATIO decides between
    a single and a double rotation.
    """
    if right.weight() > TREE_DELTA * left.weight():
        match right:
            case TreeBranch(_, right_left, right_key, right_value, right_right):
                if right_left.weight() < TREE_RATIO * right_right.weight():
                    # Single rotation left
                    return _tree_branch(
                        _tree_branch(left, key, value, right_left),
                        right_key,
                        right_value,
                        right_right,
                    )
                match right_left:
                    case TreeBranch(_, rll, right_left_key, right_left_value, rlr):
                        # Double rotation right-left
                        return _tree_branch(
                            _tree_branch(left, key, value, rll),
                            right_left_key,
                            right_left_value,
                            _tree_branch(rlr, right_key, right_value, right_right),
                        )
        raise Impossible
    elif left.weight() > TREE_DELTA * right.weight():
        match left:
            case TreeBranch(_, left_left, left_key, left_value, left_right):
                if left_right.weight() < TREE_RATIO * left_left.weight():
                    # Single rotation right
                    return _tree_branch(
                        left_left,
                        left_key,
                        left_value,
                        _tree_branch(left_right, key, value, right),
                    )
                match left_right:
                    case TreeBranch(_, lrl, left_right_key, left_right_value, lrr):
                        # Double rotation left-right
                        return _tree_branch(
                            _tree_branch(left_left, left_key, left_value, lrl),
                            left_right_key,
                            left_right_value,
                            _tree_branch(lrr, key, value, right),
                        )
        raise Impossible
    return _tree_branch(left, key, value, right)
