"""Common utility types and functions for the mapkernel library.

This module provides the small shared vocabulary used by every map
implementation: sizing and iteration mixins, three-way comparison, and
the Pair snapshot returned by removal operations.
"""

from __future__ import annotations

from abc import ABCMeta, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Iterator, List

__all__ = [
    "Impossible",
    "Iterating",
    "Ordering",
    "Pair",
    "Sized",
    "compare",
]


class Impossible(Exception):
    """Exception raised when encountering theoretically impossible states.

    Used to indicate internal consistency violations in data structure operations.
    """

    pass


class Sized(metaclass=ABCMeta):
    @abstractmethod
    def size(self) -> int: ...

    def null(self) -> bool:
        return self.size() == 0

    def __bool__(self) -> bool:
        return not self.null()

    def __len__(self) -> int:
        return self.size()


class Iterating[U](metaclass=ABCMeta):
    @abstractmethod
    def iter(self) -> Iterator[U]: ...

    def list(self) -> List[U]:
        return list(self.iter())

    def __iter__(self) -> Iterator[U]:
        return self.iter()


class Ordering(Enum):
    """Enumeration representing the result of a comparison operation."""

    Lt = -1
    Eq = 0
    Gt = 1


@dataclass(frozen=True)
class Pair[K, V]:
    """An immutable snapshot of one key-value association.

    Pairs are handed out by removal operations and are never retained
    by the map that produced them. They compare equal when both the key
    and the value are equal, and unpack like a tuple:

        >>> key, value = Pair("red", "one")
        >>> (key, value)
        ('red', 'one')
    """

    key: K
    value: V

    def __iter__(self) -> Iterator[K | V]:
        yield self.key
        yield self.value


def compare[T](a: T, b: T) -> Ordering:
    """Compare two values and return their ordering relationship.

    Identical objects are equal, as in builtin containers. Otherwise uses
    the objects' __eq__ and __lt__ methods to determine the comparison result.

    Args:
        a: First value to compare.
        b: Second value to compare.

    Returns:
        Ordering indicating the relationship between a and b.
    """
    # Incomparable operands raise TypeError from the operator itself
    if a is b or a == b:
        return Ordering.Eq
    elif a < b:  # type: ignore[operator]
        return Ordering.Lt
    else:
        return Ordering.Gt
