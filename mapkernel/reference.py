"""Trusted reference Map backed by the builtin dict.

Used as the oracle that other implementations are compared against.
"""

from __future__ import annotations

from typing import Dict, Iterator, Tuple, override

from mapkernel.common import Pair
from mapkernel.errors import DuplicateKeyError, EmptyMapError, MissingKeyError
from mapkernel.kernel import Map

__all__ = ["ReferenceMap"]


class ReferenceMap[K, V](Map[K, V]):
    def __init__(self) -> None:
        self._dict: Dict[K, V] = {}

    @override
    def add(self, key: K, value: V) -> None:
        if key in self._dict:
            raise DuplicateKeyError(key)
        self._dict[key] = value

    @override
    def remove(self, key: K) -> Pair[K, V]:
        if key not in self._dict:
            raise MissingKeyError(key)
        value = self._dict.pop(key)
        return Pair(key, value)

    @override
    def remove_any(self) -> Pair[K, V]:
        if not self._dict:
            raise EmptyMapError()
        key, value = self._dict.popitem()
        return Pair(key, value)

    @override
    def value(self, key: K) -> V:
        if key not in self._dict:
            raise MissingKeyError(key)
        return self._dict[key]

    @override
    def has_key(self, key: K) -> bool:
        return key in self._dict

    @override
    def size(self) -> int:
        return len(self._dict)

    @override
    def iter(self) -> Iterator[Tuple[K, V]]:
        yield from list(self._dict.items())

    @override
    def clear(self) -> None:
        self._dict = {}
