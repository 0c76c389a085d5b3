"""Map implementation based on a separately chained hash table.

Entries are kept in a dense array and each bucket holds indices into it.
Removing an entry moves the last entry into the vacated slot, so remove and
remove_any stay O(1) on average and remove_any never scans for an occupied
bucket.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterator, List, Optional, Tuple, override

from mapkernel import constants
from mapkernel.common import Pair
from mapkernel.errors import DuplicateKeyError, EmptyMapError, MissingKeyError
from mapkernel.kernel import Map

__all__ = ["HashConfig", "HashMap"]


@dataclass(frozen=True)
class HashConfig:
    """Sizing parameters for a HashMap.

    Attributes:
        initial_buckets: Bucket count of a fresh (or cleared) table.
        max_load: Entries per bucket allowed before the table doubles.
    """

    initial_buckets: int = constants.DEFAULT_INITIAL_BUCKETS
    max_load: float = constants.DEFAULT_MAX_LOAD

    def __post_init__(self) -> None:
        if self.initial_buckets < 1:
            raise ValueError(
                f"initial_buckets must be positive, got {self.initial_buckets}"
            )
        if not self.max_load > 0:
            raise ValueError(f"max_load must be positive, got {self.max_load}")


def _empty_buckets(count: int) -> List[List[int]]:
    return [[] for _ in range(count)]


class HashMap[K, V](Map[K, V]):
    """A Map over hashable keys with average O(1) kernel operations.

    Example:
        >>> m = HashMap()
        >>> m.add("red", "one")
        >>> m.value("red")
        'one'
        >>> m.remove("red")
        Pair(key='red', value='one')
    """

    def __init__(self, config: Optional[HashConfig] = None) -> None:
        self._config = config if config is not None else HashConfig()
        self._entries: List[Pair[K, V]] = []
        self._buckets = _empty_buckets(self._config.initial_buckets)

    @property
    def config(self) -> HashConfig:
        return self._config

    def bucket_count(self) -> int:
        return len(self._buckets)

    def _bucket(self, key: K) -> List[int]:
        return self._buckets[hash(key) % len(self._buckets)]

    def _find(self, key: K) -> Tuple[List[int], int]:
        """Locate a key, returning its bucket and position in that bucket.

        The position is -1 when the key is absent.
        """
        bucket = self._bucket(key)
        for pos, index in enumerate(bucket):
            stored = self._entries[index].key
            if stored is key or stored == key:
                return bucket, pos
        return bucket, -1

    def _evict(self, index: int) -> Pair[K, V]:
        """Remove the entry at a dense index whose bucket slot is already gone."""
        removed = self._entries[index]
        last = self._entries.pop()
        if index < len(self._entries):
            # Move the former last entry into the hole and repoint its bucket
            self._entries[index] = last
            last_bucket = self._bucket(last.key)
            last_bucket[last_bucket.index(len(self._entries))] = index
        return removed

    def _grow(self) -> None:
        old_count = len(self._buckets)
        new_count = 2 * old_count
        logging.debug(
            "Growing hash table from %d to %d buckets at %d entries",
            old_count,
            new_count,
            len(self._entries),
        )
        self._buckets = _empty_buckets(new_count)
        for index, pair in enumerate(self._entries):
            self._bucket(pair.key).append(index)

    @override
    def add(self, key: K, value: V) -> None:
        bucket, pos = self._find(key)
        if pos >= 0:
            raise DuplicateKeyError(key)
        if len(self._entries) + 1 > self._config.max_load * len(self._buckets):
            self._grow()
            bucket = self._bucket(key)
        bucket.append(len(self._entries))
        self._entries.append(Pair(key, value))

    @override
    def remove(self, key: K) -> Pair[K, V]:
        bucket, pos = self._find(key)
        if pos < 0:
            raise MissingKeyError(key)
        return self._evict(bucket.pop(pos))

    @override
    def remove_any(self) -> Pair[K, V]:
        if not self._entries:
            raise EmptyMapError()
        index = len(self._entries) - 1
        self._bucket(self._entries[index].key).remove(index)
        return self._evict(index)

    @override
    def value(self, key: K) -> V:
        bucket, pos = self._find(key)
        if pos < 0:
            raise MissingKeyError(key)
        return self._entries[bucket[pos]].value

    @override
    def has_key(self, key: K) -> bool:
        _, pos = self._find(key)
        return pos >= 0

    @override
    def size(self) -> int:
        return len(self._entries)

    @override
    def iter(self) -> Iterator[Tuple[K, V]]:
        # Removals relocate entries, so walk a snapshot
        for pair in list(self._entries):
            yield (pair.key, pair.value)

    @override
    def clear(self) -> None:
        self._entries = []
        self._buckets = _empty_buckets(self._config.initial_buckets)

    @override
    def new_instance(self) -> HashMap[K, V]:
        return HashMap(self._config)

    @override
    def transfer_from(self, source: Map[K, V]) -> None:
        if isinstance(source, HashMap) and source is not self:
            # Steal the storage outright instead of moving entry by entry
            self._entries = source._entries
            self._buckets = source._buckets
            source._entries = []
            source._buckets = _empty_buckets(source._config.initial_buckets)
        else:
            super().transfer_from(source)
