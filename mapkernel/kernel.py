"""The Map contract shared by every implementation.

A Map is a mutable, finite, unordered collection of unique keys, each
associated with exactly one value. Concrete implementations provide the
kernel methods (add, remove, remove_any, value, has_key, size, iter and
clear); everything else here is derived from those, so any two
implementations that honor the kernel contract behave identically.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import Any, Tuple

from mapkernel.common import Iterating, Pair, Sized
from mapkernel.errors import ContractViolation, MissingValueError, SharedKeyError

__all__ = ["Map"]


class Map[K, V](Sized, Iterating[Tuple[K, V]]):
    @abstractmethod
    def add(self, key: K, value: V) -> None:
        """Associate a key with a value.

        Args:
            key: The key to add. Must not already be present.
            value: The value to associate with the key.

        Raises:
            DuplicateKeyError: If the key is already present.
        """
        ...

    @abstractmethod
    def remove(self, key: K) -> Pair[K, V]:
        """Remove the association for a key.

        Args:
            key: The key to remove. Must be present.

        Returns:
            A Pair holding the removed key and its value.

        Raises:
            MissingKeyError: If the key is not present.
        """
        ...

    @abstractmethod
    def remove_any(self) -> Pair[K, V]:
        """Remove some association chosen by the implementation.

        Which association is chosen is unspecified; callers may only rely
        on it having been a member of the map before the call.

        Returns:
            A Pair holding the removed key and its value.

        Raises:
            EmptyMapError: If the map is empty.
        """
        ...

    @abstractmethod
    def value(self, key: K) -> V:
        """Get the value associated with a key.

        Raises:
            MissingKeyError: If the key is not present.
        """
        ...

    @abstractmethod
    def has_key(self, key: K) -> bool:
        """Check whether a key is present."""
        ...

    @abstractmethod
    def clear(self) -> None:
        """Remove every association."""
        ...

    def new_instance(self) -> Map[K, V]:
        """Create an empty map of the same implementation."""
        return type(self)()

    def replace_value(self, key: K, value: V) -> V:
        """Replace the value associated with a present key.

        Returns:
            The value previously associated with the key.

        Raises:
            MissingKeyError: If the key is not present.
        """
        old = self.remove(key)
        self.add(old.key, value)
        return old.value

    def key(self, value: V) -> K:
        """Find some key associated with the given value.

        Raises:
            MissingValueError: If no key is associated with the value.
        """
        for key, candidate in self.iter():
            if candidate == value:
                return key
        raise MissingValueError(value)

    def has_value(self, value: V) -> bool:
        """Check whether some key is associated with the given value."""
        return any(candidate == value for _, candidate in self.iter())

    def shares_key_with(self, other: Map[K, V]) -> bool:
        """Check whether the two maps have at least one key in common."""
        if self.size() <= other.size():
            smaller, larger = self, other
        else:
            smaller, larger = other, self
        return any(larger.has_key(key) for key, _ in smaller.iter())

    def combine_with(self, other: Map[K, V]) -> None:
        """Move every association of other into this map.

        Afterwards other is empty.

        Raises:
            SharedKeyError: If the maps have a key in common. Neither map
                is modified in that case.
        """
        for key, _ in other.iter():
            if self.has_key(key):
                raise SharedKeyError(key)
        while other:
            pair = other.remove_any()
            self.add(pair.key, pair.value)

    def transfer_from(self, source: Map[K, V]) -> None:
        """Take over the contents of source, leaving source empty.

        Whatever this map held before is discarded.

        Raises:
            ContractViolation: If source is this map.
        """
        if source is self:
            raise ContractViolation("Violation of: source is not this")
        self.clear()
        while source:
            pair = source.remove_any()
            self.add(pair.key, pair.value)

    def __contains__(self, key: Any) -> bool:
        return self.has_key(key)

    def __eq__(self, other: Any) -> bool:
        """Structural equality against any Map implementation.

        Two maps are equal iff they hold the same set of key-value pairs,
        regardless of how either one stores them.
        """
        if not isinstance(other, Map):
            return NotImplemented
        if self is other:
            return True
        if self.size() != other.size():
            return False
        # Keys are unique, so equal sizes plus inclusion is set equality
        for key, value in self.iter():
            try:
                if not other.has_key(key) or other.value(key) != value:
                    return False
            except TypeError:
                # A key the other map cannot even order is not in it
                return False
        return True

    def __ne__(self, other: Any) -> bool:
        result = self.__eq__(other)
        return result if result is NotImplemented else not result

    def __repr__(self) -> str:
        body = ", ".join(f"{key!r}: {value!r}" for key, value in self.iter())
        return f"{type(self).__name__}({{{body}}})"
