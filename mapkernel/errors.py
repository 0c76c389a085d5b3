"""Contract violations raised by map operations.

Every map operation is total on its precondition. Calling one outside its
precondition is a programming error, reported synchronously by raising a
ContractViolation subclass at the violating call. The map is left exactly
as it was before the call.

The concrete classes also derive from the closest builtin lookup error, so
callers that only know about KeyError or LookupError still see a familiar
type.
"""

from __future__ import annotations

from typing import Any

__all__ = [
    "ContractViolation",
    "DuplicateKeyError",
    "EmptyMapError",
    "MissingKeyError",
    "MissingValueError",
    "SharedKeyError",
]


class ContractViolation(Exception):
    """Base class for every precondition violation."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message
        return self.message


class DuplicateKeyError(ContractViolation, KeyError):
    """Raised by add when the key is already present."""

    def __init__(self, key: Any) -> None:
        super().__init__(f"Violation of: {key!r} is not in DOMAIN(this)")
        self.key = key


class MissingKeyError(ContractViolation, KeyError):
    """Raised by remove, value and replace_value when the key is absent."""

    def __init__(self, key: Any) -> None:
        super().__init__(f"Violation of: {key!r} is in DOMAIN(this)")
        self.key = key


class EmptyMapError(ContractViolation, LookupError):
    """Raised by remove_any on an empty map."""

    def __init__(self) -> None:
        super().__init__("Violation of: |this| > 0")


class MissingValueError(ContractViolation, LookupError):
    """Raised by key when no key is associated with the value."""

    def __init__(self, value: Any) -> None:
        super().__init__(f"Violation of: {value!r} is in RANGE(this)")
        self.value = value


class SharedKeyError(ContractViolation, KeyError):
    """Raised by combine_with when both maps hold the same key."""

    def __init__(self, key: Any) -> None:
        super().__init__(
            f"Violation of: DOMAIN(this) intersection DOMAIN(m) = {{}}: {key!r}"
        )
        self.key = key
