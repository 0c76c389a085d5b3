"""Tests for common utility types and contract violations."""

from dataclasses import FrozenInstanceError

import pytest

from mapkernel import (
    ContractViolation,
    DuplicateKeyError,
    EmptyMapError,
    MissingKeyError,
    MissingValueError,
    Ordering,
    Pair,
    SharedKeyError,
)
from mapkernel.common import compare


def test_pair_fields_and_equality():
    pair = Pair("green", "two")
    assert pair.key == "green"
    assert pair.value == "two"
    assert pair == Pair("green", "two")
    assert pair != Pair("green", "three")
    assert pair != Pair("blue", "two")


def test_pair_unpacks():
    key, value = Pair("red", "one")
    assert key == "red"
    assert value == "one"


def test_pair_is_immutable():
    pair = Pair("red", "one")
    with pytest.raises(FrozenInstanceError):
        pair.key = "blue"  # type: ignore[misc]


def test_compare():
    assert compare(1, 2) == Ordering.Lt
    assert compare(2, 1) == Ordering.Gt
    assert compare(1, 1) == Ordering.Eq
    assert compare("apple", "banana") == Ordering.Lt
    assert compare("zebra", "apple") == Ordering.Gt


def test_compare_incomparable_raises():
    with pytest.raises(TypeError):
        compare(1, "one")


@pytest.mark.parametrize(
    "error, builtin",
    [
        (DuplicateKeyError("k"), KeyError),
        (MissingKeyError("k"), KeyError),
        (SharedKeyError("k"), KeyError),
        (EmptyMapError(), LookupError),
        (MissingValueError("v"), LookupError),
    ],
)
def test_violations_are_distinguishable(error, builtin):
    assert isinstance(error, ContractViolation)
    assert isinstance(error, builtin)
    assert str(error).startswith("Violation of: ")


def test_violation_messages():
    assert str(DuplicateKeyError("red")) == "Violation of: 'red' is not in DOMAIN(this)"
    assert str(MissingKeyError("red")) == "Violation of: 'red' is in DOMAIN(this)"
    assert str(EmptyMapError()) == "Violation of: |this| > 0"
    assert MissingKeyError("red").key == "red"
    assert MissingValueError("one").value == "one"


def test_compare_identical_objects_are_equal():
    nan = float("nan")
    assert compare(nan, nan) == Ordering.Eq
    assert compare(nan, float("nan")) == Ordering.Gt
