from mapkernel.common import Ordering, Pair
from mapkernel.errors import (
    ContractViolation,
    DuplicateKeyError,
    EmptyMapError,
    MissingKeyError,
    MissingValueError,
    SharedKeyError,
)
from mapkernel.hashmap import HashConfig, HashMap
from mapkernel.kernel import Map
from mapkernel.reference import ReferenceMap
from mapkernel.treemap import TreeMap

__all__ = [
    "ContractViolation",
    "DuplicateKeyError",
    "EmptyMapError",
    "HashConfig",
    "HashMap",
    "Map",
    "MissingKeyError",
    "MissingValueError",
    "Ordering",
    "Pair",
    "ReferenceMap",
    "SharedKeyError",
    "TreeMap",
]
