"""Tuning constants for the map implementations."""

DEFAULT_INITIAL_BUCKETS = 8
"""Number of buckets a fresh HashMap starts with."""

DEFAULT_MAX_LOAD = 0.75
"""Entries per bucket above which a HashMap doubles its bucket count."""

TREE_DELTA = 3
"""Weight ratio between sibling subtrees that triggers a rotation."""

TREE_RATIO = 2
"""Inner to outer grandchild weight ratio choosing a single over a double rotation."""
