"""Functional primitives for collectkit.

This module provides the stateless helpers the collection builds on: the
strict equality contract used by set operations, de-duplication and the
comparators used by the ordering methods. Utilities are side-effect-free so
they can be reused outside of a collection.
"""

from collectkit.functional.compare import (
    contains_strictly,
    key_order,
    sort_with_comparator,
    strictly_equal,
    unique_items,
)

__all__ = [
    "strictly_equal",
    "contains_strictly",
    "unique_items",
    "key_order",
    "sort_with_comparator",
]
