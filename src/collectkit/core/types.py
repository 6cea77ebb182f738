"""Reusable type definitions for the collectkit package.

This module provides type aliases and constrained types shared by the
collection, its validators and the functional helpers.

Type Aliases:
    Key: A collection key, a strict int or a strict str.
    GroupKey: A value a ``group`` callback may return (int, float or str).
    NonNegativeInt: An int greater than or equal to zero, used for pagination.
    Comparator: A three-way comparison callback.

The strict aliases are backed by pydantic ``TypeAdapter`` instances so that
``bool`` (a subclass of ``int``) and numeric strings are never accepted in
place of a real key.
"""

from typing import Annotated, Any, Callable, Hashable, TypeVar, Union

import annotated_types as at
from pydantic import StrictFloat, StrictInt, StrictStr, TypeAdapter

__all__ = [
    "T",
    "Key",
    "GroupKey",
    "NonNegativeInt",
    "Comparator",
    "Predicate",
    "KEY_ADAPTER",
    "GROUP_KEY_ADAPTER",
    "WINDOW_ADAPTER",
]

T = TypeVar("T")

# Keys may be sequential ints or explicitly supplied strings
Key = Union[StrictInt, StrictStr]

# Values accepted from a group callback; floats are kept as-is
GroupKey = Union[StrictInt, StrictFloat, StrictStr]

# Counts and offsets used for windowing
NonNegativeInt = Annotated[int, at.Ge(0)]

Comparator = Callable[[Any, Any], int]
Predicate = Callable[[Any], Any]

KEY_ADAPTER: TypeAdapter[Hashable] = TypeAdapter(Key)
GROUP_KEY_ADAPTER: TypeAdapter[Hashable] = TypeAdapter(GroupKey)
WINDOW_ADAPTER: TypeAdapter[int] = TypeAdapter(NonNegativeInt)
