"""Core collection types, validators and errors."""

from collectkit.core.collection import Collection
from collectkit.core.exceptions import (
    AmbiguousMatch,
    CollectionError,
    InvalidGroupKey,
    InvalidItem,
    InvalidKey,
    ItemMatchingError,
    KeyNotFound,
    NoMatch,
)
from collectkit.core.validators import (
    AnyItemValidator,
    ContainerValidator,
    ItemValidator,
    ObjectValidator,
    PredicateValidator,
    StringValidator,
    TypeAdapterValidator,
)
from collectkit.core.variants import ArrayCollection, ObjectCollection, StringCollection

__all__ = [
    "Collection",
    "ArrayCollection",
    "ObjectCollection",
    "StringCollection",
    "ItemValidator",
    "AnyItemValidator",
    "ContainerValidator",
    "ObjectValidator",
    "StringValidator",
    "TypeAdapterValidator",
    "PredicateValidator",
    "CollectionError",
    "KeyNotFound",
    "InvalidKey",
    "InvalidItem",
    "ItemMatchingError",
    "NoMatch",
    "AmbiguousMatch",
    "InvalidGroupKey",
]
