"""Validated, ordered, keyed in-memory collections."""

from collectkit.core import (
    AmbiguousMatch,
    ArrayCollection,
    Collection,
    CollectionError,
    InvalidGroupKey,
    InvalidItem,
    InvalidKey,
    KeyNotFound,
    NoMatch,
    ObjectCollection,
    StringCollection,
)

__all__ = [
    "Collection",
    "ArrayCollection",
    "ObjectCollection",
    "StringCollection",
    "CollectionError",
    "KeyNotFound",
    "InvalidKey",
    "InvalidItem",
    "NoMatch",
    "AmbiguousMatch",
    "InvalidGroupKey",
]
