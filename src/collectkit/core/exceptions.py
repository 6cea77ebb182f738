"""Error taxonomy for collection operations.

Every error raised by the package derives from :class:`CollectionError` and also
from the closest builtin exception, so callers can catch either the package
error or the builtin one (``KeyError``, ``ValueError``, ``TypeError``,
``LookupError``).
"""

from typing import Any, List

__all__ = [
    "CollectionError",
    "KeyNotFound",
    "InvalidKey",
    "InvalidItem",
    "ItemMatchingError",
    "NoMatch",
    "AmbiguousMatch",
    "InvalidGroupKey",
]


class CollectionError(Exception):
    """Base class for all collection errors."""


class KeyNotFound(CollectionError, KeyError):
    """Raised when reading or removing a key that is not in the collection."""

    def __init__(self, key: Any):
        self.key = key
        super().__init__(f"Element with key {key!r} was not found in collection")

    def __str__(self) -> str:
        # KeyError would otherwise render the repr of the message
        return self.args[0]


class InvalidKey(CollectionError, TypeError):
    """Raised when a key is neither an int nor a str."""

    def __init__(self, key: Any):
        self.key = key
        super().__init__(
            f"Collection keys must be int or str, got {type(key).__name__}"
        )


class InvalidItem(CollectionError, ValueError):
    """Raised when a validator rejects an item."""

    def __init__(self, item: Any, reason: str = "Invalid item provided to collection"):
        self.item = item
        self.reason = reason
        super().__init__(reason)


class ItemMatchingError(CollectionError, LookupError):
    """Base class for predicate matching failures."""


class NoMatch(ItemMatchingError):
    """Raised by ``match_one`` when no item satisfies the predicate."""

    def __init__(self, message: str = "Unable to match item based on provided callback"):
        super().__init__(message)


class AmbiguousMatch(ItemMatchingError):
    """Raised by ``match_one`` when more than one item satisfies the predicate.

    Attributes:
        matched_items: Every item the predicate selected, in iteration order.
    """

    def __init__(
        self,
        matched_items: List[Any],
        message: str = "Matched more than one item based on provided callback",
    ):
        self.matched_items = list(matched_items)
        super().__init__(f"{message} ({len(self.matched_items)} matches)")


class InvalidGroupKey(CollectionError, TypeError):
    """Raised when a ``group`` callback returns something other than int, float or str."""

    def __init__(self, value: Any):
        self.value = value
        super().__init__(
            "group callback must return a value that is either an int, str or float, "
            f"got {type(value).__name__}"
        )
