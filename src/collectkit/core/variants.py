"""Concrete collection variants bound to a specific item validator.

    >>> ArrayCollection([[1], [2], [3]]).add([4]).count()
    4
    >>> StringCollection(["b", "a", "c"]).sort().values()
    ['a', 'b', 'c']
"""

from typing import Any, ClassVar, Iterable, Optional

from collectkit.core.collection import Collection
from collectkit.core.validators import (
    ContainerValidator,
    ItemValidator,
    ObjectValidator,
    StringValidator,
)

__all__ = [
    "ArrayCollection",
    "ObjectCollection",
    "StringCollection",
]


class ArrayCollection(Collection[Any]):
    """Collection of containers (lists, tuples, dicts)."""

    def _default_validator(self) -> ItemValidator:
        return ContainerValidator()


class ObjectCollection(Collection[Any]):
    """Collection of structured objects, optionally all of one class.

    The accepted class is either passed as ``item_type`` or declared on a
    subclass:

        >>> class Point:
        ...     pass
        >>> class PointCollection(ObjectCollection):
        ...     item_type = Point
        >>> PointCollection([Point()]).count()
        1

    Args:
        items: Seed items.
        item_type: Class every item must be an instance of. Overrides the class
            attribute. None accepts any structured object.
        validator: Explicit validator; takes precedence over ``item_type``.
        atomic: Seeding policy, see :class:`Collection`.
    """

    item_type: ClassVar[Optional[type]] = None

    def __init__(
        self,
        items: Iterable[Any] = (),
        item_type: Optional[type] = None,
        *,
        validator: Optional[ItemValidator] = None,
        atomic: Optional[bool] = None,
    ):
        if validator is None:
            validator = ObjectValidator(item_type or type(self).item_type)
        super().__init__(items, validator=validator, atomic=atomic)

    def _default_validator(self) -> ItemValidator:
        return ObjectValidator(type(self).item_type)


class StringCollection(Collection[str]):
    """Collection of strings."""

    def _default_validator(self) -> ItemValidator:
        return StringValidator()

    def sort(self) -> "StringCollection":
        """Sort the strings in place; every key is replaced by its new position."""
        ordered = sorted(self._items.values())
        self._items = dict(enumerate(ordered))
        self._next_key = len(ordered)
        return self

    def to_lower(self) -> "StringCollection":
        """Clean clone holding every string lower-cased, in the same order."""
        clone = self._clean_clone()
        for item in self:
            clone.add(item.lower())
        return clone  # type: ignore
