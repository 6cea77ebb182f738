"""Validated, ordered, keyed collections.

This module provides :class:`Collection`, a generic container that keeps items
in insertion order under int or str keys and gates every insertion through a
bound :class:`~collectkit.core.validators.ItemValidator`. On top of the keyed
store it offers functional transforms, set algebra, grouping, predicate
matching and ordering/pagination.

Derived collections (``filter``, ``match``, ``split``, ``intersect``,
``diff``, ``unique``, ``limit`` and the sub-collections built by ``group``)
are *clean clones*: brand new, empty instances of the same class built with the
same validator object, then filled through ``add``. They own their key space
but hold the very same item objects as their origin, so mutating a shared item
through one collection is visible through every other.

Mutating methods return the collection itself so calls can be chained:

    >>> c = Collection([3, 1, 2])
    >>> c.add(5).usort(lambda a, b: a - b).values()
    [1, 2, 3, 5]

Key Features:
    - Sequential int keys on ``add``, arbitrary int/str keys on ``set``
    - Validation on every insertion path, never afterwards
    - Optional atomic seeding (see :mod:`collectkit.config`)
    - Python protocol sugar: ``c[key]``, ``del c[key]``, ``len(c)``,
      ``iter(c)``, ``item in c``
"""

from typing import (
    Any,
    Callable,
    Dict,
    Generic,
    Hashable,
    Iterable,
    Iterator,
    List,
    Optional,
    Tuple,
)

from pydantic import ValidationError

from collectkit.config import settings
from collectkit.core.exceptions import (
    AmbiguousMatch,
    InvalidGroupKey,
    InvalidItem,
    InvalidKey,
    KeyNotFound,
    NoMatch,
)
from collectkit.core.types import (
    GROUP_KEY_ADAPTER,
    KEY_ADAPTER,
    WINDOW_ADAPTER,
    Comparator,
    NonNegativeInt,
    Predicate,
    T,
)
from collectkit.core.validators import AnyItemValidator, ItemValidator, ObjectValidator
from collectkit.functional.compare import (
    contains_strictly,
    key_order,
    sort_with_comparator,
    unique_items,
)
from collectkit.logger import get_logger

__all__ = ["Collection"]

logger = get_logger(__name__)


def _is_int_key(key: Hashable) -> bool:
    return isinstance(key, int) and not isinstance(key, bool)


class Collection(Generic[T]):
    """Ordered keyed store of validated items.

    The plain ``Collection`` accepts any item unless a validator is supplied.
    Subclasses pick their own default by overriding :meth:`_default_validator`
    and must accept the ``validator`` and ``atomic`` keyword arguments, which
    is how clean clones are built.

    Args:
        items: Seed items, each inserted through :meth:`add` in order.
        validator: Strategy deciding which items may be inserted. Bound for the
            collection's lifetime.
        atomic: When True, a seed item failing validation rolls the collection
            back to its pre-seed state before the error propagates. Defaults to
            ``settings.ATOMIC_SEED``.

    Raises:
        InvalidItem: If a seed item fails validation.
        TypeError: If ``validator`` is not an ItemValidator.
    """

    def __init__(
        self,
        items: Iterable[T] = (),
        *,
        validator: Optional[ItemValidator] = None,
        atomic: Optional[bool] = None,
    ):
        if validator is None:
            validator = self._default_validator()
        if not isinstance(validator, ItemValidator):
            raise TypeError(
                f"validator must be an ItemValidator, got {type(validator).__name__}"
            )

        self._validator = validator
        self._atomic = settings.ATOMIC_SEED if atomic is None else bool(atomic)
        self._items: Dict[Hashable, T] = {}
        self._next_key = 0
        # Group results widen this to GROUP_KEY_ADAPTER to admit float keys
        self._key_adapter = KEY_ADAPTER

        self.seed(items)

    def _default_validator(self) -> ItemValidator:
        return AnyItemValidator()

    @property
    def validator(self) -> ItemValidator:
        """The validator bound at construction."""
        return self._validator

    @property
    def atomic(self) -> bool:
        """Whether seeding rolls back on failure."""
        return self._atomic

    def seed(self, items: Iterable[T]) -> "Collection[T]":
        """Append every item of ``items`` through :meth:`add`.

        Without atomic seeding, items appended before a failing one stay in the
        collection. With atomic seeding the collection is restored to the state
        it had before the call.

        Args:
            items: Items to append, in order.

        Returns:
            The collection itself.

        Raises:
            InvalidItem: If an item fails validation. Any other exception
                raised while seeding propagates unchanged, after the rollback
                when seeding is atomic.
        """
        if not self._atomic:
            for item in items:
                self.add(item)
            return self

        snapshot = dict(self._items)
        next_key = self._next_key
        try:
            for item in items:
                self.add(item)
        except Exception:
            logger.debug(
                f"Seeding {type(self).__name__} failed, rolling back "
                f"{len(self._items) - len(snapshot)} inserted items"
            )
            self._items = snapshot
            self._next_key = next_key
            raise
        return self

    def _clean_clone(self) -> "Collection[T]":
        clone = type(self)(validator=self._validator, atomic=self._atomic)
        clone._key_adapter = self._key_adapter
        return clone

    def _put(self, key: Hashable, item: T) -> None:
        self._validator.validate(item)
        self._items[key] = item
        if _is_int_key(key) and key >= self._next_key:
            self._next_key = key + 1

    def _reindex(self, entries: Iterable[Tuple[Hashable, T]]) -> None:
        # Int keys become 0..n-1 in order, other keys are kept
        rebuilt: Dict[Hashable, T] = {}
        position = 0
        for key, item in entries:
            if _is_int_key(key):
                rebuilt[position] = item
                position += 1
            else:
                rebuilt[key] = item
        self._items = rebuilt
        self._next_key = position

    # --- Core container ---

    def add(self, item: T) -> "Collection[T]":
        """Validate ``item`` and append it at the next sequential int key.

        Returns:
            The collection itself.

        Raises:
            InvalidItem: If the validator rejects the item.
        """
        self._validator.validate(item)
        self._items[self._next_key] = item
        self._next_key += 1
        return self

    def get(self, key: Hashable) -> T:
        """Return the item stored at ``key``.

        Raises:
            KeyNotFound: If ``key`` is not in the collection.
        """
        if not self.exists(key):
            raise KeyNotFound(key)
        return self._items[key]

    def set(self, key: Hashable, item: T) -> "Collection[T]":
        """Validate ``item`` and store it at ``key``, replacing any previous item.

        The key may be new or existing, sequential or not, int or str. An
        existing key keeps its position in iteration order.

        Returns:
            The collection itself.

        Raises:
            InvalidKey: If ``key`` is not a strict int or str. Collections
                returned by :meth:`group` also accept float keys.
            InvalidItem: If the validator rejects the item.
        """
        try:
            self._key_adapter.validate_python(key)
        except ValidationError:
            raise InvalidKey(key) from None
        self._put(key, item)
        return self

    def exists(self, key: Hashable) -> bool:
        """Check whether ``key`` is present.

        Keys of a type that :meth:`set` would reject are never present, so
        ``exists(1.0)`` is False even when int key ``1`` is stored.
        """
        try:
            self._key_adapter.validate_python(key)
        except ValidationError:
            return False
        return key in self._items

    def has(self, item: Any) -> bool:
        """Check whether an equal item is stored (see :mod:`collectkit.functional.compare`)."""
        return contains_strictly(self._items.values(), item)

    def remove(self, key: Hashable) -> "Collection[T]":
        """Delete the entry at ``key``. Remaining keys are not renumbered.

        Raises:
            KeyNotFound: If ``key`` is not in the collection.
        """
        if not self.exists(key):
            raise KeyNotFound(key)
        del self._items[key]
        return self

    def pop(self) -> Optional[T]:
        """Remove and return the last item, or None if the collection is empty."""
        if not self._items:
            return None
        key, item = self._items.popitem()
        if _is_int_key(key) and key == self._next_key - 1:
            self._next_key -= 1
        return item

    def unshift(self, item: T) -> "Collection[T]":
        """Validate ``item`` and insert it first; int keys are renumbered from 0.

        Raises:
            InvalidItem: If the validator rejects the item.
        """
        self._validator.validate(item)
        self._reindex([(0, item), *self._items.items()])
        return self

    def count(self) -> int:
        return len(self._items)

    def is_empty(self) -> bool:
        return not self._items

    def keys(self) -> List[Hashable]:
        return list(self._items.keys())

    def values(self) -> List[T]:
        return list(self._items.values())

    def clear(self) -> "Collection[T]":
        """Drop every item. The validator binding is unaffected."""
        self._items = {}
        self._next_key = 0
        return self

    def first(self) -> Optional[T]:
        return next(iter(self._items.values()), None)

    def last(self) -> Optional[T]:
        return next(reversed(self._items.values()), None)

    def get_items(self) -> Dict[Hashable, T]:
        """Snapshot of the keyed store."""
        return dict(self._items)

    def implode(self, separator: str) -> str:
        """Join the string form of every item with ``separator``."""
        return separator.join(str(item) for item in self._items.values())

    def __getitem__(self, key: Hashable) -> T:
        return self.get(key)

    def __setitem__(self, key: Hashable, item: T) -> None:
        self.set(key, item)

    def __delitem__(self, key: Hashable) -> None:
        self.remove(key)

    def __contains__(self, item: Any) -> bool:
        return self.has(item)

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[T]:
        # Iterate over a snapshot so callers may mutate the collection meanwhile
        return iter(list(self._items.values()))

    def __repr__(self) -> str:
        return f"{type(self).__name__}(items={len(self)}, validator={self._validator!r})"

    # --- Functional operations ---

    def map(self, callback: Callable[[T, Hashable], Any]) -> Dict[Hashable, Any]:
        """Apply ``callback(item, key)`` to every entry.

        Returns:
            Plain dict mapping each key to the callback result, in iteration order.
        """
        return {key: callback(item, key) for key, item in list(self._items.items())}

    def reduce(self, callback: Callable[[Any, T], Any], initial: Any = None) -> Any:
        """Left fold ``callback(accumulator, item)`` over the items."""
        accumulator = initial
        for item in self:
            accumulator = callback(accumulator, item)
        return accumulator

    def walk(self, callback: Callable[[T, Hashable], Any]) -> "Collection[T]":
        """Call ``callback(item, key)`` for every entry, allowing in-place updates.

        The callback may mutate the item it receives. If it returns something
        other than None, the return value replaces the stored item after being
        validated. A callback meant only to mutate must therefore return None:
        ``walk(lambda d, k: d.pop("x"))`` stores each popped value in place of
        its dict. Use :meth:`each` when return values should be ignored.

        Raises:
            InvalidItem: If a replacement item fails validation. Entries visited
                before the failure keep their replacements.
        """
        for key, item in list(self._items.items()):
            replacement = callback(item, key)
            if replacement is not None and key in self._items:
                self._put(key, replacement)
        return self

    def each(self, callback: Callable[[T, Hashable], Any]) -> "Collection[T]":
        """Call ``callback(item, key)`` for every entry, ignoring return values."""
        for key, item in list(self._items.items()):
            callback(item, key)
        return self

    def some(self, callback: Predicate) -> bool:
        return any(callback(item) for item in self)

    def every(self, callback: Predicate) -> bool:
        return all(callback(item) for item in self)

    def filter(self, callback: Optional[Predicate] = None) -> "Collection[T]":
        """Clean clone holding the items for which ``callback(item)`` is truthy.

        Args:
            callback: Predicate. When omitted, items are kept if they are truthy.

        Returns:
            New collection of the same class and validator, keyed from 0.
        """
        predicate = callback if callback is not None else bool
        clone = self._clean_clone()
        for item in self:
            if predicate(item):
                clone.add(item)
        return clone

    def match(self, callback: Predicate) -> "Collection[T]":
        return self.filter(callback)

    def match_one(self, callback: Predicate) -> T:
        """Return the single item satisfying ``callback``.

        Raises:
            NoMatch: If no item matches.
            AmbiguousMatch: If more than one item matches; the exception carries
                every matched item in ``matched_items``.
        """
        matches = self.match(callback)
        if matches.is_empty():
            raise NoMatch()
        if matches.count() > 1:
            raise AmbiguousMatch(matches.values())
        return matches.first()  # type: ignore

    def split(self, callback: Predicate) -> "Collection[T]":
        """Move the items satisfying ``callback`` into a new collection.

        Matched items are removed from this collection. If anything was removed
        the remaining int keys are renumbered from 0; str keys are kept.

        Returns:
            Clean clone holding the matched items in original order.
        """
        matched = self._clean_clone()
        remaining = []
        for key, item in list(self._items.items()):
            if callback(item):
                matched.add(item)
            else:
                remaining.append((key, item))

        if not matched.is_empty():
            self._reindex(remaining)
            logger.debug(
                f"Split {matched.count()} items out of {type(self).__name__}, "
                f"{self.count()} remain"
            )
        return matched

    # --- Set & combination operations ---

    def join(self, *collections: "Collection[T]") -> "Collection[T]":
        """Append every item of each collection, in argument then iteration order.

        Every appended item is validated by this collection's validator.

        Raises:
            TypeError: If an argument is not a Collection.
            InvalidItem: If an item is rejected. Items appended earlier stay.
        """
        for collection in collections:
            if not isinstance(collection, Collection):
                raise TypeError(
                    f"join expects Collection arguments, got {type(collection).__name__}"
                )
            for item in collection:
                self.add(item)
        return self

    def intersect(self, other: "Collection[Any]") -> "Collection[T]":
        """Clean clone of the items also present in ``other``."""
        return self.filter(lambda item: other.has(item))

    def diff(self, other: "Collection[Any]") -> "Collection[T]":
        """Clean clone of the items absent from ``other``."""
        return self.filter(lambda item: not other.has(item))

    def unique(self) -> "Collection[T]":
        """Clean clone with every distinct item once, first occurrence kept."""
        clone = self._clean_clone()
        for item in unique_items(self._items.values()):
            clone.add(item)
        return clone

    # --- Grouping ---

    def group(self, callback: Callable[[T], Any]) -> "Collection[Collection[T]]":
        """Partition items by the scalar returned from ``callback(item)``.

        Args:
            callback: Returns the grouping key of an item, an int, float or str.

        Returns:
            Collection keyed by grouping value in first-seen order. Each value
            is a clean clone of this collection holding the items of that group
            in original relative order. Grouping values follow dict key
            semantics, so ``1`` and ``1.0`` land in the same group.

        Raises:
            InvalidGroupKey: If the callback returns any other type (bool included).
        """
        groups: Collection[Collection[T]] = Collection(
            validator=ObjectValidator(type(self))
        )
        groups._key_adapter = GROUP_KEY_ADAPTER
        for item in self:
            value = callback(item)
            try:
                GROUP_KEY_ADAPTER.validate_python(value)
            except ValidationError:
                raise InvalidGroupKey(value) from None

            if not groups.exists(value):
                groups._put(value, self._clean_clone())
            groups.get(value).add(item)

        logger.debug(f"Grouped {self.count()} items into {groups.count()} groups")
        return groups

    # --- Ordering & pagination ---

    def usort(self, comparator: Comparator) -> "Collection[T]":
        """Sort items in place with a three-way comparator.

        The sort is stable. Every key is replaced by its new position (0..n-1).
        """
        ordered = sort_with_comparator(self._items.values(), comparator)
        self._items = dict(enumerate(ordered))
        self._next_key = len(ordered)
        return self

    def ksort(self) -> "Collection[T]":
        """Sort entries in place by key: int keys numerically, then str keys."""
        self._items = dict(
            sorted(self._items.items(), key=lambda entry: key_order(entry[0]))
        )
        return self

    def limit(self, count: NonNegativeInt, offset: NonNegativeInt = 0) -> "Collection[T]":
        """Clean clone of the window ``[offset, offset + count)`` by position.

        Args:
            count: Maximum number of items in the window.
            offset: Position of the first item of the window.

        Raises:
            pydantic.ValidationError: If ``count`` or ``offset`` is not a
                non-negative int.
        """
        count = WINDOW_ADAPTER.validate_python(count, strict=True)
        offset = WINDOW_ADAPTER.validate_python(offset, strict=True)

        clone = self._clean_clone()
        for item in self.values()[offset : offset + count]:
            clone.add(item)
        return clone
