"""Item validation strategies for collections.

A collection is bound to exactly one :class:`ItemValidator` at construction.
The validator is consulted on every insertion path (seeding, ``add``, ``set``,
``unshift``, ``walk`` replacements) and never again afterwards, so mutating an
item in place after it was accepted is not detected.

Validator attributes are write-once, so a built validator may be shared by any number of
collections; every clean clone of a collection reuses its validator object.

Available strategies:
    - :class:`AnyItemValidator`: accepts everything.
    - :class:`ContainerValidator`: lists, tuples, dicts and other non-string
      sequences or mappings.
    - :class:`ObjectValidator`: structured objects, optionally of one class.
    - :class:`StringValidator`: ``str`` only.
    - :class:`TypeAdapterValidator`: anything pydantic accepts in strict mode
      for a given annotation.
    - :class:`PredicateValidator`: anything a callback approves.
"""

from abc import ABC, abstractmethod
from collections.abc import Mapping, Sequence
from typing import Any, Callable, Optional

from pydantic import (
    ConfigDict,
    PydanticSchemaGenerationError,
    TypeAdapter,
    ValidationError,
)

from collectkit.core.exceptions import InvalidItem
from collectkit.logger import get_logger

__all__ = [
    "ItemValidator",
    "AnyItemValidator",
    "ContainerValidator",
    "ObjectValidator",
    "StringValidator",
    "TypeAdapterValidator",
    "PredicateValidator",
]

logger = get_logger(__name__)

# Values that are never considered structured objects
_SCALAR_TYPES = (bool, int, float, complex, str, bytes, bytearray)
_BUILTIN_CONTAINERS = (list, tuple, dict, set, frozenset)
_STRING_TYPES = (str, bytes, bytearray)


class ItemValidator(ABC):
    """Strategy deciding whether a candidate item may enter a collection.

    Subclasses implement :meth:`validate`. Attributes may be assigned once,
    typically in ``__init__``; assigning an attribute that already has a
    value raises ``AttributeError``.

    Example:
        >>> class MaxLength(ItemValidator):
        ...     def __init__(self, limit):
        ...         self.limit = limit
        ...     def validate(self, item):
        ...         if len(item) > self.limit:
        ...             self._reject(item, f"longer than {self.limit}")
        >>> MaxLength(3).accepts("abcd")
        False
    """

    __slots__ = ()

    @abstractmethod
    def validate(self, item: Any) -> None:
        """Accept ``item`` silently or raise :class:`InvalidItem`."""

    def accepts(self, item: Any) -> bool:
        """Return True if :meth:`validate` would accept ``item``."""
        try:
            self.validate(item)
        except InvalidItem:
            return False
        return True

    def _reject(
        self, item: Any, reason: str, cause: Optional[BaseException] = None
    ) -> None:
        logger.debug(f"{type(self).__name__} rejected {type(item).__name__}: {reason}")
        if cause is not None:
            raise InvalidItem(item, reason) from cause
        raise InvalidItem(item, reason)

    def __setattr__(self, name: str, value: Any) -> None:
        if hasattr(self, name):
            raise AttributeError(f"{type(self).__name__}.{name} is already set")
        object.__setattr__(self, name, value)

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class AnyItemValidator(ItemValidator):
    """Accepts every item."""

    __slots__ = ()

    def validate(self, item: Any) -> None:
        return None


class ContainerValidator(ItemValidator):
    """Items must be ordered/keyed containers (list, tuple, dict, ...)."""

    __slots__ = ()

    def validate(self, item: Any) -> None:
        if isinstance(item, _STRING_TYPES) or not isinstance(item, (Sequence, Mapping)):
            self._reject(item, "Invalid item provided to collection: expected a container")


class ObjectValidator(ItemValidator):
    """Items must be structured objects, optionally instances of ``item_type``.

    Primitive scalars, strings, ``None`` and builtin containers are not
    structured objects.

    Args:
        item_type: Class every item must be an instance of. ``None`` accepts
            any structured object.
    """

    __slots__ = ("item_type",)

    def __init__(self, item_type: Optional[type] = None):
        if item_type is not None and not isinstance(item_type, type):
            raise TypeError(f"item_type must be a class, got {item_type!r}")
        self.item_type = item_type

    def validate(self, item: Any) -> None:
        if item is None or isinstance(item, _SCALAR_TYPES + _BUILTIN_CONTAINERS):
            self._reject(item, "Invalid item provided to collection: expected an object")
        if self.item_type is not None and not isinstance(item, self.item_type):
            self._reject(
                item,
                "Invalid item provided to collection: "
                f"expected an instance of {self.item_type.__name__}",
            )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ObjectValidator):
            return NotImplemented
        return self.item_type is other.item_type

    def __hash__(self) -> int:
        return hash((ObjectValidator, self.item_type))

    def __repr__(self) -> str:
        name = self.item_type.__name__ if self.item_type is not None else None
        return f"ObjectValidator(item_type={name})"


class StringValidator(ItemValidator):
    """Items must be ``str``; ``None`` is rejected."""

    __slots__ = ()

    def validate(self, item: Any) -> None:
        if not isinstance(item, str):
            self._reject(item, "Item provided to collection must be a string")


class TypeAdapterValidator(ItemValidator):
    """Items must validate against ``annotation`` in pydantic strict mode.

    The item itself is stored, never the value pydantic would produce, so the
    validator behaves as a pure predicate.

    Example:
        >>> from typing import Annotated
        >>> import annotated_types as at
        >>> positive = TypeAdapterValidator(Annotated[int, at.Gt(0)])
        >>> positive.accepts(3), positive.accepts(-1), positive.accepts("3")
        (True, False, False)
    """

    __slots__ = ("annotation", "_adapter")

    def __init__(self, annotation: Any):
        self.annotation = annotation
        try:
            adapter = TypeAdapter(annotation)
        except PydanticSchemaGenerationError:
            # Plain classes need arbitrary types enabled
            adapter = TypeAdapter(
                annotation, config=ConfigDict(arbitrary_types_allowed=True)
            )
        self._adapter = adapter

    def validate(self, item: Any) -> None:
        try:
            self._adapter.validate_python(item, strict=True)
        except ValidationError as e:
            self._reject(item, f"Invalid item provided to collection: {e.errors()[0]['msg']}")

    def __repr__(self) -> str:
        return f"TypeAdapterValidator({self.annotation!r})"


class PredicateValidator(ItemValidator):
    """Items are accepted when ``predicate(item)`` is truthy.

    Args:
        predicate: Pure callback deciding acceptance.
        description: Text used in the rejection message.
    """

    __slots__ = ("predicate", "description")

    def __init__(self, predicate: Callable[[Any], Any], description: str = "predicate"):
        self.predicate = predicate
        self.description = description

    def validate(self, item: Any) -> None:
        try:
            accepted = self.predicate(item)
        except Exception as e:
            self._reject(
                item,
                f"Invalid item provided to collection: {self.description} raised "
                f"{type(e).__name__}: {e}",
                cause=e,
            )
        if not accepted:
            self._reject(
                item, f"Invalid item provided to collection: failed {self.description}"
            )

    def __repr__(self) -> str:
        return f"PredicateValidator({self.description!r})"
