"""Equality and ordering primitives for collection items and keys.

The collection's set operations (``has``, ``intersect``, ``diff`` and
``unique``) all rely on one equality contract, defined here:

    Two items are equal when they are the same object, or when they have
    exactly the same type and compare equal with ``==``.

So ``1``, ``1.0`` and ``True`` are three distinct values, two lists with the
same content are equal, and instances of a class without a custom ``__eq__``
compare by identity.

Examples:
    >>> strictly_equal(1, 1)
    True
    >>> strictly_equal(1, 1.0)
    False
    >>> unique_items([3, 1, 3, "3", 1])
    [3, 1, '3']
"""

import functools
import typing as tp

__all__ = [
    "strictly_equal",
    "contains_strictly",
    "unique_items",
    "key_order",
    "sort_with_comparator",
]


def strictly_equal(left: tp.Any, right: tp.Any) -> bool:
    """Check whether two items are equal under the strict equality contract.

    Args:
        left: First item.
        right: Second item.

    Returns:
        True if the items are the same object or share a type and compare equal.
    """
    if left is right:
        return True
    if type(left) is not type(right):
        return False
    return bool(left == right)


def contains_strictly(items: tp.Iterable[tp.Any], candidate: tp.Any) -> bool:
    """Linear scan for ``candidate`` using :func:`strictly_equal`."""
    return any(strictly_equal(item, candidate) for item in items)


def unique_items(items: tp.Iterable[tp.Any]) -> tp.List[tp.Any]:
    """Drop repeated items, keeping the first occurrence of each.

    Hashable items are tracked in a set keyed on ``(type, item)``. Unhashable
    items (lists, dicts, ...) fall back to a linear scan over the unhashable
    items kept so far.

    Args:
        items: Items in iteration order.

    Returns:
        List of distinct items in first-occurrence order.
    """
    seen: tp.Set[tp.Tuple[type, tp.Any]] = set()
    kept_unhashable: tp.List[tp.Any] = []
    result = []

    for item in items:
        try:
            marker = (type(item), item)
            hash(marker)
        except TypeError:
            if contains_strictly(kept_unhashable, item):
                continue
            kept_unhashable.append(item)
            result.append(item)
            continue

        if marker in seen:
            continue
        seen.add(marker)
        result.append(item)

    return result


def key_order(key: tp.Hashable) -> tp.Tuple[int, tp.Any]:
    """Sort key placing int keys first (numerically) then other keys as strings."""
    if isinstance(key, (int, float)) and not isinstance(key, bool):
        return (0, key)
    return (1, str(key))


def sort_with_comparator(
    items: tp.Iterable[tp.Any], comparator: tp.Callable[[tp.Any, tp.Any], int]
) -> tp.List[tp.Any]:
    """Stable sort driven by a three-way comparator.

    Args:
        items: Items to sort.
        comparator: Callback returning a negative number, zero or a positive
            number when the first argument sorts before, with or after the second.

    Returns:
        New sorted list.
    """
    return sorted(items, key=functools.cmp_to_key(comparator))
