"""
Structural equivalence of XML document trees.

Copyright 2022-2026, Levente Hunyadi

:see: https://github.com/hunyadi/md2conf
"""

from collections import deque
from collections.abc import Callable, Hashable, Iterable
from typing import Any, Generic, Optional, TypeVar

T = TypeVar("T")


def _identity(item: Any) -> Hashable:
    return item


class MultisetPool(Generic[T]):
    """
    An unordered collection of items, bucketed by match key.

    Each successful match removes exactly one item from the pool. Items with the same key are taken in insertion
    order, and leftover items are reported in insertion order.
    """

    _buckets: dict[Hashable, deque[tuple[int, T]]]
    _count: int

    def __init__(self, items: Iterable[T], key: Callable[[T], Hashable]) -> None:
        self._buckets = {}
        self._count = 0
        for index, item in enumerate(items):
            self._buckets.setdefault(key(item), deque()).append((index, item))
            self._count += 1

    def __len__(self) -> int:
        return self._count

    def __bool__(self) -> bool:
        return self._count > 0

    def _pop(self, key: Hashable) -> Optional[tuple[int, T]]:
        bucket = self._buckets.get(key)
        if not bucket:
            return None

        entry = bucket.popleft()
        if not bucket:
            del self._buckets[key]
        self._count -= 1
        return entry

    def take(self, key: Hashable) -> Optional[T]:
        """
        Removes an item that has the given match key.

        :param key: Match key to look up.
        :returns: The earliest inserted item with a matching key, or `None` if there is no such item.
        """

        entry = self._pop(key)
        return entry[1] if entry is not None else None

    def discard(self, key: Hashable) -> bool:
        "Removes an item that has the given match key, and returns whether there was such an item."

        return self._pop(key) is not None

    def first(self) -> Optional[T]:
        "The earliest inserted item not yet taken."

        earliest: Optional[tuple[int, T]] = None
        for bucket in self._buckets.values():
            head = bucket[0]
            if earliest is None or head[0] < earliest[0]:
                earliest = head
        return earliest[1] if earliest is not None else None


def multiset_equal(
    left: Optional[Iterable[T]],
    right: Optional[Iterable[T]],
    *,
    key: Optional[Callable[[T], Hashable]] = None,
) -> bool:
    """
    Checks if two collections hold the same items with the same multiplicity, irrespective of order.

    Two `None` collections are equal; a `None` collection is not equal to any collection (not even an empty one).

    :param left: First collection.
    :param right: Second collection.
    :param key: Derives the value under which items are considered equal; identity function by default.
    :returns: True if each item occurs the same number of times in both collections.
    """

    if left is right:
        return True
    if left is None or right is None:
        return False

    key_fn = key if key is not None else _identity
    pool = MultisetPool(right, key_fn)
    for item in left:
        if not pool.discard(key_fn(item)):
            return False
    return not pool
