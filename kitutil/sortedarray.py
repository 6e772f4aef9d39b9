"""A bounded array kept in key order, with binary search lookup."""

from __future__ import annotations

import copy
import enum
from typing import Any, Callable, Iterator

from .mockfail import MockFail


class SortedArrayFlag(enum.IntFlag):
    """Options controlling how elements are added to a SortedArray."""

    DEFAULT = 0
    ALLOW_INSERTS = 1
    ALLOW_GROWTH = 2
    ZERO_COPY = 4


def _natural_cmp(a: Any, b: Any) -> int:
    return (a > b) - (a < b)


class SortedArray:
    """Elements ordered by a key, with no duplicate keys.

    ``key`` extracts the key of an element (the element itself by default),
    ``cmp`` compares two keys returning a negative, zero or positive int, and
    ``capacity`` is the number of slots initially allowed.
    """

    def __init__(
        self,
        key: Callable[[Any], Any] | None = None,
        capacity: int = 0,
        cmp: Callable[[Any, Any], int] | None = None,
        mockfail: MockFail | None = None,
    ) -> None:
        if capacity < 0:
            raise ValueError("capacity must not be negative")
        self._key = key
        self._cmp = cmp if cmp is not None else _natural_cmp
        self._alloc = capacity
        self._allocated = False
        self._items: list[Any] = []
        self._mockfail = mockfail

    def _key_of(self, element: Any) -> Any:
        return element if self._key is None else self._key(element)

    def add(self, element: Any, flags: SortedArrayFlag = SortedArrayFlag.DEFAULT) -> Any:
        """Insert ``element`` in key order and return the stored element.

        Returns None if an element with the same key is already present.
        Raises ValueError for an out-of-order element unless ALLOW_INSERTS is
        given, OverflowError when full unless ALLOW_GROWTH is given, and
        MemoryError when storage cannot be obtained.  Unless ZERO_COPY is
        given, a shallow copy of the element is stored.
        """
        key = self._key_of(element)
        pos = len(self._items)

        if pos:
            order = self._cmp(self._key_of(self._items[-1]), key)
            if order == 0:
                return None
            if order > 0:
                if not flags & SortedArrayFlag.ALLOW_INSERTS:
                    raise ValueError("unsorted list insertions are not permitted")
                pos, match = self.find(key)
                if match:
                    return None

        more = 0
        if len(self._items) == self._alloc:
            if not flags & SortedArrayFlag.ALLOW_GROWTH:
                raise OverflowError(
                    f"number of elements exceeds {self._alloc}, the maximum allowed in this array"
                )
            more = self._alloc // 2 if self._alloc > 100 else 10

        if not self._allocated or more:
            if self._mockfail is not None and self._mockfail.should_fail(SortedArray.add):
                raise MemoryError(f"failed to allocate array of {self._alloc + more} elements")
            self._allocated = True
            self._alloc += more

        stored = element if flags & SortedArrayFlag.ZERO_COPY else copy.copy(element)
        self._items.insert(pos, stored)
        return stored

    def find(self, key: Any) -> tuple[int, bool]:
        """Return ``(position, matched)`` for ``key``.

        The position is that of the exact match, or of the first element with
        a greater key, or the length of the array if there is none.
        """
        pos, lim = 0, len(self._items)
        while lim:
            i = pos + (lim >> 1)
            order = self._cmp(key, self._key_of(self._items[i]))
            if order == 0:
                return i, True
            if order > 0:
                pos = i + 1
                lim -= 1
            lim >>= 1
        return pos, False

    def get(self, key: Any) -> Any:
        """Return the element with ``key``, or None if there is none."""
        pos, match = self.find(key)
        return self._items[pos] if match else None

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Any]:
        return iter(self._items)

    def __getitem__(self, index: int) -> Any:
        return self._items[index]

    def capacity(self) -> int:
        """Return the number of slots currently allowed."""
        return self._alloc