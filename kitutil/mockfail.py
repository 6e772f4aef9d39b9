"""Deterministic failure injection for exercising hard-to-reach error paths."""

from __future__ import annotations

from typing import Any, Callable, Hashable, TypeVar

T = TypeVar("T")


class MockFail:
    """Makes a tagged operation fail on demand.

    After ``start(tag)``, every check against ``tag`` fails.  ``set_freq(n)``
    makes it fail every n-th time, and ``set_skip(n)`` lets the next n checks
    succeed before the next failure.  ``end()`` switches injection off.
    """

    def __init__(self) -> None:
        self.tag: Hashable | None = None
        self.freq = 0
        self.remaining = 0

    def start(self, tag: Hashable) -> None:
        """Arm failure injection for ``tag``, failing on every check."""
        self.tag = tag
        self.freq = self.remaining = 1

    def set_freq(self, n: int) -> None:
        """Fail every ``n``-th check of the armed tag."""
        if n < 1:
            raise ValueError("failure frequency must be at least 1")
        self.freq = self.remaining = n

    def set_skip(self, n: int) -> None:
        """Let the next ``n`` checks pass before failing."""
        if n < 0:
            raise ValueError("skip count must not be negative")
        self.remaining = n + 1

    def end(self) -> None:
        """Disarm failure injection."""
        self.tag = None

    def should_fail(self, tag: Hashable) -> bool:
        """Return True if the operation identified by ``tag`` should fail now."""
        if self.tag is None or tag != self.tag:
            return False
        self.remaining -= 1
        if self.remaining:
            return False
        self.remaining = self.freq
        return True

    def fail(self, tag: Hashable, failure: Any, compute: Callable[[], T]) -> T | Any:
        """Return ``failure`` if ``tag`` should fail, otherwise ``compute()``."""
        if self.should_fail(tag):
            return failure
        return compute()