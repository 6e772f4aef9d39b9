"""Monotonic time in seconds and nanoseconds, with a per-thread cache."""

from __future__ import annotations

import threading
import time

_NSEC_PER_SEC = 1_000_000_000
_UINT32_MASK = 0xFFFFFFFF

_cache = threading.local()


def clocktype() -> str:
    """Name the clock the time functions read."""
    return "monotonic"


def _now() -> tuple[int, int]:
    nanoseconds = time.monotonic_ns()
    return (nanoseconds // _NSEC_PER_SEC) & _UINT32_MASK, nanoseconds


def time_nsec() -> int:
    """Return the current time in nanoseconds."""
    return _now()[1]


def time_sec() -> int:
    """Return the current time in whole seconds, as a 32-bit unsigned value."""
    return _now()[0]


def time_cached_update() -> None:
    """Refresh this thread's cached time."""
    _cache.seconds, _cache.nanoseconds = _now()


def time_cached_nsec() -> int:
    """Return this thread's cached nanoseconds, 0 if never updated."""
    return getattr(_cache, "nanoseconds", 0)


def time_cached_sec() -> int:
    """Return this thread's cached seconds, 0 if never updated."""
    return getattr(_cache, "seconds", 0)