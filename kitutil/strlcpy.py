"""Length-limited string copy and concatenation with BSD strlcpy semantics.

Sizes count bytes of a destination buffer including the terminating NUL, so
at most ``size - 1`` characters are kept.  Each function returns the resulting
string together with the length the untruncated result would have had.
"""

from __future__ import annotations


def _c_string(text: str) -> str:
    return text.split("\0", 1)[0]


def strlcpy(source: str, size: int) -> tuple[str, int]:
    """Copy ``source`` into a buffer of ``size``; return (copy, len(source))."""
    if size < 0:
        raise ValueError("size must not be negative")
    source = _c_string(source)
    return source[:max(size - 1, 0)], len(source)


def strlcat(destination: str, source: str, size: int) -> tuple[str, int]:
    """Append ``source`` to ``destination`` within a buffer of ``size``.

    Returns the resulting string and the length the concatenation would have
    had without truncation.
    """
    if size < 0:
        raise ValueError("size must not be negative")
    destination = _c_string(destination)
    source = _c_string(source)
    if size == 0:
        return destination, len(source)
    length = min(len(destination), size)
    return (destination[:length] + source)[:size - 1], length + len(source)