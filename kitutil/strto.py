"""Strict string to number conversion with C strto* parsing rules.

Each function returns ``(value, end)`` where ``end`` is the index of the first
character not consumed.  A conversion that consumed nothing, or that yields
zero from text that does not actually spell a zero, raises ValueError; a value
out of range raises OverflowError.
"""

from __future__ import annotations

import math
import re

_C_SPACE = " \t\n\v\f\r"
_LONG_BITS = 64
_LONG_LONG_BITS = 64

_DIGIT_VALUE = {c: i for i, c in enumerate("0123456789abcdefghijklmnopqrstuvwxyz")}
_DIGIT_VALUE.update({c.upper(): i for c, i in list(_DIGIT_VALUE.items()) if c.isalpha()})

_HEX_FLOAT = re.compile(
    r"0[xX](?P<mant>[0-9a-fA-F]+\.?[0-9a-fA-F]*|\.[0-9a-fA-F]+)(?P<exp>[pP][+-]?[0-9]+)?"
)
_DEC_FLOAT = re.compile(r"(?P<mant>[0-9]+\.?[0-9]*|\.[0-9]+)(?P<exp>[eE][+-]?[0-9]+)?")
_SPECIAL_FLOAT = re.compile(r"inf(?:inity)?|nan(?:\([0-9A-Za-z_]*\))?", re.IGNORECASE)
_NONZERO_DIGITS = frozenset("123456789abcdefABCDEF")


def _skip_space(text: str, pos: int) -> int:
    while pos < len(text) and text[pos] in _C_SPACE:
        pos += 1
    return pos


def _check_zero_result(text: str, end: int, base: int) -> None:
    """Reject a zero result that did not come from a real zero in the text."""
    if end == 0:
        raise ValueError(f"no conversion performed on {text!r}")
    pos = _skip_space(text, 0)
    if text[pos:pos + 1] in ("+", "-") and text[pos:pos + 1]:
        pos += 1
    if text[pos:pos + 1] != "0":
        raise ValueError(f"{text!r} does not hold a valid zero")
    if base in (0, 16) and text[pos + 1:pos + 2] == "x" and text[pos + 2:pos + 3] != "0":
        raise ValueError(f"{text!r} does not hold a valid zero")


def _parse_integer(text: str, base: int) -> tuple[bool, int, int]:
    if base != 0 and not 2 <= base <= 36:
        raise ValueError(f"invalid base {base}")

    pos = _skip_space(text, 0)
    negative = False
    if text[pos:pos + 1] in ("+", "-") and text[pos:pos + 1]:
        negative = text[pos] == "-"
        pos += 1

    if (
        base in (0, 16)
        and text[pos:pos + 2] in ("0x", "0X")
        and _DIGIT_VALUE.get(text[pos + 2:pos + 3], 99) < 16
    ):
        base = 16
        pos += 2
    elif base == 0:
        base = 8 if text[pos:pos + 1] == "0" else 10

    start = pos
    magnitude = 0
    while pos < len(text):
        digit = _DIGIT_VALUE.get(text[pos])
        if digit is None or digit >= base:
            break
        magnitude = magnitude * base + digit
        pos += 1

    if pos == start:
        return False, 0, 0
    return negative, magnitude, pos


def _to_unsigned(text: str, base: int, bits: int) -> tuple[int, int]:
    negative, magnitude, end = _parse_integer(text, base)
    limit = (1 << bits) - 1
    if magnitude > limit:
        raise OverflowError(f"{text!r} is out of range")
    value = (-magnitude) & limit if negative else magnitude
    if value == 0:
        _check_zero_result(text, end, base)
    return value, end


def _to_signed(text: str, base: int, bits: int) -> tuple[int, int]:
    negative, magnitude, end = _parse_integer(text, base)
    bound = 1 << (bits - 1)
    if (negative and magnitude > bound) or (not negative and magnitude >= bound):
        raise OverflowError(f"{text!r} is out of range")
    value = -magnitude if negative else magnitude
    if value == 0:
        _check_zero_result(text, end, base)
    return value, end


def strtoul(text: str, base: int = 10) -> tuple[int, int]:
    """Parse an unsigned long."""
    return _to_unsigned(text, base, _LONG_BITS)


def strtoull(text: str, base: int = 10) -> tuple[int, int]:
    """Parse an unsigned long long."""
    return _to_unsigned(text, base, _LONG_LONG_BITS)


def strtol(text: str, base: int = 10) -> tuple[int, int]:
    """Parse a signed long."""
    return _to_signed(text, base, _LONG_BITS)


def strtoll(text: str, base: int = 10) -> tuple[int, int]:
    """Parse a signed long long."""
    return _to_signed(text, base, _LONG_LONG_BITS)


def strtod(text: str) -> tuple[float, int]:
    """Parse a double, accepting decimal, hexadecimal, infinity and NaN forms."""
    pos = _skip_space(text, 0)
    negative = False
    if text[pos:pos + 1] in ("+", "-") and text[pos:pos + 1]:
        negative = text[pos] == "-"
        pos += 1

    value = 0.0
    end = 0
    match = _HEX_FLOAT.match(text, pos)
    if match:
        try:
            value = float.fromhex(match.group())
        except OverflowError:
            raise OverflowError(f"{text!r} is out of range") from None
    else:
        match = _DEC_FLOAT.match(text, pos)
        if match:
            value = float(match.group())

    if match:
        end = match.end()
        if math.isinf(value):
            raise OverflowError(f"{text!r} is out of range")
        if value == 0.0 and _NONZERO_DIGITS.intersection(match.group("mant")):
            raise OverflowError(f"{text!r} underflows")
    else:
        special = _SPECIAL_FLOAT.match(text, pos)
        if special:
            end = special.end()
            value = math.inf if special.group()[0] in "iI" else math.nan

    if negative:
        value = -value
    if value == 0.0:
        _check_zero_result(text, end, 10)
    return value, end