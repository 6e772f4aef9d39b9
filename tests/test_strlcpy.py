import pytest

from kitutil.strlcpy import strlcat, strlcpy

BUFFER = 16


def test_strlcpy_fits():
    copied, length = strlcpy("Hello, world", BUFFER)
    assert length == len("Hello, world")
    assert len(copied) == len("Hello, world")
    assert copied == "Hello, world"


def test_strlcpy_truncates():
    copied, length = strlcpy("Goodbye, cruel world", BUFFER)
    assert length == len("Goodbye, cruel world")
    assert len(copied) == BUFFER - 1
    assert copied == "Goodbye, cruel world"[:BUFFER - 1]


def test_strlcat_fits():
    buffer, _ = strlcpy("Hello, ", BUFFER)
    joined, length = strlcat(buffer, "world", BUFFER)
    assert length == len("Hello, world")
    assert len(joined) == len("Hello, world")
    assert joined == "Hello, world"


def test_strlcat_truncates():
    joined, length = strlcat("Hello, world", ". Goodbye", BUFFER)
    assert length == len("Hello, world. Goodbye")
    assert len(joined) == BUFFER - 1
    assert joined == "Hello, world. Goodbye"[:BUFFER - 1]


def test_strlcpy_stops_at_nul():
    assert strlcpy("abc\0def", BUFFER) == ("abc", 3)


def test_zero_size():
    assert strlcpy("abc", 0) == ("", 3)
    assert strlcat("xy", "abc", 0) == ("xy", 3)


def test_negative_size():
    with pytest.raises(ValueError):
        strlcpy("abc", -1)
    with pytest.raises(ValueError):
        strlcat("a", "b", -1)