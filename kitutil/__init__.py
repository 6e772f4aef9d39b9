"""Small systems utilities: sorted arrays, strict number parsing, bounded strings, fd I/O, clocks, UDP and failure injection."""

__version__ = "0.1.0"
__all__ = ["clock", "mockfail", "safe_rw", "sortedarray", "strlcpy", "strto", "udp"]