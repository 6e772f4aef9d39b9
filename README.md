# kitutil

A handful of small building blocks for systems-level Python code. It is a
library only: it has no command-line tool.

## Modules

- `kitutil.sortedarray`: `SortedArray`, an array kept in key order with no
  duplicate keys and a bounded number of slots (`capacity()`). `add(element,
  flags)` returns the stored element, or `None` when the key is already
  present. By default it stores a shallow copy and only accepts elements in
  key order and within the capacity. `SortedArrayFlag.ALLOW_INSERTS` permits
  out-of-order inserts, `ALLOW_GROWTH` lets the capacity grow, and
  `ZERO_COPY` stores the element itself. Without the flags it raises
  `ValueError` (out of order) or `OverflowError` (full). `find(key)` runs a
  binary search and returns `(position, matched)`. `get(key)` returns the
  element or `None`. The array supports `len()`, iteration and indexing.
- `kitutil.strto`: `strtoul`, `strtoull`, `strtol`, `strtoll` (64-bit) and
  `strtod` parse text by the C library rules: leading whitespace, sign, and
  base prefixes for base 0 and 16. Each returns `(value, end)`, where `end` is
  the index of the first character not consumed. They raise `ValueError` when
  nothing was converted or a zero result does not come from a real zero in
  the text, and `OverflowError` when the value is out of range. `strtod`
  also accepts hexadecimal, `inf`/`infinity` and `nan` forms.
- `kitutil.strlcpy`: `strlcpy(source, size)` and `strlcat(destination,
  source, size)` truncate the result to fit a buffer of `size` bytes
  including the terminating NUL. Each returns the resulting string and the
  length it would have had without truncation.
- `kitutil.safe_rw`: `safe_write(fd, data, timeout)` writes all of `data`.
  It retries on interruption, and on a full non-blocking descriptor it waits
  up to `timeout` milliseconds (forever if negative). On a timeout or other
  error it raises `PartialWriteError`, whose `written` attribute holds the
  bytes already written. `safe_read(fd, count)` reads until it has `count`
  bytes or reaches end of file.
- `kitutil.clock`: `time_sec()` and `time_nsec()` read the monotonic clock,
  with seconds as a 32-bit unsigned value. `time_cached_update()` stores the
  current time for the calling thread, and `time_cached_sec()` and
  `time_cached_nsec()` read that cache back (0 before the first update).
  `clocktype()` returns `"monotonic"`.
- `kitutil.udp`: `udp_socket(family, flags)` creates an `AF_INET` or
  `AF_INET6` UDP socket. `UdpFlag` selects what it reports: `DELAY` (receive
  timestamps), `TTLTOS`, `DST_ADDR` (original destination) and `TRANSPARENT`
  (transparent proxying). `recvfrom(sock, bufsize, flags)` returns a
  `UdpMessage` with `data`, `size`, `source`, `destination`, `delay_msec`,
  `ttltos` (a `TtlTos`) and `truncated`.
- `kitutil.mockfail`: `MockFail` makes a tagged operation fail on demand for
  tests. Use `start(tag)`, `set_freq(n)`, `set_skip(n)` and `end()` to
  control it, and `should_fail(tag)` or `fail(tag, failure, compute)` to
  check it. Pass one to `SortedArray(mockfail=...)` to make its storage
  allocation raise `MemoryError`, tagged `SortedArray.add`.

## Example

```python
from kitutil.sortedarray import SortedArray, SortedArrayFlag
from kitutil.strlcpy import strlcpy
from kitutil.strto import strtoul

arr = SortedArray(key=lambda e: e[0], capacity=2)
arr.add((1, "one"))
arr.add((0, "zero"), SortedArrayFlag.ALLOW_INSERTS | SortedArrayFlag.ALLOW_GROWTH)
print(arr.get(1))            # (1, 'one')

text, length = strlcpy("Goodbye, cruel world", 16)
print(text, length)          # Goodbye,  cruel  20

print(strtoul("0x1f", 16))   # (31, 4)
```

## Testing

```
pip install -e .[test]
pytest
```