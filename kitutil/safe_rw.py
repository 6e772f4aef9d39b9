"""Reading and writing file descriptors to completion."""

from __future__ import annotations

import errno
import logging
import os
import select

log = logging.getLogger(__name__)


class PartialWriteError(OSError):
    """A write stopped before all data was written.

    ``written`` holds the number of bytes that did reach the descriptor.
    """

    def __init__(self, code: int, message: str, written: int) -> None:
        super().__init__(code, message)
        self.written = written


def _wait_writable(fd: int, timeout: int) -> bool:
    """Wait up to ``timeout`` ms (forever if negative) for ``fd`` to accept data."""
    if hasattr(select, "poll"):
        poller = select.poll()
        poller.register(fd, select.POLLOUT)
        return bool(poller.poll(timeout))
    _, ready, _ = select.select([], [fd], [], None if timeout < 0 else timeout / 1000)
    return bool(ready)


def safe_write(fd: int, data: bytes, timeout: int = -1) -> int:
    """Write all of ``data`` to ``fd``, returning the number of bytes written.

    On a non-blocking descriptor the write waits up to ``timeout``
    milliseconds (forever if negative) each time the descriptor is full.
    Raises PartialWriteError, carrying the count written so far, on a
    timeout (ETIMEDOUT) or any other error.
    """
    view = memoryview(data).cast("B")
    written = 0

    while written < len(view):
        try:
            written += os.write(fd, view[written:])
        except BlockingIOError:
            if not _wait_writable(fd, timeout):
                raise PartialWriteError(
                    errno.ETIMEDOUT, os.strerror(errno.ETIMEDOUT), written
                ) from None
        except InterruptedError:
            continue
        except OSError as exc:
            raise PartialWriteError(exc.errno, exc.strerror, written) from exc

    log.debug("safe_write(fd=%d, count=%d, timeout=%d) // %d", fd, len(view), timeout, written)
    return written


def safe_read(fd: int, count: int) -> bytes:
    """Read up to ``count`` bytes from ``fd``, stopping early only at end of file.

    Raises OSError if a read fails.
    """
    if count < 0:
        raise ValueError("count must not be negative")

    chunks: list[bytes] = []
    remaining = count
    while remaining > 0:
        chunk = os.read(fd, remaining)
        if not chunk:
            break
        chunks.append(chunk)
        remaining -= len(chunk)

    result = b"".join(chunks)
    log.debug("safe_read(fd=%d, count=%d) // %d", fd, count, len(result))
    return result