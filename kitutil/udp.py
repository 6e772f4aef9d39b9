"""UDP sockets that report receive delay, TTL/TOS and original destination."""

from __future__ import annotations

import enum
import logging
import socket
import struct
import sys
import time
from dataclasses import dataclass
from typing import Any

log = logging.getLogger(__name__)


def _constant(name: str, linux_value: int) -> int | None:
    value = getattr(socket, name, None)
    if value is None and sys.platform.startswith("linux"):
        value = linux_value
    return value


_SO_TIMESTAMP = _constant("SO_TIMESTAMP", 29)
_IP_RECVTTL = _constant("IP_RECVTTL", 12)
_IP_RECVTOS = _constant("IP_RECVTOS", 13)
_IP_ORIGDSTADDR = _constant("IP_RECVORIGDSTADDR", 20)
_IP_TRANSPARENT = _constant("IP_TRANSPARENT", 19)
_IP_TTL = _constant("IP_TTL", 2)
_IP_TOS = _constant("IP_TOS", 1)
_MSG_TRUNC = getattr(socket, "MSG_TRUNC", 0x20)

_TIMEVAL = struct.Struct("@ll")
_INT = struct.Struct("@i")
_FAMILY = struct.Struct("@H")
_SOCKADDR_IN6_SIZE = 28


def _control_space() -> int:
    if hasattr(socket, "CMSG_SPACE"):
        return (
            socket.CMSG_SPACE(_TIMEVAL.size)
            + socket.CMSG_SPACE(_INT.size) * 2
            + socket.CMSG_SPACE(_SOCKADDR_IN6_SIZE)
        )
    return 256


_CONTROL_SPACE = _control_space()


class UdpFlag(enum.IntFlag):
    """Extra information a UDP socket should collect on receipt."""

    NONE = 0
    DELAY = 1
    TTLTOS = 2
    DST_ADDR = 4
    TRANSPARENT = 8


@dataclass
class TtlTos:
    """IP time-to-live and type-of-service of a received datagram."""

    ttl: int | None = None
    tos: int | None = None


@dataclass
class UdpMessage:
    """A received datagram and what the kernel reported about it.

    ``size`` is the length the kernel returned, which with MSG_TRUNC in the
    receive flags may exceed ``len(data)``.
    """

    data: bytes
    size: int
    source: Any
    destination: Any = None
    delay_msec: int | None = None
    ttltos: TtlTos | None = None
    truncated: bool = False


def _enable(sock: socket.socket, level: int, option: int | None, what: str) -> None:
    if option is None:
        raise OSError(f"{what} is not supported on this platform")
    try:
        sock.setsockopt(level, option, 1)
    except OSError as exc:
        raise OSError(exc.errno, f"failed to enable {what}: {exc.strerror}") from exc


def udp_socket(family: int, flags: UdpFlag = UdpFlag.NONE) -> socket.socket:
    """Create a UDP socket for ``family`` (AF_INET or AF_INET6) with ``flags`` enabled."""
    if family not in (socket.AF_INET, socket.AF_INET6):
        raise ValueError(f"unexpected address family {family}")

    sock = socket.socket(family, socket.SOCK_DGRAM, 0)
    try:
        if flags & UdpFlag.DELAY:
            _enable(sock, socket.SOL_SOCKET, _SO_TIMESTAMP, "UDP timestamps")
        if flags & UdpFlag.TTLTOS:
            _enable(sock, socket.IPPROTO_IP, _IP_RECVTTL, "IP TTLs")
            _enable(sock, socket.IPPROTO_IP, _IP_RECVTOS, "IP TOSs")
        if flags & UdpFlag.DST_ADDR:
            _enable(sock, socket.IPPROTO_IP, _IP_ORIGDSTADDR, "original destination address")
        if flags & UdpFlag.TRANSPARENT:
            _enable(sock, socket.IPPROTO_IP, _IP_TRANSPARENT, "transparent proxying")
    except OSError:
        sock.close()
        raise
    return sock


def _parse_sockaddr(raw: bytes) -> tuple:
    (family,) = _FAMILY.unpack_from(raw)
    port = int.from_bytes(raw[2:4], "big")
    if family == socket.AF_INET6:
        flowinfo = int.from_bytes(raw[4:8], "big")
        address = socket.inet_ntop(socket.AF_INET6, raw[8:24])
        (scope_id,) = struct.unpack_from("@I", raw, 24)
        return address, port, flowinfo, scope_id
    return socket.inet_ntop(socket.AF_INET, raw[4:8]), port


def _delay_msec(raw: bytes) -> int | None:
    ts_sec, ts_usec = _TIMEVAL.unpack_from(raw)
    now_usec_total = time.time_ns() // 1000
    cur_sec, cur_usec = divmod(now_usec_total, 1_000_000)
    if (cur_sec, cur_usec) < (ts_sec, ts_usec):
        log.warning(
            "UDP message has timestamp %d.%06d that is after current time %d.%06d",
            ts_sec, ts_usec, cur_sec, cur_usec,
        )
        return None
    return (cur_sec - ts_sec) * 1000 + (cur_usec // 1000 - ts_usec // 1000)


def _int_value(raw: bytes) -> int:
    if len(raw) >= _INT.size:
        return _INT.unpack_from(raw)[0]
    return raw[0]


def recvfrom(sock: socket.socket, bufsize: int, flags: int = 0) -> UdpMessage:
    """Receive one datagram, collecting the extras the socket was set up for.

    Include MSG_TRUNC in ``flags`` to have ``size`` report the full datagram
    length even when it did not fit.  Raises OSError if the receive fails.
    """
    raw, ancdata, msg_flags, source = sock.recvmsg(bufsize, _CONTROL_SPACE, flags)
    data = raw[:bufsize]
    truncated = bool(msg_flags & _MSG_TRUNC)

    if truncated and not flags & _MSG_TRUNC:
        log.warning("UDP message received on fd %d is silently truncated to %d bytes",
                    sock.fileno(), len(raw))

    message = UdpMessage(data=data, size=len(raw), source=source, truncated=truncated)
    ttltos: TtlTos | None = None

    for level, kind, cdata in ancdata:
        if level == socket.SOL_SOCKET:
            if kind == _SO_TIMESTAMP:
                message.delay_msec = _delay_msec(cdata)
            else:
                log.warning("unexpected SOL_SOCKET control message type %d", kind)
        elif level == socket.IPPROTO_IP:
            if kind == _IP_ORIGDSTADDR:
                message.destination = _parse_sockaddr(cdata)
            elif kind == _IP_TTL:
                ttltos = ttltos or TtlTos()
                ttltos.ttl = _int_value(cdata)
            elif kind == _IP_TOS:
                ttltos = ttltos or TtlTos()
                ttltos.tos = _int_value(cdata)
            else:
                log.warning("unexpected IPPROTO_IP control message type %d", kind)
        else:
            log.warning("unexpected control message level %d", level)

    message.ttltos = ttltos
    return message