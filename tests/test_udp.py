import socket

import pytest

from kitutil.udp import TtlTos, UdpFlag, UdpMessage, recvfrom, udp_socket


@pytest.fixture
def sender():
    sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    yield sock
    sock.close()


def _receiver(flags):
    sock = udp_socket(socket.AF_INET, flags)
    sock.bind(("127.0.0.1", 0))
    sock.settimeout(5)
    return sock


def test_delay_is_reported(sender):
    with _receiver(UdpFlag.DELAY) as receiver:
        sender.sendto(b"timed", receiver.getsockname())
        message = recvfrom(receiver, 100)
    assert message.data == b"timed"
    assert message.delay_msec is not None
    assert 0 <= message.delay_msec < 5000


def test_ttl_and_tos_are_reported(sender):
    sender.setsockopt(socket.IPPROTO_IP, socket.IP_TTL, 33)
    sender.setsockopt(socket.IPPROTO_IP, socket.IP_TOS, 0x10)
    with _receiver(UdpFlag.TTLTOS) as receiver:
        sender.sendto(b"marked", receiver.getsockname())
        message = recvfrom(receiver, 100)
    assert message.ttltos == TtlTos(ttl=33, tos=0x10)


def test_destination_address_is_reported(sender):
    with _receiver(UdpFlag.DST_ADDR) as receiver:
        address = receiver.getsockname()
        sender.sendto(b"where", address)
        message = recvfrom(receiver, 100)
    assert message.destination == address


def test_truncated_message(sender):
    payload = bytes(range(100))
    with _receiver(UdpFlag.NONE) as receiver:
        sender.sendto(payload, receiver.getsockname())
        message = recvfrom(receiver, 10)
    assert message.data == payload[:10]
    assert message.truncated is True


def test_receive_error_is_raised():
    with _receiver(UdpFlag.NONE) as receiver:
        receiver.setblocking(False)
        with pytest.raises(BlockingIOError):
            recvfrom(receiver, 100)


def test_unexpected_family_rejected():
    with pytest.raises(ValueError):
        udp_socket(socket.AF_UNIX)


def test_socket_is_udp():
    with udp_socket(socket.AF_INET6) as sock:
        assert (sock.family, sock.type) == (socket.AF_INET6, socket.SOCK_DGRAM)