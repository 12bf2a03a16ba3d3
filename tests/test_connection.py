import socket

import pytest

from newsboard.connection import Connection
from newsboard.protocol import ConnectionClosedError, Protocol


@pytest.fixture
def pair():
    left, right = socket.socketpair()
    conn = Connection(left)
    yield conn, right
    conn.close()
    right.close()


def _free_port():
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
        s.bind(("127.0.0.1", 0))
        return s.getsockname()[1]


def test_default_connection_is_not_connected():
    conn = Connection()
    assert conn.is_connected() is False
    assert conn.fileno() == -1


def test_write_on_unopened_connection_raises():
    with pytest.raises(RuntimeError):
        Connection().write(1)


def test_read_on_unopened_connection_raises():
    with pytest.raises(RuntimeError):
        Connection().read()


def test_write_sends_single_byte(pair):
    conn, peer = pair
    conn.write(Protocol.COM_LIST_NG)
    assert peer.recv(16) == bytes([Protocol.COM_LIST_NG])


def test_write_keeps_low_eight_bits(pair):
    conn, peer = pair
    conn.write(0x1FF)
    assert peer.recv(16) == b"\xff"


def test_read_returns_bytes_in_order(pair):
    conn, peer = pair
    peer.sendall(bytes([Protocol.ANS_ACK, Protocol.ANS_END]))
    assert [conn.read(), conn.read()] == [Protocol.ANS_ACK, Protocol.ANS_END]


def test_read_after_peer_closes_raises(pair):
    conn, peer = pair
    peer.close()
    with pytest.raises(ConnectionClosedError):
        conn.read()


def test_write_after_peer_closes_raises(pair):
    conn, peer = pair
    peer.close()
    with pytest.raises(ConnectionClosedError):
        for _ in range(10000):
            conn.write(0)


def test_close_disconnects(pair):
    conn, _ = pair
    assert conn.is_connected()
    conn.close()
    assert not conn.is_connected()


def test_context_manager_closes():
    left, right = socket.socketpair()
    with Connection(left) as conn:
        assert conn.is_connected()
    assert not conn.is_connected()
    right.close()


def test_connect_to_listening_socket():
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as listener:
        listener.bind(("127.0.0.1", 0))
        listener.listen(1)
        port = listener.getsockname()[1]
        conn = Connection.connect("127.0.0.1", port)
        try:
            assert conn.is_connected()
            accepted, _ = listener.accept()
            with accepted:
                conn.write(Protocol.COM_END)
                assert accepted.recv(1) == bytes([Protocol.COM_END])
        finally:
            conn.close()


def test_connect_refused_is_not_connected():
    conn = Connection.connect("127.0.0.1", _free_port())
    assert conn.is_connected() is False


def test_connect_unknown_host_is_not_connected():
    conn = Connection.connect("no such host.invalid", 1)
    assert conn.is_connected() is False