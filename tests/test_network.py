import socket

import pytest

from chatclient.core.network import ChatConnection, ConnectError, ResolutionError, form_connection


@pytest.fixture
def listener():
    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    sock.bind(("127.0.0.1", 0))
    sock.listen(1)
    yield sock
    sock.close()


def _closed_port():
    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    sock.bind(("127.0.0.1", 0))
    port = sock.getsockname()[1]
    sock.close()
    return port


def test_form_connection_connects(listener):
    port = listener.getsockname()[1]
    sock = form_connection("127.0.0.1", port, timeout=5)
    try:
        assert sock.getpeername() == ("127.0.0.1", port)
    finally:
        sock.close()


def test_form_connection_falls_back_to_next_candidate(listener, monkeypatch):
    good_port = listener.getsockname()[1]
    dead = (socket.AF_INET, socket.SOCK_STREAM, 6, "", ("127.0.0.1", _closed_port()))
    alive = (socket.AF_INET, socket.SOCK_STREAM, 6, "", ("127.0.0.1", good_port))
    monkeypatch.setattr(socket, "getaddrinfo", lambda *args, **kwargs: [dead, alive])

    sock = form_connection("example", good_port, timeout=5)
    try:
        assert sock.getpeername()[1] == good_port
    finally:
        sock.close()


def test_form_connection_all_candidates_fail():
    with pytest.raises(ConnectError):
        form_connection("127.0.0.1", _closed_port(), timeout=5)


def test_form_connection_resolution_failure(monkeypatch):
    def fail(*args, **kwargs):
        raise socket.gaierror(socket.EAI_NONAME, "Name or service not known")

    monkeypatch.setattr(socket, "getaddrinfo", fail)
    with pytest.raises(ResolutionError):
        form_connection("nowhere.invalid", 30020)


def test_chat_connection_round_trip(socket_pair, client_config):
    left, right = socket_pair
    a = ChatConnection(left, client_config)
    b = ChatConnection(right, client_config)
    a.send(b"ping")
    assert b.receive() == b"ping"
    b.send(b"")
    assert a.receive() == b""
    a.close()
    assert b.receive() is None
    a.close()  # idempotent
    assert a.closed
