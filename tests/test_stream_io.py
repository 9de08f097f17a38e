import pytest

from chatshared.protocol.errors import TransportError
from chatshared.protocol.stream_io import recv_exact, send_exact
from tests.stubs import StubStream


def test_send_exact_one_byte_per_call():
    stream = StubStream(max_send=1)
    send_exact(stream, b"hello world")
    assert bytes(stream.sent) == b"hello world"
    assert stream.send_calls == len(b"hello world")


def test_send_exact_empty_buffer_makes_no_calls():
    stream = StubStream()
    send_exact(stream, b"")
    assert stream.send_calls == 0


def test_send_exact_wraps_os_error():
    stream = StubStream(send_error=ConnectionResetError("reset by peer"))
    with pytest.raises(TransportError) as info:
        send_exact(stream, b"abc")
    assert isinstance(info.value.__cause__, ConnectionResetError)


def test_send_exact_zero_progress_is_transport_error():
    stream = StubStream(max_send=0)
    with pytest.raises(TransportError):
        send_exact(stream, b"abc")


def test_recv_exact_two_bytes_per_call():
    stream = StubStream([b"0123456789xyz"], max_recv=2)
    assert recv_exact(stream, 10) == b"0123456789"
    assert stream.recv_calls == 5
    # bytes past the requested count stay in the stream
    assert recv_exact(stream, 3) == b"xyz"


def test_recv_exact_assembles_chunks_in_order():
    stream = StubStream([b"ab", b"c", b"defg"])
    assert recv_exact(stream, 7) == b"abcdefg"


def test_recv_exact_zero_does_not_touch_stream():
    stream = StubStream()
    assert recv_exact(stream, 0) == b""
    assert stream.recv_calls == 0


def test_recv_exact_peer_closed_before_any_byte():
    assert recv_exact(StubStream(), 3) is None


def test_recv_exact_peer_closed_mid_read():
    stream = StubStream([b"abc"])
    assert recv_exact(stream, 5) is None


def test_recv_exact_respects_chunk_size():
    stream = StubStream([b"abcdef"])
    assert recv_exact(stream, 6, chunk_size=4) == b"abcdef"
    assert stream.recv_calls == 2


def test_recv_exact_wraps_os_error():
    stream = StubStream([b"a", TimeoutError("timed out")])
    with pytest.raises(TransportError):
        recv_exact(stream, 4)


def test_recv_exact_rejects_negative_count():
    with pytest.raises(ValueError):
        recv_exact(StubStream(), -1)
