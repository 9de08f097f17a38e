"""
Length-prefixed chat framing.

Wire format::

    [3 ASCII decimal digits, zero-padded][payload bytes]

No delimiter, terminator, type tag or checksum. ``000`` is a valid empty
message and is distinct from the peer closing the stream.
"""

from __future__ import annotations

from typing import Optional

from .constants import DEFAULT_RECV_CHUNK, HEADER_WIDTH, MAX_FRAME_PAYLOAD
from .errors import FrameTooLarge, MalformedHeaderError, TruncatedFrameError
from .stream_io import Stream, recv_exact, send_exact

_DIGITS = frozenset(b"0123456789")


def encode_frame(payload: bytes) -> bytes:
    """Prefix ``payload`` with its zero-padded decimal length."""
    size = len(payload)
    if size > MAX_FRAME_PAYLOAD:
        raise FrameTooLarge(size, MAX_FRAME_PAYLOAD)
    header = str(size).zfill(HEADER_WIDTH).encode("ascii")
    return header + bytes(payload)


def parse_header(header: bytes) -> int:
    """Parse a length header; anything but exactly three ASCII digits is malformed."""
    if len(header) != HEADER_WIDTH or not _DIGITS.issuperset(header):
        raise MalformedHeaderError(bytes(header))
    return int(header)


def decode_frame(stream: Stream, chunk_size: int = DEFAULT_RECV_CHUNK) -> Optional[bytes]:
    """
    Read one frame from ``stream``.

    Returns the payload, or ``None`` if the peer closed the stream between
    messages. Closure after the first header byte raises
    :class:`TruncatedFrameError`.
    """
    # only a close before any header byte is a message boundary
    lead = recv_exact(stream, 1, chunk_size)
    if lead is None:
        return None
    rest = recv_exact(stream, HEADER_WIDTH - 1, chunk_size)
    if rest is None:
        raise TruncatedFrameError(HEADER_WIDTH, section="header")
    header = lead + rest
    length = parse_header(header)
    body = recv_exact(stream, length, chunk_size)
    if body is None:
        raise TruncatedFrameError(length)
    return body


def send_frame(stream: Stream, payload: bytes) -> None:
    """Encode ``payload`` and write the whole frame."""
    send_exact(stream, encode_frame(payload))


__all__ = ["encode_frame", "parse_header", "decode_frame", "send_frame"]
