"""
Exact-size transfer over a connected byte stream.

A single ``send``/``recv`` call on a stream socket may move fewer bytes than
requested. The helpers here loop until the requested count is reached so the
framing layer only ever sees whole headers and whole bodies.
"""

from __future__ import annotations

import logging
from typing import Optional, Protocol

from .constants import DEFAULT_RECV_CHUNK
from .errors import TransportError

logger = logging.getLogger(__name__)


class Stream(Protocol):
    """Minimal blocking stream surface; ``socket.socket`` satisfies it."""

    def send(self, data: bytes, /) -> int: ...

    def recv(self, bufsize: int, /) -> bytes: ...


def send_exact(stream: Stream, data: bytes) -> None:
    """Write every byte of ``data`` or raise :class:`TransportError`."""
    view = memoryview(data)
    total = len(view)
    sent = 0
    while sent < total:
        try:
            count = stream.send(view[sent:])
        except OSError as exc:
            raise TransportError(f"Send failed after {sent}/{total} bytes: {exc}") from exc
        if count <= 0:
            raise TransportError(f"Stream accepted no bytes after {sent}/{total}")
        sent += count
    logger.debug("Sent %s bytes", total)


def recv_exact(stream: Stream, n: int, chunk_size: int = DEFAULT_RECV_CHUNK) -> Optional[bytes]:
    """
    Read exactly ``n`` bytes.

    Returns the bytes, or ``None`` when the peer closed the stream (a read
    returned nothing) before ``n`` bytes arrived. ``n == 0`` yields ``b""``
    without touching the stream.
    """
    if n < 0:
        raise ValueError(f"Byte count must be non-negative, got {n}")
    if chunk_size <= 0:
        raise ValueError(f"chunk_size must be positive, got {chunk_size}")
    buf = bytearray()
    while len(buf) < n:
        try:
            chunk = stream.recv(min(n - len(buf), chunk_size))
        except OSError as exc:
            raise TransportError(f"Receive failed after {len(buf)}/{n} bytes: {exc}") from exc
        if not chunk:
            logger.debug("Peer closed stream after %s/%s bytes", len(buf), n)
            return None
        buf.extend(chunk)
    return bytes(buf)


__all__ = ["Stream", "send_exact", "recv_exact"]
