from __future__ import annotations

import logging
import socket
from typing import Any, Dict, Optional

from chatclient.config import CLIENT_CONFIG, timeout_or_none
from chatshared.protocol import framing
from chatshared.protocol.errors import ChatError, ErrorCode

logger = logging.getLogger(__name__)


class NetworkError(ChatError):
    """Connection establishment failure surfaced to the entry point."""

    default_code = ErrorCode.TRANSPORT_FAILURE


class ResolutionError(NetworkError):
    pass


class ConnectError(NetworkError):
    pass


def form_connection(host: str, port: int, timeout: Optional[float] = None) -> socket.socket:
    """
    Resolve ``host:port`` and connect to the first candidate address that accepts.

    IPv4 and IPv6 candidates are tried in resolver order; a failed candidate is
    logged and skipped.
    """
    try:
        candidates = socket.getaddrinfo(host, port, socket.AF_UNSPEC, socket.SOCK_STREAM)
    except socket.gaierror as exc:
        raise ResolutionError(f"getaddrinfo: {exc}") from exc

    last_error: Optional[OSError] = None
    for family, socktype, proto, _canonname, address in candidates:
        try:
            sock = socket.socket(family, socktype, proto)
        except OSError as exc:
            logger.warning("socket(%s) failed: %s", family, exc)
            last_error = exc
            continue
        try:
            sock.settimeout(timeout)
            sock.connect(address)
        except OSError as exc:
            sock.close()
            logger.warning("connect to %s failed: %s", address, exc)
            last_error = exc
            continue
        logger.info("Connected to %s:%s via %s", host, port, address)
        return sock
    raise ConnectError(f"failed to connect to {host}:{port}: {last_error}")


class ChatConnection:
    """One connected stream, owned for the lifetime of a single conversation."""

    def __init__(self, sock: socket.socket, config: Optional[Dict[str, Any]] = None) -> None:
        self.config = config or CLIENT_CONFIG
        self.sock = sock
        self.chunk_size: int = int(self.config["recv_chunk_size"])
        self.sock.settimeout(timeout_or_none(float(self.config["socket_timeout"])))
        self.closed = False

    @classmethod
    def open(cls, host: str, port: int, config: Optional[Dict[str, Any]] = None) -> "ChatConnection":
        cfg = config or CLIENT_CONFIG
        sock = form_connection(host, port, timeout_or_none(float(cfg["connect_timeout"])))
        return cls(sock, cfg)

    @property
    def peername(self) -> str:
        try:
            return str(self.sock.getpeername())
        except OSError:
            return "<disconnected>"

    def send(self, payload: bytes) -> None:
        framing.send_frame(self.sock, payload)

    def receive(self) -> Optional[bytes]:
        """Next payload, or ``None`` once the peer has closed cleanly."""
        return framing.decode_frame(self.sock, self.chunk_size)

    def close(self) -> None:
        if self.closed:
            return
        self.closed = True
        try:
            self.sock.shutdown(socket.SHUT_RDWR)
        except OSError:
            # peer may already be gone
            pass
        self.sock.close()
        logger.info("Connection closed")

    def __enter__(self) -> "ChatConnection":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()


__all__ = ["ChatConnection", "ConnectError", "NetworkError", "ResolutionError", "form_connection"]
