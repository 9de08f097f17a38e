from __future__ import annotations

from enum import IntEnum
from typing import Optional


class ErrorCode(IntEnum):
    """Error codes carried by every chat exception."""

    TRANSPORT_FAILURE = 1001
    MALFORMED_HEADER = 1002
    TRUNCATED_FRAME = 1003
    FRAME_TOO_LARGE = 1004
    INVALID_INPUT = 1005


class ChatError(Exception):
    """Structured exception carrying an error code + message."""

    default_code = ErrorCode.TRANSPORT_FAILURE

    def __init__(self, message: str = "", code: Optional[ErrorCode] = None) -> None:
        self.code = code if code is not None else self.default_code
        self.message = message
        super().__init__(f"{self.code.name} ({int(self.code)}): {message}")


class TransportError(ChatError):
    """The underlying stream primitive failed (reset, timeout, I/O fault)."""

    default_code = ErrorCode.TRANSPORT_FAILURE


class ProtocolError(ChatError):
    """The peer broke the framing contract; stream alignment is lost."""

    default_code = ErrorCode.MALFORMED_HEADER


class MalformedHeaderError(ProtocolError):
    default_code = ErrorCode.MALFORMED_HEADER

    def __init__(self, header: bytes) -> None:
        self.header = header
        super().__init__(f"Malformed length header {header!r}")


class TruncatedFrameError(ProtocolError):
    """Peer closed the stream after starting a frame."""

    default_code = ErrorCode.TRUNCATED_FRAME

    def __init__(self, expected: int, section: str = "body") -> None:
        self.expected = expected
        self.section = section
        super().__init__(f"Peer closed mid-message while {expected} {section} bytes were pending")


class FrameTooLarge(ChatError):
    default_code = ErrorCode.FRAME_TOO_LARGE

    def __init__(self, size: int, limit: int) -> None:
        self.size = size
        self.limit = limit
        super().__init__(f"Payload of {size} bytes exceeds frame capacity of {limit}")


class InputError(ChatError):
    """User or command-line input failed validation."""

    default_code = ErrorCode.INVALID_INPUT


__all__ = [
    "ErrorCode",
    "ChatError",
    "TransportError",
    "ProtocolError",
    "MalformedHeaderError",
    "TruncatedFrameError",
    "FrameTooLarge",
    "InputError",
]
