"""
Chat wire protocol: exact-size stream transfer, 3-digit length framing,
error taxonomy and input validation shared by client and host.
"""

from .constants import ENCODING, HEADER_WIDTH, MAX_FRAME_PAYLOAD, QUIT_COMMAND
from .errors import (
    ChatError,
    ErrorCode,
    FrameTooLarge,
    InputError,
    MalformedHeaderError,
    ProtocolError,
    TransportError,
    TruncatedFrameError,
)
from .framing import decode_frame, encode_frame, parse_header, send_frame
from .messages import ChatLine, ConnectTarget
from .stream_io import Stream, recv_exact, send_exact
from .validator import is_quit, validate_handle, validate_hostname, validate_message, validate_port

__all__ = [
    "ENCODING",
    "HEADER_WIDTH",
    "MAX_FRAME_PAYLOAD",
    "QUIT_COMMAND",
    "ChatError",
    "ErrorCode",
    "FrameTooLarge",
    "InputError",
    "MalformedHeaderError",
    "ProtocolError",
    "TransportError",
    "TruncatedFrameError",
    "decode_frame",
    "encode_frame",
    "parse_header",
    "send_frame",
    "ChatLine",
    "ConnectTarget",
    "Stream",
    "recv_exact",
    "send_exact",
    "is_quit",
    "validate_handle",
    "validate_hostname",
    "validate_message",
    "validate_port",
]
