from __future__ import annotations

import string
from typing import Union

from .constants import ENCODING, MAX_HANDLE_LEN, MAX_MESSAGE_LEN, QUIT_COMMAND
from .errors import InputError

MIN_PORT = 1
MAX_PORT = 65535
MAX_HOST_LABEL = 63
MAX_HOST_LEN = 253

_HOST_CHARS = frozenset(string.ascii_letters + string.digits + "-.")
_HANDLE_CHARS = frozenset(string.ascii_letters + string.digits + "_")


def validate_hostname(host: str) -> str:
    """Check a hostname against RFC 1123 character and length rules."""
    if not host:
        raise InputError("hostname cannot be empty")
    if not _HOST_CHARS.issuperset(host):
        raise InputError("invalid hostname: only letters, digits, '-' and '.' are allowed")
    if len(host) > MAX_HOST_LEN:
        raise InputError(f"hostname length must be at most {MAX_HOST_LEN}")
    if host[0] == "." or host[-1] == ".":
        raise InputError("hostname cannot begin or end with '.'")
    if host[0] == "-" or host[-1] == "-":
        raise InputError("hostname cannot begin or end with '-'")
    labels = host.split(".")
    if not all(labels):
        raise InputError("hostname cannot contain empty labels")
    if any(len(label) > MAX_HOST_LABEL for label in labels):
        raise InputError(f"hostname label length is at most {MAX_HOST_LABEL}")
    return host


def validate_port(port: Union[str, int]) -> int:
    text = str(port)
    if not text.isascii() or not text.isdigit():
        raise InputError("port must contain only digits")
    value = int(text)
    if not (MIN_PORT <= value <= MAX_PORT):
        raise InputError(f"port must be between {MIN_PORT} and {MAX_PORT}")
    return value


def validate_handle(handle: str, max_len: int = MAX_HANDLE_LEN) -> str:
    if not handle:
        raise InputError("handle cannot be empty")
    if not _HANDLE_CHARS.issuperset(handle):
        raise InputError("handle must contain only alphanumerics or '_'")
    if len(handle) > max_len:
        raise InputError(f"handle must be at most {max_len} characters")
    return handle


def validate_message(text: str, max_len: int = MAX_MESSAGE_LEN) -> str:
    """Bound the encoded size of a message body."""
    size = len(text.encode(ENCODING))
    if size > max_len:
        raise InputError(f"Invalid message length: {size} bytes (max {max_len})")
    return text


def is_quit(text: str) -> bool:
    return text == QUIT_COMMAND


__all__ = [
    "MIN_PORT",
    "MAX_PORT",
    "validate_hostname",
    "validate_port",
    "validate_handle",
    "validate_message",
    "is_quit",
]
