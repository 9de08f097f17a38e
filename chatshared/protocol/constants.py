"""Wire-level constants shared by client and host."""

ENCODING = "utf-8"
HEADER_WIDTH = 3  # ASCII decimal digits, zero-padded
MAX_FRAME_PAYLOAD = 10**HEADER_WIDTH - 1
DEFAULT_RECV_CHUNK = 4096
MAX_HANDLE_LEN = 10
MAX_MESSAGE_LEN = 500
HANDLE_SEPARATOR = "> "
QUIT_COMMAND = "\\quit"

__all__ = [
    "ENCODING",
    "HEADER_WIDTH",
    "MAX_FRAME_PAYLOAD",
    "DEFAULT_RECV_CHUNK",
    "MAX_HANDLE_LEN",
    "MAX_MESSAGE_LEN",
    "HANDLE_SEPARATOR",
    "QUIT_COMMAND",
]
