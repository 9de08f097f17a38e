from .network import ChatConnection, ConnectError, NetworkError, ResolutionError, form_connection
from .session import ChatSession, SessionEnd

__all__ = [
    "ChatConnection",
    "ConnectError",
    "NetworkError",
    "ResolutionError",
    "form_connection",
    "ChatSession",
    "SessionEnd",
]
