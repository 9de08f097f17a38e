from __future__ import annotations

import logging
import socket
from typing import Any, Dict, Optional

from chatclient.core.network import ChatConnection
from chatclient.core.session import ChatSession, SessionEnd
from chatclient.ui.cli import ChatCLI
from chatshared.protocol.errors import ProtocolError, TransportError

logger = logging.getLogger(__name__)


class ChatServer:
    """
    Accepts one peer at a time and holds a responder-side conversation with it.

    A peer failure ends only that conversation; the host then goes back to
    accepting. There is no fan-out: a second client waits in the backlog
    until the current conversation is over.
    """

    def __init__(self, host: str, port: int, cli: ChatCLI, config: Dict[str, Any]) -> None:
        self.host = host
        self.port = port
        self.cli = cli
        self.config = config
        self._sock: Optional[socket.socket] = None
        self.conversations = 0

    @property
    def address(self) -> tuple:
        if self._sock is None:
            raise RuntimeError("server is not listening")
        return self._sock.getsockname()

    def start(self) -> socket.socket:
        sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        try:
            sock.bind((self.host, self.port))
            sock.listen(int(self.config["backlog"]))
        except OSError:
            sock.close()
            raise
        self._sock = sock
        logger.info("Server listening on %s:%s", *self.address[:2])
        return sock

    def serve(self, max_conversations: Optional[int] = None) -> None:
        """Accept and run conversations until stdin ends or the limit is reached."""
        sock = self._sock if self._sock is not None else self.start()
        while max_conversations is None or self.conversations < max_conversations:
            client, peer = sock.accept()
            self.conversations += 1
            logger.info("Peer %s connected", peer)
            self.output(f"Connection from {peer[0]}:{peer[1]}")
            with ChatConnection(client, self.config) as connection:
                self.converse(connection)
            if self.cli.eof:
                break

    def converse(self, connection: ChatConnection) -> Optional[SessionEnd]:
        session = ChatSession(connection, self.cli.read_outbound, self.cli.show, initiator=False)
        try:
            end = session.run()
        except TransportError as exc:
            logger.warning("Transport error with %s: %s", connection.peername, exc)
            return None
        except ProtocolError as exc:
            logger.warning("Peer %s violated the protocol: %s", connection.peername, exc)
            return None
        if end is SessionEnd.PEER_CLOSED:
            self.output("Peer ended connection.")
        return end

    def output(self, text: str) -> None:
        self.cli.output(text)

    def close(self) -> None:
        if self._sock is not None:
            self._sock.close()
            self._sock = None
            logger.info("Server stopped")
