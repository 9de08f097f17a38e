from __future__ import annotations

import enum
import logging
from collections.abc import Callable
from typing import Optional

from .network import ChatConnection

logger = logging.getLogger(__name__)

OutboundSource = Callable[[], Optional[bytes]]
PayloadSink = Callable[[bytes], None]


class SessionEnd(enum.Enum):
    LOCAL_QUIT = "local_quit"
    PEER_CLOSED = "peer_closed"


class ChatSession:
    """
    Half-duplex conversation over one connection.

    The initiator sends first and then waits for a reply; the responder waits
    first. Exactly one frame is outstanding at a time. Transport and protocol
    errors propagate to the caller.
    """

    def __init__(
        self,
        connection: ChatConnection,
        read_outbound: OutboundSource,
        deliver: PayloadSink,
        initiator: bool = True,
    ) -> None:
        self.connection = connection
        self.read_outbound = read_outbound
        self.deliver = deliver
        self.initiator = initiator
        self.sent = 0
        self.received = 0

    def run(self) -> SessionEnd:
        if not self.initiator:
            end = self._receive_one()
            if end:
                return end
        while True:
            end = self._send_one() or self._receive_one()
            if end:
                return end

    def _send_one(self) -> Optional[SessionEnd]:
        payload = self.read_outbound()
        if payload is None:
            logger.info("Local quit after %s sent / %s received", self.sent, self.received)
            return SessionEnd.LOCAL_QUIT
        self.connection.send(payload)
        self.sent += 1
        logger.debug("Frame %s sent (%s bytes)", self.sent, len(payload))
        return None

    def _receive_one(self) -> Optional[SessionEnd]:
        payload = self.connection.receive()
        if payload is None:
            logger.info("Peer %s closed the connection", self.connection.peername)
            return SessionEnd.PEER_CLOSED
        self.received += 1
        logger.debug("Frame %s received (%s bytes)", self.received, len(payload))
        self.deliver(payload)
        return None


__all__ = ["ChatSession", "SessionEnd", "OutboundSource", "PayloadSink"]
