from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any, Dict, Optional

from chatclient.config import CLIENT_CONFIG
from chatshared.protocol.constants import ENCODING
from chatshared.protocol.errors import InputError
from chatshared.protocol.messages import ChatLine
from chatshared.protocol.validator import is_quit, validate_handle

logger = logging.getLogger(__name__)


class ChatCLI:
    """Line-oriented prompt: collects the handle and outbound lines, prints replies."""

    def __init__(
        self,
        input_func: Callable[[str], str] = input,
        output: Callable[..., None] = print,
        config: Optional[Dict[str, Any]] = None,
        prog: str = "chatclient",
    ) -> None:
        self.config = config or CLIENT_CONFIG
        self.prog = prog
        self.input_func = input_func
        self.output = output
        self.limits = {
            "max_handle_len": int(self.config["max_handle_len"]),
            "max_message_len": int(self.config["max_message_len"]),
        }
        self.handle: Optional[str] = None
        self.eof = False

    def _read(self, prompt: str) -> Optional[str]:
        try:
            return self.input_func(prompt)
        except EOFError:
            self.eof = True
            return None

    def _error(self, exc: InputError) -> None:
        self.output(f"{self.prog}: {exc.message}")

    def prompt_handle(self) -> Optional[str]:
        """Ask until a valid handle is entered; ``None`` if input ends first."""
        while True:
            raw = self._read("Please enter the client handle: ")
            if raw is None:
                return None
            try:
                self.handle = validate_handle(raw.strip("\r\n"), self.limits["max_handle_len"])
                return self.handle
            except InputError as exc:
                self._error(exc)

    def read_outbound(self) -> Optional[bytes]:
        """Next payload to send, or ``None`` when the user quits."""
        if self.handle is None:
            raise RuntimeError("prompt_handle() must succeed before reading messages")
        while True:
            raw = self._read(f"{self.handle}> ")
            if raw is None:
                return None
            text = raw.rstrip("\r\n")
            if is_quit(text):
                return None
            try:
                return ChatLine.build(self.handle, text, self.limits).to_payload()
            except InputError as exc:
                self._error(exc)

    def show(self, payload: bytes) -> None:
        # C peers send the terminating NUL as part of the body
        if payload.endswith(b"\x00"):
            payload = payload[:-1]
        self.output(payload.decode(ENCODING, errors="replace"))
