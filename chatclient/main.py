from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional, Sequence

from chatclient.config import CLIENT_CONFIG, ConfigError, load_config
from chatclient.core import ChatConnection, ChatSession, NetworkError, SessionEnd
from chatclient.ui import ChatCLI
from chatshared.protocol.errors import InputError, ProtocolError, TransportError
from chatshared.protocol.messages import ConnectTarget

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_USAGE = 1
EXIT_CONNECT = 2
EXIT_TRANSPORT = 3
EXIT_PROTOCOL = 4


class _ArgumentParser(argparse.ArgumentParser):
    def error(self, message: str) -> None:  # type: ignore[override]
        self.print_usage(sys.stderr)
        self.exit(EXIT_USAGE, f"{self.prog}: error: {message}\n")


def build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(prog="chatclient", description="Framed point-to-point chat client")
    parser.add_argument("host", help="hostname or IPv4 address of the chat host")
    parser.add_argument("port", help="TCP port of the chat host")
    return parser


def run_client(host: str, port: str, cli: Optional[ChatCLI] = None) -> int:
    try:
        target = ConnectTarget.parse(host, port)
    except InputError as exc:
        print(f"chatclient: {exc.message}", file=sys.stderr)
        return EXIT_USAGE

    cli = cli or ChatCLI()
    if cli.prompt_handle() is None:
        return EXIT_USAGE

    try:
        connection = ChatConnection.open(target.host, target.port)
    except NetworkError as exc:
        print(f"chatclient: {exc.message}", file=sys.stderr)
        return EXIT_CONNECT

    with connection:
        session = ChatSession(connection, cli.read_outbound, cli.show)
        try:
            end = session.run()
            logger.info("Session ended: %s", end.value)
            if end is SessionEnd.PEER_CLOSED:
                print("Server ended connection.")
            code = EXIT_OK
        except TransportError as exc:
            print(f"chatclient: connection failed: {exc.message}", file=sys.stderr)
            code = EXIT_TRANSPORT
        except ProtocolError as exc:
            print(f"chatclient: peer violated the protocol: {exc.message}", file=sys.stderr)
            code = EXIT_PROTOCOL
    print("Socket closed. Exiting chatclient.")
    return code


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        load_config()
    except ConfigError as exc:
        print(f"chatclient: {exc}", file=sys.stderr)
        return EXIT_USAGE
    logging.basicConfig(level=CLIENT_CONFIG["log_level"].upper())
    return run_client(args.host, args.port)


if __name__ == "__main__":
    sys.exit(main())
