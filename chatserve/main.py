from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional, Sequence

from chatclient.ui import ChatCLI
from chatserve.config import SERVER_CONFIG, ConfigError, load_server_config
from chatserve.core import ChatServer
from chatshared.protocol.errors import InputError
from chatshared.protocol.validator import validate_handle, validate_port


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="chatserve", description="Single-peer host for the framed chat protocol")
    parser.add_argument("port", nargs="?", help="TCP port to listen on")
    parser.add_argument("--host", help="address to bind")
    parser.add_argument("--handle", help="handle prefixed to the host's messages")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        load_server_config()
        port = validate_port(args.port) if args.port is not None else SERVER_CONFIG["port"]
        handle = validate_handle(args.handle or SERVER_CONFIG["handle"], SERVER_CONFIG["max_handle_len"])
    except (ConfigError, InputError) as exc:
        print(f"chatserve: {exc}", file=sys.stderr)
        return 1
    logging.basicConfig(level=SERVER_CONFIG["log_level"].upper())

    cli = ChatCLI(config=SERVER_CONFIG, prog="chatserve")
    cli.handle = handle
    server = ChatServer(args.host or SERVER_CONFIG["host"], port, cli, SERVER_CONFIG)
    try:
        server.start()
        server.serve()
    except OSError as exc:
        print(f"chatserve: {exc}", file=sys.stderr)
        return 2
    except KeyboardInterrupt:
        pass
    finally:
        server.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
