from __future__ import annotations

from typing import Any, Dict

from chatclient.config import DEFAULT_CONFIG, ConfigError, load_env_config
from chatshared.protocol.errors import InputError
from chatshared.protocol.validator import validate_handle, validate_port

DEFAULT_SERVER_CONFIG: Dict[str, Any] = {
    **DEFAULT_CONFIG,
    "host": "0.0.0.0",
    "port": 30020,
    "backlog": 1,
    "handle": "host",
}

SERVER_CONFIG = DEFAULT_SERVER_CONFIG.copy()

ENV_PREFIX = "CHATSERVE_"


def load_server_config(env_path: str = ".env") -> Dict[str, Any]:
    load_env_config(SERVER_CONFIG, DEFAULT_SERVER_CONFIG, ENV_PREFIX, env_path)
    if SERVER_CONFIG["backlog"] < 1:
        raise ConfigError("backlog must be at least 1")
    try:
        validate_port(SERVER_CONFIG["port"])
        validate_handle(SERVER_CONFIG["handle"], SERVER_CONFIG["max_handle_len"])
    except InputError as exc:
        raise ConfigError(exc.message) from exc
    return SERVER_CONFIG


__all__ = ["SERVER_CONFIG", "DEFAULT_SERVER_CONFIG", "ConfigError", "load_server_config"]
