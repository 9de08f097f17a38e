from __future__ import annotations

import logging
import os
from typing import Any, Dict

from dotenv import load_dotenv

from chatshared.protocol.constants import (
    DEFAULT_RECV_CHUNK,
    HANDLE_SEPARATOR,
    MAX_FRAME_PAYLOAD,
    MAX_HANDLE_LEN,
    MAX_MESSAGE_LEN,
)

DEFAULT_CONFIG: Dict[str, Any] = {
    "log_level": "WARNING",
    "connect_timeout": 10.0,
    "socket_timeout": 0.0,  # 0 keeps the socket fully blocking
    "max_message_len": MAX_MESSAGE_LEN,
    "max_handle_len": MAX_HANDLE_LEN,
    "recv_chunk_size": DEFAULT_RECV_CHUNK,
}

CLIENT_CONFIG: Dict[str, Any] = DEFAULT_CONFIG.copy()

ENV_PREFIX = "CHATCLIENT_"


class ConfigError(Exception):
    """Raised when configuration values are invalid."""

    pass


def load_config(env_path: str = ".env") -> Dict[str, Any]:
    """Load client configuration from env file/environment variables."""
    return load_env_config(CLIENT_CONFIG, DEFAULT_CONFIG, ENV_PREFIX, env_path)


def load_env_config(config: Dict[str, Any], defaults: Dict[str, Any], prefix: str, env_path: str = ".env") -> Dict[str, Any]:
    """Fill ``config`` from ``<prefix><KEY>`` variables, typed after ``defaults``."""
    if os.path.exists(env_path):
        load_dotenv(env_path)

    for key, default_value in defaults.items():
        env_key = f"{prefix}{key.upper()}"
        value = os.getenv(env_key, default_value)
        config[key] = _coerce_type(value, type(default_value))

    validate_config(config)
    logging.getLogger().setLevel(str(config["log_level"]).upper())
    return config


def _coerce_type(value: Any, target_type: type) -> Any:
    if isinstance(value, target_type):
        return value
    try:
        return target_type(value)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"Cannot convert {value} to {target_type}") from exc


def validate_config(config: Dict[str, Any]) -> None:
    if not isinstance(logging.getLevelName(str(config["log_level"]).upper()), int):
        raise ConfigError(f"Unknown log_level {config['log_level']}")
    if config["connect_timeout"] < 0 or config["socket_timeout"] < 0:
        raise ConfigError("timeouts must not be negative")
    if config["max_handle_len"] <= 0:
        raise ConfigError("max_handle_len must be positive")
    if config["max_message_len"] <= 0:
        raise ConfigError("max_message_len must be positive")
    payload_max = config["max_handle_len"] + len(HANDLE_SEPARATOR) + config["max_message_len"]
    if payload_max > MAX_FRAME_PAYLOAD:
        raise ConfigError(
            f"max_handle_len + max_message_len leaves a {payload_max} byte payload, "
            f"over the {MAX_FRAME_PAYLOAD} byte frame limit"
        )
    if config["recv_chunk_size"] <= 0:
        raise ConfigError("recv_chunk_size must be positive")


def timeout_or_none(value: float) -> float | None:
    """Map a configured 0 to ``None`` (blocking) for ``socket.settimeout``."""
    return value if value > 0 else None


__all__ = [
    "CLIENT_CONFIG",
    "DEFAULT_CONFIG",
    "ConfigError",
    "load_config",
    "load_env_config",
    "timeout_or_none",
    "validate_config",
]
