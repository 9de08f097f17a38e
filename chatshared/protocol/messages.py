from __future__ import annotations

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, ValidationInfo, field_validator

from .constants import ENCODING, HANDLE_SEPARATOR, MAX_HANDLE_LEN, MAX_MESSAGE_LEN
from .errors import InputError
from .validator import validate_handle, validate_hostname, validate_message, validate_port


def _limit(info: ValidationInfo, key: str, default: int) -> int:
    return int((info.context or {}).get(key, default))


def _first_error(exc: ValidationError) -> str:
    errors = exc.errors()
    return errors[0]["msg"] if errors else str(exc)


class ConnectTarget(BaseModel):
    """Destination taken from the command line."""

    model_config = ConfigDict(frozen=True)

    host: str = Field(..., description="Hostname or IPv4 address of the peer")
    port: int = Field(..., description="TCP port of the peer")

    @field_validator("host")
    @classmethod
    def _check_host(cls, value: str) -> str:
        return validate_hostname(value)

    @field_validator("port", mode="before")
    @classmethod
    def _check_port(cls, value: Any) -> int:
        return validate_port(value)

    @classmethod
    def parse(cls, host: str, port: str) -> "ConnectTarget":
        try:
            return cls(host=host, port=port)
        except ValidationError as exc:
            raise InputError(_first_error(exc)) from exc


class ChatLine(BaseModel):
    """One outbound chat message; the wire payload is ``handle> text``."""

    model_config = ConfigDict(frozen=True)

    handle: str
    text: str

    @field_validator("handle")
    @classmethod
    def _check_handle(cls, value: str, info: ValidationInfo) -> str:
        return validate_handle(value, _limit(info, "max_handle_len", MAX_HANDLE_LEN))

    @field_validator("text")
    @classmethod
    def _check_text(cls, value: str, info: ValidationInfo) -> str:
        return validate_message(value, _limit(info, "max_message_len", MAX_MESSAGE_LEN))

    @classmethod
    def build(cls, handle: str, text: str, limits: Optional[Dict[str, int]] = None) -> "ChatLine":
        try:
            return cls.model_validate({"handle": handle, "text": text}, context=limits or {})
        except ValidationError as exc:
            raise InputError(_first_error(exc)) from exc

    @property
    def prompt(self) -> str:
        return f"{self.handle}{HANDLE_SEPARATOR}"

    def to_payload(self) -> bytes:
        return f"{self.prompt}{self.text}".encode(ENCODING)


__all__ = ["ConnectTarget", "ChatLine"]
