"""Runtime settings (dataclasses only)."""

from __future__ import annotations

from dataclasses import dataclass

from duplex.config.session import (
    DUPLEX_URL,
    MSG_TIMEOUT_S,
    STRICT_CONNECT,
    SHOULD_RECONNECT,
    CONNECT_TIMEOUT_S,
    HEARTBEAT_INTERVAL_S,
)
from duplex.config.websocket import WS_OPEN_TIMEOUT_S, WS_MAX_MESSAGE_BYTES


@dataclass(frozen=True, slots=True)
class SessionSettings:
    url: str | None = DUPLEX_URL
    msg_timeout_s: float = MSG_TIMEOUT_S
    connect_timeout_s: float = CONNECT_TIMEOUT_S
    heartbeat_interval_s: float = HEARTBEAT_INTERVAL_S
    should_reconnect: bool = SHOULD_RECONNECT
    strict_connect: bool = STRICT_CONNECT


@dataclass(frozen=True, slots=True)
class TransportSettings:
    open_timeout_s: float = WS_OPEN_TIMEOUT_S
    max_message_bytes: int = WS_MAX_MESSAGE_BYTES


@dataclass(frozen=True, slots=True)
class AppSettings:
    session: SessionSettings
    transport: TransportSettings


__all__ = [
    "AppSettings",
    "SessionSettings",
    "TransportSettings",
]
