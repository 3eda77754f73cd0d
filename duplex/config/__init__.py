"""Configuration module exports (env-resolved constants only)."""

from .websocket import WS_OPEN_TIMEOUT_S, WS_MAX_MESSAGE_BYTES
from .session import (
    DUPLEX_URL,
    MSG_TIMEOUT_S,
    STRICT_CONNECT,
    SHOULD_RECONNECT,
    CONNECT_TIMEOUT_S,
    HEARTBEAT_INTERVAL_S,
)

__all__ = [
    "CONNECT_TIMEOUT_S",
    "DUPLEX_URL",
    "HEARTBEAT_INTERVAL_S",
    "MSG_TIMEOUT_S",
    "SHOULD_RECONNECT",
    "STRICT_CONNECT",
    "WS_MAX_MESSAGE_BYTES",
    "WS_OPEN_TIMEOUT_S",
]
