"""Socket bindings."""

from .state import ReadyState
from .handle import SocketHandle
from .binding import WebSocketBinding
from .websocket import WebSocketHandle
from .base import (
    EVENT_OPEN,
    EVENT_CLOSE,
    EVENT_ERROR,
    EVENT_MESSAGE,
    SOCKET_EVENTS,
    SocketEvent,
    SocketBinding,
)

__all__ = [
    "EVENT_CLOSE",
    "EVENT_ERROR",
    "EVENT_MESSAGE",
    "EVENT_OPEN",
    "ReadyState",
    "SOCKET_EVENTS",
    "SocketBinding",
    "SocketEvent",
    "SocketHandle",
    "WebSocketBinding",
    "WebSocketHandle",
]
