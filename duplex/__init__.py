"""Request/response sessions over a duplex message socket."""

from .session import Session
from .state import AppSettings, SessionSettings, TransportSettings
from .protocol import Codec, JsonCodec, SchemaCodec, ControlPacket, MessagePacket
from .transport import ReadyState, SocketHandle, SocketBinding, WebSocketHandle, WebSocketBinding
from .errors import (
    SessionError,
    TransportError,
    PacketParseError,
    SessionClosedError,
    RequestTimeoutError,
    SocketConnectionError,
)

__all__ = [
    "AppSettings",
    "Codec",
    "ControlPacket",
    "JsonCodec",
    "MessagePacket",
    "PacketParseError",
    "ReadyState",
    "RequestTimeoutError",
    "SchemaCodec",
    "Session",
    "SessionClosedError",
    "SessionError",
    "SessionSettings",
    "SocketBinding",
    "SocketConnectionError",
    "SocketHandle",
    "TransportError",
    "TransportSettings",
    "WebSocketBinding",
    "WebSocketHandle",
]
