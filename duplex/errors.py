"""Shared error types for duplex sessions."""

from __future__ import annotations


class SessionError(Exception):
    """Base class for all session-layer errors."""


class SocketConnectionError(SessionError, ConnectionError):
    """Raised when data is transmitted without a live socket, or on a strict reconnect."""

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or "No connection to server")


class SessionClosedError(SocketConnectionError):
    """Raised into pending requests when their session is torn down."""


class RequestTimeoutError(SessionError, TimeoutError):
    """A request did not receive a correlated reply in time."""

    def __init__(self, message_id: str, timeout_s: float) -> None:
        super().__init__(f"Timeout for message {message_id}")
        self.message_id = message_id
        self.timeout_s = timeout_s


class PacketParseError(SessionError, ValueError):
    """Inbound data (or an outbound packet) does not match the packet format."""


class TransportError(SessionError):
    """The underlying socket reported an error."""

    def __init__(self, cause: BaseException | str) -> None:
        super().__init__(str(cause) or type(cause).__name__)
        self.cause = cause if isinstance(cause, BaseException) else None


__all__ = [
    "SessionError",
    "SocketConnectionError",
    "SessionClosedError",
    "RequestTimeoutError",
    "PacketParseError",
    "TransportError",
]
