"""Socket binding contract.

This is the (small) contract a transport binding follows. The session never
touches a platform socket directly, only :class:`SocketHandle` objects handed
out by a binding.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Literal, Protocol

if TYPE_CHECKING:
    from .handle import SocketHandle

SocketEvent = Literal["open", "message", "error", "close"]

EVENT_OPEN: SocketEvent = "open"
EVENT_MESSAGE: SocketEvent = "message"
EVENT_ERROR: SocketEvent = "error"
EVENT_CLOSE: SocketEvent = "close"
SOCKET_EVENTS: tuple[SocketEvent, ...] = (EVENT_OPEN, EVENT_MESSAGE, EVENT_ERROR, EVENT_CLOSE)


class SocketBinding(Protocol):
    def open(self, url: str) -> SocketHandle:
        """Start connecting to *url* and return the handle immediately."""
        ...


__all__ = [
    "EVENT_CLOSE",
    "EVENT_ERROR",
    "EVENT_MESSAGE",
    "EVENT_OPEN",
    "SOCKET_EVENTS",
    "SocketBinding",
    "SocketEvent",
]
