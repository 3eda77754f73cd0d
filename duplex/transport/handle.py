"""Abstract socket handle with event callback registration."""

from __future__ import annotations

import logging
from typing import Any
from abc import ABC, abstractmethod
from collections.abc import Callable

from .state import ReadyState
from .base import SOCKET_EVENTS, SocketEvent

logger = logging.getLogger(__name__)


class SocketHandle(ABC):
    """A single transport connection.

    Events:
      - ``open()`` once the transport is usable
      - ``message(data: str | bytes)`` per inbound frame, in delivery order (text or binary)
      - ``error(exc)`` when the transport fails; always followed by ``close``
      - ``close()`` exactly once, last
    """

    def __init__(self) -> None:
        self._callbacks: dict[SocketEvent, list[Callable[..., Any]]] = {event: [] for event in SOCKET_EVENTS}

    def on(self, event: SocketEvent, callback: Callable[..., Any]) -> None:
        if event not in self._callbacks:
            raise ValueError(f"unknown socket event: {event!r}")
        self._callbacks[event].append(callback)

    def clear_listeners(self) -> None:
        for callbacks in self._callbacks.values():
            callbacks.clear()

    def _emit(self, event: SocketEvent, *args: Any) -> None:
        for callback in list(self._callbacks[event]):
            try:
                callback(*args)
            except Exception:
                logger.exception("socket %s callback failed", event)

    @property
    @abstractmethod
    def ready_state(self) -> ReadyState:
        """Current transport state."""

    @abstractmethod
    def send(self, data: str) -> None:
        """Queue a text frame for delivery."""

    @abstractmethod
    def close(self) -> None:
        """Start closing; ``close`` is emitted once the transport is down."""


__all__ = ["SocketHandle"]
