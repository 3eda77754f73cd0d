"""Socket ready states (same numbering as the browser WebSocket API)."""

from __future__ import annotations

import enum


class ReadyState(enum.IntEnum):
    CONNECTING = 0
    OPEN = 1
    CLOSING = 2
    CLOSED = 3


__all__ = ["ReadyState"]
