"""WebSocket transport configuration (env-resolved constants only)."""

from __future__ import annotations

import os

ENV_WS_OPEN_TIMEOUT_S = "DUPLEX_WS_OPEN_TIMEOUT_S"
ENV_WS_MAX_MESSAGE_BYTES = "DUPLEX_WS_MAX_MESSAGE_BYTES"

DEFAULT_WS_OPEN_TIMEOUT_S = 10.0
DEFAULT_WS_MAX_MESSAGE_BYTES = 16 * 1024 * 1024

# Close code
WS_CLOSE_NORMAL_CODE = 1000

try:
    WS_OPEN_TIMEOUT_S: float = float(os.getenv(ENV_WS_OPEN_TIMEOUT_S) or DEFAULT_WS_OPEN_TIMEOUT_S)
except Exception:
    WS_OPEN_TIMEOUT_S = DEFAULT_WS_OPEN_TIMEOUT_S
if WS_OPEN_TIMEOUT_S <= 0:
    WS_OPEN_TIMEOUT_S = DEFAULT_WS_OPEN_TIMEOUT_S

try:
    WS_MAX_MESSAGE_BYTES: int = int(os.getenv(ENV_WS_MAX_MESSAGE_BYTES) or DEFAULT_WS_MAX_MESSAGE_BYTES)
except Exception:
    WS_MAX_MESSAGE_BYTES = DEFAULT_WS_MAX_MESSAGE_BYTES
WS_MAX_MESSAGE_BYTES = max(1, int(WS_MAX_MESSAGE_BYTES))

__all__ = [
    "ENV_WS_OPEN_TIMEOUT_S",
    "ENV_WS_MAX_MESSAGE_BYTES",
    "DEFAULT_WS_OPEN_TIMEOUT_S",
    "DEFAULT_WS_MAX_MESSAGE_BYTES",
    "WS_CLOSE_NORMAL_CODE",
    "WS_OPEN_TIMEOUT_S",
    "WS_MAX_MESSAGE_BYTES",
]
