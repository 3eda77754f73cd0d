"""Session timing and reconnect configuration (env-resolved constants only)."""

from __future__ import annotations

import os

ENV_DUPLEX_URL = "DUPLEX_URL"
ENV_MSG_TIMEOUT_S = "DUPLEX_MSG_TIMEOUT_S"
ENV_CONNECT_TIMEOUT_S = "DUPLEX_CONNECT_TIMEOUT_S"
ENV_HEARTBEAT_INTERVAL_S = "DUPLEX_HEARTBEAT_INTERVAL_S"
ENV_SHOULD_RECONNECT = "DUPLEX_SHOULD_RECONNECT"
ENV_STRICT_CONNECT = "DUPLEX_STRICT_CONNECT"

DEFAULT_MSG_TIMEOUT_S = 60.0
DEFAULT_CONNECT_TIMEOUT_S = 5.0
# Proxies such as nginx drop duplex connections after ~60s without traffic.
DEFAULT_HEARTBEAT_INTERVAL_S = 30.0
DEFAULT_SHOULD_RECONNECT = False
DEFAULT_STRICT_CONNECT = False

_TRUE_VALUES = {"1", "true", "yes", "y", "on"}

DUPLEX_URL: str | None = (os.getenv(ENV_DUPLEX_URL) or "").strip() or None

try:
    MSG_TIMEOUT_S: float = float(os.getenv(ENV_MSG_TIMEOUT_S) or DEFAULT_MSG_TIMEOUT_S)
except Exception:
    MSG_TIMEOUT_S = DEFAULT_MSG_TIMEOUT_S
if MSG_TIMEOUT_S <= 0:
    MSG_TIMEOUT_S = DEFAULT_MSG_TIMEOUT_S

try:
    CONNECT_TIMEOUT_S: float = float(os.getenv(ENV_CONNECT_TIMEOUT_S) or DEFAULT_CONNECT_TIMEOUT_S)
except Exception:
    CONNECT_TIMEOUT_S = DEFAULT_CONNECT_TIMEOUT_S
if CONNECT_TIMEOUT_S <= 0:
    CONNECT_TIMEOUT_S = DEFAULT_CONNECT_TIMEOUT_S

try:
    HEARTBEAT_INTERVAL_S: float = float(os.getenv(ENV_HEARTBEAT_INTERVAL_S) or DEFAULT_HEARTBEAT_INTERVAL_S)
except Exception:
    HEARTBEAT_INTERVAL_S = DEFAULT_HEARTBEAT_INTERVAL_S
if HEARTBEAT_INTERVAL_S <= 0:
    HEARTBEAT_INTERVAL_S = DEFAULT_HEARTBEAT_INTERVAL_S

_SHOULD_RECONNECT_RAW = (os.getenv(ENV_SHOULD_RECONNECT) or "").strip().lower()
SHOULD_RECONNECT: bool = (_SHOULD_RECONNECT_RAW in _TRUE_VALUES) if _SHOULD_RECONNECT_RAW else DEFAULT_SHOULD_RECONNECT

_STRICT_CONNECT_RAW = (os.getenv(ENV_STRICT_CONNECT) or "").strip().lower()
STRICT_CONNECT: bool = (_STRICT_CONNECT_RAW in _TRUE_VALUES) if _STRICT_CONNECT_RAW else DEFAULT_STRICT_CONNECT

__all__ = [
    "ENV_DUPLEX_URL",
    "ENV_MSG_TIMEOUT_S",
    "ENV_CONNECT_TIMEOUT_S",
    "ENV_HEARTBEAT_INTERVAL_S",
    "ENV_SHOULD_RECONNECT",
    "ENV_STRICT_CONNECT",
    "DEFAULT_MSG_TIMEOUT_S",
    "DEFAULT_CONNECT_TIMEOUT_S",
    "DEFAULT_HEARTBEAT_INTERVAL_S",
    "DEFAULT_SHOULD_RECONNECT",
    "DEFAULT_STRICT_CONNECT",
    "DUPLEX_URL",
    "MSG_TIMEOUT_S",
    "CONNECT_TIMEOUT_S",
    "HEARTBEAT_INTERVAL_S",
    "SHOULD_RECONNECT",
    "STRICT_CONNECT",
]
