"""Environment parsing for runtime settings.

Configuration values are read from the environment at call time (unlike the
import-time constants in `duplex/config/*`) so tests and long-lived processes
can reload them.
"""

from __future__ import annotations

import os

from duplex.state.settings import AppSettings, SessionSettings, TransportSettings
from duplex.config.websocket import (
    ENV_WS_OPEN_TIMEOUT_S,
    ENV_WS_MAX_MESSAGE_BYTES,
    DEFAULT_WS_OPEN_TIMEOUT_S,
    DEFAULT_WS_MAX_MESSAGE_BYTES,
)
from duplex.config.session import (
    ENV_DUPLEX_URL,
    ENV_MSG_TIMEOUT_S,
    ENV_STRICT_CONNECT,
    ENV_SHOULD_RECONNECT,
    DEFAULT_MSG_TIMEOUT_S,
    ENV_CONNECT_TIMEOUT_S,
    DEFAULT_STRICT_CONNECT,
    ENV_HEARTBEAT_INTERVAL_S,
    DEFAULT_SHOULD_RECONNECT,
    DEFAULT_CONNECT_TIMEOUT_S,
    DEFAULT_HEARTBEAT_INTERVAL_S,
)


def _str_env(name: str) -> str | None:
    raw = os.getenv(name)
    if raw is None:
        return None
    v = raw.strip()
    return v if v else None


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except Exception:
        return default


def _float_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except Exception:
        return default


def _positive_float_env(name: str, default: float) -> float:
    value = _float_env(name, default)
    return value if value > 0 else default


def _bool_env(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def load_session_settings() -> SessionSettings:
    return SessionSettings(
        url=_str_env(ENV_DUPLEX_URL),
        msg_timeout_s=_positive_float_env(ENV_MSG_TIMEOUT_S, DEFAULT_MSG_TIMEOUT_S),
        connect_timeout_s=_positive_float_env(ENV_CONNECT_TIMEOUT_S, DEFAULT_CONNECT_TIMEOUT_S),
        heartbeat_interval_s=_positive_float_env(ENV_HEARTBEAT_INTERVAL_S, DEFAULT_HEARTBEAT_INTERVAL_S),
        should_reconnect=_bool_env(ENV_SHOULD_RECONNECT, DEFAULT_SHOULD_RECONNECT),
        strict_connect=_bool_env(ENV_STRICT_CONNECT, DEFAULT_STRICT_CONNECT),
    )


def load_transport_settings() -> TransportSettings:
    return TransportSettings(
        open_timeout_s=_positive_float_env(ENV_WS_OPEN_TIMEOUT_S, DEFAULT_WS_OPEN_TIMEOUT_S),
        max_message_bytes=max(1, _int_env(ENV_WS_MAX_MESSAGE_BYTES, DEFAULT_WS_MAX_MESSAGE_BYTES)),
    )


def load_settings() -> AppSettings:
    return AppSettings(
        session=load_session_settings(),
        transport=load_transport_settings(),
    )


__all__ = ["load_settings", "load_session_settings", "load_transport_settings"]
