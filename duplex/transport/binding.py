"""Socket binding that opens `websockets` client connections."""

from __future__ import annotations

import logging
from typing import Any

from duplex.state.settings import TransportSettings

from .websocket import WebSocketHandle

logger = logging.getLogger(__name__)


class WebSocketBinding:
    def __init__(
        self,
        settings: TransportSettings | None = None,
        *,
        additional_headers: list[tuple[str, str]] | None = None,
    ) -> None:
        self.settings = settings or TransportSettings()
        self.additional_headers = list(additional_headers or [])

    def connect_options(self) -> dict[str, Any]:
        # Liveness is checked by the session heartbeat, not by protocol-level pings.
        return {
            "additional_headers": self.additional_headers,
            "open_timeout": self.settings.open_timeout_s,
            "max_size": self.settings.max_message_bytes,
            "ping_interval": None,
        }

    def open(self, url: str) -> WebSocketHandle:
        logger.debug("opening websocket url=%s", url)
        handle = WebSocketHandle(url, connect_options=self.connect_options())
        handle.start()
        return handle


__all__ = ["WebSocketBinding"]
