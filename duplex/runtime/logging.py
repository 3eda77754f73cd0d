"""Logging initialization."""

from __future__ import annotations

import os
import logging

from duplex.config.logging import LOG_LEVEL, LOG_FORMAT


def configure_logging() -> None:
    # websockets logs every handshake and close at INFO/DEBUG. Keep it tame unless explicitly enabled.
    if (os.getenv("SHOW_WEBSOCKETS_LOGS") or "").strip().lower() not in {"1", "true", "yes"}:
        logging.getLogger("websockets").setLevel(logging.WARNING)
    logging.basicConfig(level=LOG_LEVEL, format=LOG_FORMAT)


__all__ = ["configure_logging"]
