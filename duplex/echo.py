"""Echo peer: answers every message packet with the same message.

Each accepted connection gets its own :class:`Session` attached to the
server-side socket, so pings are answered and liveness is tracked exactly as
on the client side.
"""

from __future__ import annotations

import asyncio
import logging
import dataclasses
from typing import Any

import websockets

from duplex.session import Session
from duplex.state.settings import AppSettings
from duplex.transport import WebSocketHandle
from duplex.runtime.settings import load_settings

logger = logging.getLogger(__name__)


def _echo_handler(settings: AppSettings):
    # Accepted sockets are never reconnected.
    session_settings = dataclasses.replace(settings.session, url=None, should_reconnect=False, strict_connect=False)

    async def handler(connection: Any) -> None:
        handle = WebSocketHandle.from_connection(connection)
        session: Session[Any] = Session(session_settings, handle=handle)

        def echo(message: Any, message_id: str) -> None:
            session.send(message, responds_to=message_id)

        session.add_message_listener(echo)
        session.add_error_listener(lambda exc: logger.debug("echo session error: %s", exc))
        logger.info("echo: peer connected remote=%s", getattr(connection, "remote_address", None))
        try:
            await handle.wait_closed()
        finally:
            session.disconnect()
            logger.info("echo: peer disconnected")

    return handler


async def serve_echo(host: str = "127.0.0.1", port: int = 0, *, settings: AppSettings | None = None):
    """Start an echo server and return it; ``port=0`` picks a free port."""
    settings = settings or load_settings()
    server = await websockets.serve(
        _echo_handler(settings),
        host,
        port,
        max_size=settings.transport.max_message_bytes,
        ping_interval=None,
    )
    logger.info("echo: listening on %s", ", ".join(str(s.getsockname()) for s in server.sockets))
    return server


async def run_echo(host: str, port: int, *, settings: AppSettings | None = None) -> None:
    server = await serve_echo(host, port, settings=settings)
    async with server:
        await server.serve_forever()


def server_port(server: Any) -> int:
    return int(next(iter(server.sockets)).getsockname()[1])


__all__ = ["run_echo", "serve_echo", "server_port"]
