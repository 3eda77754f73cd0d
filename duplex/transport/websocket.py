"""`websockets`-backed socket handle (asyncio client or accepted server connection)."""

from __future__ import annotations

import asyncio
import logging
import contextlib
from typing import Any

import websockets

from duplex.errors import SocketConnectionError
from duplex.config.websocket import WS_CLOSE_NORMAL_CODE

from .state import ReadyState
from .handle import SocketHandle
from .base import EVENT_OPEN, EVENT_CLOSE, EVENT_ERROR, EVENT_MESSAGE

logger = logging.getLogger(__name__)


class WebSocketHandle(SocketHandle):
    """Drive one websocket connection from a background task.

    Inbound frames are emitted as ``message`` events. Outbound frames go
    through a queue drained by a writer task, so :meth:`send` never blocks;
    frames sent while still connecting are flushed once the socket opens.

    Events are emitted from the task, never from the constructor, so callbacks
    registered right after :meth:`start` see every event.
    """

    def __init__(
        self,
        url: str | None = None,
        *,
        connection: Any | None = None,
        connect_options: dict[str, Any] | None = None,
    ) -> None:
        super().__init__()
        if url is None and connection is None:
            raise ValueError("either url or connection is required")
        self.url = url
        self._conn = connection
        self._connect_options = dict(connect_options or {})
        self._state = ReadyState.CONNECTING
        self._outbox: asyncio.Queue[str | None] = asyncio.Queue()
        self._closed = asyncio.Event()
        self._finished = False
        self._task: asyncio.Task | None = None

    @classmethod
    def from_connection(cls, connection: Any) -> WebSocketHandle:
        """Wrap an already-accepted server connection and start pumping it."""
        handle = cls(connection=connection)
        handle.start()
        return handle

    @property
    def ready_state(self) -> ReadyState:
        return self._state

    def start(self) -> asyncio.Task:
        if self._task is None:
            self._task = asyncio.create_task(self._run())
            self._task.add_done_callback(self._on_task_done)
        return self._task

    def send(self, data: str) -> None:
        if self._state in (ReadyState.CLOSING, ReadyState.CLOSED):
            raise SocketConnectionError(f"WebSocket is {self._state.name.lower()}.")
        self._outbox.put_nowait(data)

    def close(self) -> None:
        if self._state in (ReadyState.CLOSING, ReadyState.CLOSED):
            return
        self._state = ReadyState.CLOSING
        if self._task is None:
            self._finish(None)
            return
        if self._conn is None:
            # Still handshaking.
            self._task.cancel()
            return
        self._outbox.put_nowait(None)

    async def wait_closed(self) -> None:
        await self._closed.wait()

    async def _run(self) -> None:
        error: BaseException | None = None
        try:
            if self._conn is None:
                self._conn = await websockets.connect(self.url, **self._connect_options)
            if self._state is ReadyState.CLOSING:
                await self._conn.close(code=WS_CLOSE_NORMAL_CODE)
                return
            self._state = ReadyState.OPEN
            self._emit(EVENT_OPEN)
            await self._pump()
        except asyncio.CancelledError:
            return
        except websockets.exceptions.ConnectionClosedError as exc:
            if self._state is not ReadyState.CLOSING:
                error = exc
        except Exception as exc:
            error = exc
        finally:
            self._finish(error)

    async def _pump(self) -> None:
        writer = asyncio.create_task(self._write_loop())
        try:
            async for raw in self._conn:
                # Binary frames are passed through; the codec decides whether they parse.
                self._emit(EVENT_MESSAGE, raw if isinstance(raw, str) else bytes(raw))
        finally:
            writer.cancel()
            with contextlib.suppress(asyncio.CancelledError, Exception):
                await writer

    async def _write_loop(self) -> None:
        while True:
            data = await self._outbox.get()
            if data is None:
                await self._conn.close(code=WS_CLOSE_NORMAL_CODE)
                return
            await self._conn.send(data)

    def _on_task_done(self, _task: asyncio.Task) -> None:
        self._finish(None)

    def _finish(self, error: BaseException | None) -> None:
        if self._finished:
            return
        self._finished = True
        self._state = ReadyState.CLOSED
        if error is not None:
            logger.debug("websocket url=%s failed: %s", self.url, error)
            self._emit(EVENT_ERROR, error)
        self._emit(EVENT_CLOSE)
        self._closed.set()


__all__ = ["WebSocketHandle"]
