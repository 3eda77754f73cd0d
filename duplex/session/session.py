"""Duplex session over a message-oriented socket.

The session owns one socket handle at a time, a heartbeat monitor and the
table of outstanding requests. It outlives individual sockets: reconnects
replace the handle, never the session.

State machine::

    Closed --connect()--> Connecting --open event--> Open
    Connecting/Open --disconnect() | close event | dead heartbeat--> Closed

Everything runs on one asyncio loop; callbacks from the socket, timers and
public calls never interleave.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Generic
from collections.abc import Callable, Awaitable

from duplex.state.settings import SessionSettings
from duplex.config.protocol import CONTROL_TYPE_PING
from duplex.runtime.settings import load_session_settings
from duplex.errors import PacketParseError, TransportError, SessionClosedError, SocketConnectionError
from duplex.protocol import (
    Codec,
    Packet,
    JsonCodec,
    IdGenerator,
    MessagePacket,
    generate_id,
)
from duplex.protocol.packets import MessageT, ping, pong
from duplex.transport import (
    EVENT_OPEN,
    EVENT_CLOSE,
    EVENT_ERROR,
    EVENT_MESSAGE,
    ReadyState,
    SocketHandle,
    SocketBinding,
    WebSocketBinding,
)

from .heartbeat import HeartbeatMonitor
from .listeners import ListenerRegistry
from .correlation import CorrelationTable

logger = logging.getLogger(__name__)

MessageListener = Callable[[Any, str], Any]
StateListener = Callable[[], Any]
ErrorListener = Callable[[BaseException], Any]


class Session(Generic[MessageT]):
    def __init__(
        self,
        settings: SessionSettings | None = None,
        *,
        binding: SocketBinding | None = None,
        codec: Codec | None = None,
        generate_id: IdGenerator | None = None,
        handle: SocketHandle | None = None,
    ) -> None:
        self.settings = settings or load_session_settings()
        self.url: str | None = None
        self._binding = binding or WebSocketBinding()
        self._codec = codec or JsonCodec()
        self._generate_id = generate_id or _default_generate_id
        self._socket: SocketHandle | None = None
        self._pending = CorrelationTable()
        self._heartbeat = HeartbeatMonitor(
            on_ping=self._ping,
            on_dead=self._on_heartbeat_dead,
            interval_s=self.settings.heartbeat_interval_s,
        )
        self._message_listeners: ListenerRegistry[MessageListener] = ListenerRegistry("message")
        self._open_listeners: ListenerRegistry[StateListener] = ListenerRegistry("open")
        self._close_listeners: ListenerRegistry[StateListener] = ListenerRegistry("close")
        self._error_listeners: ListenerRegistry[ErrorListener] = ListenerRegistry("error")
        self._listener_tasks: set[asyncio.Task] = set()
        self._connect_timer: asyncio.TimerHandle | None = None
        self._reconnect_timer: asyncio.TimerHandle | None = None

        if handle is not None:
            self.attach(handle)
        elif self.settings.url:
            self.connect(self.settings.url)

    # --- state ---

    @property
    def status(self) -> ReadyState | None:
        """Raw ready state of the current socket, ``None`` without one."""
        return self._socket.ready_state if self._socket is not None else None

    @property
    def is_connected(self) -> bool:
        return self.status is ReadyState.OPEN

    @property
    def heartbeat_alive(self) -> bool:
        return self._heartbeat.alive

    @property
    def pending_count(self) -> int:
        return len(self._pending)

    # --- listeners ---

    def add_message_listener(self, listener: MessageListener) -> MessageListener:
        return self._message_listeners.add(listener)

    def add_open_listener(self, listener: StateListener) -> StateListener:
        return self._open_listeners.add(listener)

    def add_close_listener(self, listener: StateListener) -> StateListener:
        return self._close_listeners.add(listener)

    def add_error_listener(self, listener: ErrorListener) -> ErrorListener:
        return self._error_listeners.add(listener)

    def remove_message_listener(self, listener: MessageListener) -> bool:
        return self._message_listeners.remove(listener)

    def remove_open_listener(self, listener: StateListener) -> bool:
        return self._open_listeners.remove(listener)

    def remove_close_listener(self, listener: StateListener) -> bool:
        return self._close_listeners.remove(listener)

    def remove_error_listener(self, listener: ErrorListener) -> bool:
        return self._error_listeners.remove(listener)

    def clear_listeners(self) -> None:
        self._message_listeners.clear()
        self._open_listeners.clear()
        self._close_listeners.clear()
        self._error_listeners.clear()

    # --- lifecycle ---

    def connect(self, url: str) -> None:
        """Open a socket to *url*.

        With a socket already attached this replaces it, or raises
        :class:`SocketConnectionError` when ``strict_connect`` is set.
        """
        self._release_current()
        self._open(url)

    def attach(self, handle: SocketHandle) -> None:
        """Adopt a socket opened elsewhere, e.g. one accepted by a server.

        No url is recorded, so an adopted socket is never reconnected.
        """
        self._release_current()
        self._cancel_timers()
        self.url = None
        self._install(handle)
        if handle.ready_state is ReadyState.OPEN:
            asyncio.get_running_loop().call_soon(self._on_open, handle)

    def disconnect(self) -> None:
        """Tear down eagerly. Safe to call repeatedly and before any connect."""
        self.url = None
        self._cancel_timers()
        self._heartbeat.stop()
        socket, self._socket = self._socket, None
        if socket is not None:
            logger.info("disconnecting")
            socket.close()
        self._pending.reject_all(lambda message_id: SessionClosedError(f"Session disconnected ({message_id})"))

    def _release_current(self) -> None:
        if self._socket is None:
            return
        if self.settings.strict_connect:
            raise SocketConnectionError("Tried connecting but socket already connected.")
        self.disconnect()

    def _open(self, url: str) -> None:
        self._cancel_timers()
        self.url = url
        logger.info("connecting url=%s", url)
        handle = self._binding.open(url)
        self._install(handle)
        self._connect_timer = asyncio.get_running_loop().call_later(
            self.settings.connect_timeout_s,
            self._check_connected,
            handle,
        )

    def _install(self, handle: SocketHandle) -> None:
        self._socket = handle
        handle.on(EVENT_OPEN, lambda: self._on_open(handle))
        handle.on(EVENT_MESSAGE, lambda data: self._on_message(handle, data))
        handle.on(EVENT_ERROR, lambda exc: self._on_error(handle, exc))
        handle.on(EVENT_CLOSE, lambda: self._on_close(handle))
        self._heartbeat.stop()
        self._heartbeat.start()

    def _replace(self, url: str) -> None:
        """Drop the current socket without waiting for its close, then reopen."""
        socket, self._socket = self._socket, None
        self._heartbeat.stop()
        was_open = socket is not None and socket.ready_state is ReadyState.OPEN
        if socket is not None:
            socket.clear_listeners()
            socket.close()
        self._pending.reject_all(lambda message_id: SessionClosedError(f"Socket replaced ({message_id})"))
        if was_open:
            self._notify(self._close_listeners)
        self._open(url)

    def _check_connected(self, handle: SocketHandle) -> None:
        self._connect_timer = None
        if handle is not self._socket or self.url is None:
            return
        if handle.ready_state is ReadyState.OPEN:
            return
        logger.info("socket not open after %.1fs; retrying url=%s", self.settings.connect_timeout_s, self.url)
        self._replace(self.url)

    def _schedule_reconnect(self) -> None:
        if self._reconnect_timer is not None:
            return
        logger.info("reconnecting in %.1fs url=%s", self.settings.connect_timeout_s, self.url)
        self._reconnect_timer = asyncio.get_running_loop().call_later(
            self.settings.connect_timeout_s,
            self._reconnect,
        )

    def _reconnect(self) -> None:
        self._reconnect_timer = None
        if self.url is None or self._socket is not None:
            return
        self._open(self.url)

    def _cancel_timers(self) -> None:
        if self._connect_timer is not None:
            self._connect_timer.cancel()
            self._connect_timer = None
        if self._reconnect_timer is not None:
            self._reconnect_timer.cancel()
            self._reconnect_timer = None

    def _on_heartbeat_dead(self) -> None:
        if self.settings.should_reconnect and self.url:
            self._replace(self.url)
            return
        if self._socket is not None:
            self._socket.close()

    # --- socket events ---

    def _on_open(self, handle: SocketHandle) -> None:
        if handle is not self._socket:
            return
        if self._connect_timer is not None:
            self._connect_timer.cancel()
            self._connect_timer = None
        logger.info("socket open url=%s", self.url)
        self._notify(self._open_listeners)

    def _on_message(self, handle: SocketHandle, data: str | bytes) -> None:
        if handle is not self._socket:
            return
        self.on_data(data)

    def _on_error(self, handle: SocketHandle, exc: BaseException) -> None:
        logger.debug("socket error url=%s: %s", self.url, exc)
        self._report(exc if isinstance(exc, TransportError) else TransportError(exc))

    def _on_close(self, handle: SocketHandle) -> None:
        if handle is not self._socket:
            # Already released by disconnect().
            self._notify(self._close_listeners)
            return
        self._socket = None
        self._heartbeat.stop()
        if self._connect_timer is not None:
            self._connect_timer.cancel()
            self._connect_timer = None
        logger.info("socket closed url=%s", self.url)
        self._pending.reject_all(lambda message_id: SessionClosedError(f"Socket closed ({message_id})"))
        self._notify(self._close_listeners)
        if self.settings.should_reconnect and self.url:
            self._schedule_reconnect()

    def on_data(self, raw: str | bytes) -> None:
        """Handle one inbound frame: parse, mark liveness, dispatch, correlate."""
        try:
            packet = self._codec.parse(raw)
        except Exception as exc:
            logger.debug("dropping unparseable frame: %s", exc)
            if not isinstance(exc, PacketParseError):
                wrapped = PacketParseError(str(exc))
                wrapped.__cause__ = exc
                exc = wrapped
            self._report(exc)
            return
        if packet is None:
            return

        self._heartbeat.touch()

        if isinstance(packet, MessagePacket):
            self._dispatch_message(packet)
        elif packet.payload.type == CONTROL_TYPE_PING:
            self._pong(packet.message_id)

        if packet.responds_to is not None:
            value = packet.message if isinstance(packet, MessagePacket) else None
            self._pending.resolve(packet.responds_to, value)

    def _dispatch_message(self, packet: MessagePacket[Any]) -> None:
        awaitables = self._message_listeners.invoke(packet.message, packet.message_id, on_error=self._report)
        self._schedule(awaitables, report=True)

    def _notify(self, registry: ListenerRegistry[StateListener]) -> None:
        self._schedule(registry.invoke(on_error=self._report), report=True)

    def _report(self, exc: BaseException) -> None:
        self._schedule(self._error_listeners.invoke(exc, on_error=lambda _exc: None), report=False)

    def _schedule(self, awaitables: list[Awaitable[Any]], *, report: bool) -> None:
        for awaitable in awaitables:
            task = asyncio.ensure_future(awaitable)
            self._listener_tasks.add(task)
            task.add_done_callback(lambda t, r=report: self._on_listener_done(t, r))

    def _on_listener_done(self, task: asyncio.Task, report: bool) -> None:
        self._listener_tasks.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is None:
            return
        logger.error("async listener failed", exc_info=exc)
        if report:
            self._report(exc)

    # --- outbound ---

    def send(self, message: MessageT, responds_to: str | None = None) -> str:
        """Transmit *message* without waiting for a reply; return its ``messageId``."""
        packet = MessagePacket(message_id=self._generate_id(), message=message, responds_to=responds_to)
        self.transmit(packet)
        return packet.message_id

    async def request(self, message: MessageT, *, timeout_s: float | None = None) -> MessageT | None:
        """Transmit *message* and wait for the packet that responds to it.

        Raises :class:`RequestTimeoutError` when no reply arrives within
        ``timeout_s`` (default ``msg_timeout_s``) and
        :class:`SessionClosedError` when the session is torn down first.
        """
        message_id = self._generate_id()
        packet = MessagePacket(message_id=message_id, message=message)
        timeout = self.settings.msg_timeout_s if timeout_s is None else float(timeout_s)
        future = self._pending.register(message_id, timeout)
        try:
            self.transmit(packet)
        except Exception:
            self._pending.discard(message_id)
            raise
        return await future

    def transmit(self, packet: Packet) -> None:
        socket = self._socket
        if socket is None:
            raise SocketConnectionError("WebSocket is not connected.")
        if socket.ready_state in (ReadyState.CLOSING, ReadyState.CLOSED):
            raise SocketConnectionError(f"WebSocket is {socket.ready_state.name.lower()}.")
        socket.send(self._codec.serialize(packet))

    def _ping(self) -> None:
        self._transmit_control(ping(self._generate_id()))

    def _pong(self, responds_to: str) -> None:
        self._transmit_control(pong(self._generate_id(), responds_to))

    def _transmit_control(self, packet: Packet) -> None:
        try:
            self.transmit(packet)
        except SocketConnectionError as exc:
            logger.debug("control %s not sent: %s", packet.payload.type, exc)
            self._report(exc)


def _default_generate_id() -> str:
    return generate_id()


__all__ = ["ErrorListener", "MessageListener", "Session", "StateListener"]
