"""In-memory socket binding for driving a session by hand."""

from __future__ import annotations

import asyncio
from typing import Any

import orjson

from duplex.errors import SocketConnectionError
from duplex.transport import (
    EVENT_OPEN,
    EVENT_CLOSE,
    EVENT_ERROR,
    EVENT_MESSAGE,
    ReadyState,
    SocketHandle,
)


class FakeHandle(SocketHandle):
    def __init__(self, url: str | None = None, *, state: ReadyState = ReadyState.CONNECTING) -> None:
        super().__init__()
        self.url = url
        self.state = state
        self.sent: list[str] = []
        self.close_calls = 0

    @property
    def ready_state(self) -> ReadyState:
        return self.state

    def send(self, data: str) -> None:
        if self.state in (ReadyState.CLOSING, ReadyState.CLOSED):
            raise SocketConnectionError("fake socket closed")
        self.sent.append(data)

    def close(self) -> None:
        self.close_calls += 1
        if self.state is not ReadyState.CLOSED:
            self.state = ReadyState.CLOSING

    # Test drivers.

    def open(self) -> None:
        self.state = ReadyState.OPEN
        self._emit(EVENT_OPEN)

    def receive(self, data: str | bytes) -> None:
        self._emit(EVENT_MESSAGE, data)

    def fail(self, exc: BaseException) -> None:
        self._emit(EVENT_ERROR, exc)
        self.finish()

    def finish(self) -> None:
        self.state = ReadyState.CLOSED
        self._emit(EVENT_CLOSE)

    def sent_packets(self) -> list[dict[str, Any]]:
        return [orjson.loads(frame) for frame in self.sent]

    def listener_count(self) -> int:
        return sum(len(callbacks) for callbacks in self._callbacks.values())


class FakeBinding:
    def __init__(self) -> None:
        self.handles: list[FakeHandle] = []

    @property
    def last(self) -> FakeHandle:
        return self.handles[-1]

    def open(self, url: str) -> FakeHandle:
        handle = FakeHandle(url)
        self.handles.append(handle)
        return handle


async def settle(rounds: int = 3) -> None:
    for _ in range(rounds):
        await asyncio.sleep(0)


def wire_message(message_id: str, message: Any, responds_to: str | None = None) -> str:
    data: dict[str, Any] = {"packetType": "message", "messageId": message_id, "message": message}
    if responds_to is not None:
        data["respondsTo"] = responds_to
    return orjson.dumps(data).decode("utf-8")


def wire_control(message_id: str, control_type: str, responds_to: str | None = None) -> str:
    data: dict[str, Any] = {"packetType": "control", "messageId": message_id, "payload": {"type": control_type}}
    if responds_to is not None:
        data["respondsTo"] = responds_to
    return orjson.dumps(data).decode("utf-8")
