from __future__ import annotations

import asyncio
import dataclasses

import pytest
import websockets

from duplex.echo import serve_echo, server_port
from duplex.runtime.settings import load_settings
from duplex import (
    Session,
    ReadyState,
    PacketParseError,
    WebSocketBinding,
    SessionClosedError,
    SocketConnectionError,
)


def _client(settings) -> Session:
    return Session(
        dataclasses.replace(settings.session, url=None, should_reconnect=False, heartbeat_interval_s=30.0),
        binding=WebSocketBinding(settings.transport),
    )


@pytest.mark.asyncio
async def test_request_round_trip_through_echo_peer() -> None:
    settings = load_settings()
    server = await serve_echo("127.0.0.1", 0, settings=settings)
    try:
        session = _client(settings)
        opened = asyncio.Event()
        session.add_open_listener(opened.set)
        session.connect(f"ws://127.0.0.1:{server_port(server)}")

        # Queued before the socket opens.
        first = await asyncio.wait_for(session.request({"n": 1}), timeout=5.0)
        assert first == {"n": 1}
        assert opened.is_set()
        assert session.status is ReadyState.OPEN

        replies = await asyncio.wait_for(
            asyncio.gather(*(session.request(f"msg-{i}") for i in range(5))),
            timeout=5.0,
        )
        assert replies == [f"msg-{i}" for i in range(5)]
        assert session.pending_count == 0
        session.disconnect()
    finally:
        server.close()
        await server.wait_closed()


@pytest.mark.asyncio
async def test_server_shutdown_closes_session() -> None:
    settings = load_settings()
    server = await serve_echo("127.0.0.1", 0, settings=settings)
    session = _client(settings)
    closed = asyncio.Event()
    session.add_close_listener(closed.set)
    session.connect(f"ws://127.0.0.1:{server_port(server)}")
    assert await asyncio.wait_for(session.request("up?"), timeout=5.0) == "up?"

    server.close()
    await server.wait_closed()
    await asyncio.wait_for(closed.wait(), timeout=5.0)

    assert session.status is None
    with pytest.raises(SocketConnectionError):
        session.send("gone")
    session.disconnect()


@pytest.mark.asyncio
async def test_server_shutdown_rejects_pending_request() -> None:
    async def silent(connection) -> None:
        async for _ in connection:
            pass

    settings = load_settings()
    server = await websockets.serve(silent, "127.0.0.1", 0, ping_interval=None)
    session = _client(settings)
    opened = asyncio.Event()
    session.add_open_listener(opened.set)
    session.connect(f"ws://127.0.0.1:{server_port(server)}")
    await asyncio.wait_for(opened.wait(), timeout=5.0)

    pending = asyncio.create_task(session.request("never answered"))
    await asyncio.sleep(0.05)
    assert session.pending_count == 1

    server.close()
    await server.wait_closed()
    with pytest.raises(SessionClosedError):
        await asyncio.wait_for(pending, timeout=5.0)
    assert session.pending_count == 0
    session.disconnect()


@pytest.mark.asyncio
async def test_invalid_utf8_binary_frame_is_dropped_as_parse_error() -> None:
    async def sender(connection) -> None:
        await connection.send(b'{"packetType":"message","messageId":"m1","message":"ab\xffcd"}')
        await connection.send(b'{"packetType":"message","messageId":"m2","message":"bin"}')
        await connection.send('{"packetType":"message","messageId":"m3","message":"text"}')
        async for _ in connection:
            pass

    settings = load_settings()
    server = await websockets.serve(sender, "127.0.0.1", 0, ping_interval=None)
    try:
        session = _client(settings)
        messages: list[object] = []
        errors: list[BaseException] = []
        done = asyncio.Event()

        def on_message(message: object, message_id: str) -> None:
            messages.append(message)
            if message_id == "m3":
                done.set()

        session.add_message_listener(on_message)
        session.add_error_listener(errors.append)
        session.connect(f"ws://127.0.0.1:{server_port(server)}")
        await asyncio.wait_for(done.wait(), timeout=5.0)

        assert messages == ["bin", "text"]
        assert len(errors) == 1
        assert isinstance(errors[0], PacketParseError)
        session.disconnect()
    finally:
        server.close()
        await server.wait_closed()


@pytest.mark.asyncio
async def test_unreachable_peer_fails_request() -> None:
    settings = load_settings()
    session = _client(settings)
    session.connect("ws://127.0.0.1:9")
    with pytest.raises(SessionClosedError):
        await asyncio.wait_for(session.request("hello?"), timeout=5.0)
    session.disconnect()
