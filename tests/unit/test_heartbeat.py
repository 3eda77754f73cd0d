from __future__ import annotations

import asyncio

import pytest

from duplex.session import HeartbeatMonitor


@pytest.mark.asyncio
async def test_pings_while_traffic_keeps_arriving() -> None:
    pings = 0
    dead = asyncio.Event()

    def on_ping() -> None:
        nonlocal pings
        pings += 1
        monitor.touch()

    monitor = HeartbeatMonitor(on_ping=on_ping, on_dead=dead.set, interval_s=0.01)
    monitor.start()
    await asyncio.sleep(0.08)
    monitor.stop()

    assert pings >= 3
    assert not dead.is_set()
    assert not monitor.running


@pytest.mark.asyncio
async def test_silent_peer_is_declared_dead_after_one_missed_interval() -> None:
    pings = 0
    dead = asyncio.Event()

    def on_ping() -> None:
        nonlocal pings
        pings += 1

    monitor = HeartbeatMonitor(on_ping=on_ping, on_dead=dead.set, interval_s=0.01)
    monitor.start()
    await asyncio.wait_for(dead.wait(), timeout=1.0)
    monitor.stop()

    assert pings == 1
    assert monitor.alive is False


@pytest.mark.asyncio
async def test_start_is_idempotent_and_rearms_liveness() -> None:
    monitor = HeartbeatMonitor(on_ping=lambda: None, on_dead=lambda: None, interval_s=10.0)
    first = monitor.start()
    monitor.alive = False
    assert monitor.start() is first
    assert monitor.alive is True
    monitor.stop()
    monitor.stop()
