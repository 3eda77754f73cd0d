from __future__ import annotations

import asyncio

import pytest

from duplex.session import CorrelationTable
from duplex.errors import SessionClosedError, RequestTimeoutError


@pytest.mark.asyncio
async def test_resolve_delivers_value_once() -> None:
    table = CorrelationTable()
    future = table.register("m1", 5.0)
    assert "m1" in table

    assert table.resolve("m1", {"ok": True}) is True
    assert table.resolve("m1", "again") is False
    assert await future == {"ok": True}
    assert len(table) == 0


@pytest.mark.asyncio
async def test_duplicate_registration_rejected() -> None:
    table = CorrelationTable()
    table.register("m1", 5.0)
    with pytest.raises(ValueError):
        table.register("m1", 5.0)
    table.discard("m1")


@pytest.mark.asyncio
async def test_expiry_raises_timeout_with_message_id() -> None:
    table = CorrelationTable()
    future = table.register("slow", 0.02)

    with pytest.raises(RequestTimeoutError) as exc:
        await asyncio.wait_for(future, timeout=1.0)
    assert exc.value.message_id == "slow"
    assert str(exc.value) == "Timeout for message slow"
    assert len(table) == 0
    # Late reply is ignored.
    assert table.resolve("slow", 1) is False


@pytest.mark.asyncio
async def test_reject_all_fails_every_pending_request() -> None:
    table = CorrelationTable()
    futures = [table.register(f"m{i}", 5.0) for i in range(3)]

    count = table.reject_all(lambda message_id: SessionClosedError(message_id))
    assert count == 3
    assert len(table) == 0
    for future in futures:
        with pytest.raises(SessionClosedError):
            await future


@pytest.mark.asyncio
async def test_cancelled_waiter_leaves_table() -> None:
    table = CorrelationTable()
    future = table.register("m1", 5.0)
    future.cancel()
    await asyncio.sleep(0)
    assert "m1" not in table
