from __future__ import annotations

from duplex.session import ListenerRegistry


def test_invoke_calls_in_order_and_isolates_failures() -> None:
    calls: list[str] = []
    errors: list[BaseException] = []

    def first(value: int) -> None:
        calls.append(f"first:{value}")

    def broken(value: int) -> None:
        raise RuntimeError("boom")

    def last(value: int) -> None:
        calls.append(f"last:{value}")

    registry: ListenerRegistry = ListenerRegistry("message")
    registry.add(first)
    registry.add(broken)
    registry.add(last)

    assert registry.invoke(1, on_error=errors.append) == []
    assert calls == ["first:1", "last:1"]
    assert len(errors) == 1 and isinstance(errors[0], RuntimeError)


def test_invoke_returns_awaitables_from_async_listeners() -> None:
    async def handler() -> None:
        return None

    registry: ListenerRegistry = ListenerRegistry("open")
    registry.add(handler)
    awaitables = registry.invoke(on_error=lambda exc: None)
    assert len(awaitables) == 1
    awaitables[0].close()


def test_remove_and_duplicates() -> None:
    def listener() -> None:
        return None

    registry: ListenerRegistry = ListenerRegistry("close")
    registry.add(listener)
    registry.add(listener)
    assert len(registry) == 2
    assert registry.remove(listener) is True
    assert len(registry) == 1
    registry.clear()
    assert registry.remove(listener) is False
