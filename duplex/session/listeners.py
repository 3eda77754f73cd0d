"""Ordered listener lists with per-listener failure isolation."""

from __future__ import annotations

import inspect
import logging
from typing import Any, Generic, TypeVar
from collections.abc import Callable, Iterator, Awaitable

logger = logging.getLogger(__name__)

ListenerT = TypeVar("ListenerT", bound=Callable[..., Any])


class ListenerRegistry(Generic[ListenerT]):
    """Insertion-ordered listeners; duplicates are kept and each is called."""

    def __init__(self, name: str) -> None:
        self.name = name
        self._listeners: list[ListenerT] = []

    def __len__(self) -> int:
        return len(self._listeners)

    def __iter__(self) -> Iterator[ListenerT]:
        return iter(list(self._listeners))

    def add(self, listener: ListenerT) -> ListenerT:
        self._listeners.append(listener)
        return listener

    def remove(self, listener: ListenerT) -> bool:
        try:
            self._listeners.remove(listener)
        except ValueError:
            return False
        return True

    def clear(self) -> None:
        self._listeners.clear()

    def invoke(self, *args: Any, on_error: Callable[[BaseException], None]) -> list[Awaitable[Any]]:
        """Call every listener; return the awaitables coroutine listeners produced."""
        awaitables: list[Awaitable[Any]] = []
        for listener in list(self._listeners):
            try:
                result = listener(*args)
            except Exception as exc:
                logger.error("%s listener failed", self.name, exc_info=exc)
                on_error(exc)
                continue
            if inspect.isawaitable(result):
                awaitables.append(result)
        return awaitables


__all__ = ["ListenerRegistry"]
