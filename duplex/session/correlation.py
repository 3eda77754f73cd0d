"""Outstanding request bookkeeping."""

from __future__ import annotations

import asyncio
import logging
from typing import Any
from dataclasses import dataclass
from collections.abc import Callable

from duplex.errors import RequestTimeoutError

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class PendingRequest:
    message_id: str
    future: asyncio.Future[Any]
    timer: asyncio.TimerHandle | None = None


class CorrelationTable:
    """Map ``messageId`` to the future awaiting its reply.

    An entry leaves the table exactly once: resolved, rejected, expired, or
    abandoned by its caller. Whichever comes first wins; the others are no-ops.
    """

    def __init__(self) -> None:
        self._pending: dict[str, PendingRequest] = {}

    def __len__(self) -> int:
        return len(self._pending)

    def __contains__(self, message_id: object) -> bool:
        return message_id in self._pending

    def register(self, message_id: str, timeout_s: float) -> asyncio.Future[Any]:
        if message_id in self._pending:
            raise ValueError(f"message id already pending: {message_id}")
        loop = asyncio.get_running_loop()
        future: asyncio.Future[Any] = loop.create_future()
        entry = PendingRequest(message_id=message_id, future=future)
        entry.timer = loop.call_later(timeout_s, self._expire, message_id, timeout_s)
        self._pending[message_id] = entry
        future.add_done_callback(lambda f: self._on_future_done(message_id, f))
        return future

    def resolve(self, message_id: str, value: Any = None) -> bool:
        entry = self._pop(message_id)
        if entry is None:
            return False
        if not entry.future.done():
            entry.future.set_result(value)
        return True

    def reject(self, message_id: str, error: BaseException) -> bool:
        entry = self._pop(message_id)
        if entry is None:
            return False
        if not entry.future.done():
            entry.future.set_exception(error)
        return True

    def discard(self, message_id: str) -> None:
        entry = self._pop(message_id)
        if entry is not None and not entry.future.done():
            entry.future.cancel()

    def reject_all(self, make_error: Callable[[str], BaseException]) -> int:
        message_ids = list(self._pending)
        for message_id in message_ids:
            self.reject(message_id, make_error(message_id))
        if message_ids:
            logger.debug("rejected %d pending request(s)", len(message_ids))
        return len(message_ids)

    def _pop(self, message_id: str) -> PendingRequest | None:
        entry = self._pending.pop(message_id, None)
        if entry is not None and entry.timer is not None:
            entry.timer.cancel()
        return entry

    def _expire(self, message_id: str, timeout_s: float) -> None:
        entry = self._pending.pop(message_id, None)
        if entry is None:
            return
        logger.debug("request %s timed out after %.3fs", message_id, timeout_s)
        if not entry.future.done():
            entry.future.set_exception(RequestTimeoutError(message_id, timeout_s))

    def _on_future_done(self, message_id: str, future: asyncio.Future[Any]) -> None:
        # The awaiting caller was cancelled.
        if future.cancelled():
            self._pop(message_id)


__all__ = ["CorrelationTable", "PendingRequest"]
