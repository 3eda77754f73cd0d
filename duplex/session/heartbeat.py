"""Periodic liveness probe for a session socket."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable

from duplex.config.session import HEARTBEAT_INTERVAL_S

logger = logging.getLogger(__name__)


class HeartbeatMonitor:
    """Ping on a fixed period and flag a peer that went silent.

    Each tick either finds no traffic since the previous tick (``on_dead``) or
    clears the liveness flag and asks for a ping. Any inbound traffic calls
    :meth:`touch` and re-arms liveness.
    """

    def __init__(
        self,
        *,
        on_ping: Callable[[], None],
        on_dead: Callable[[], None],
        interval_s: float | None = None,
    ) -> None:
        self._on_ping = on_ping
        self._on_dead = on_dead
        self._interval_s = float(HEARTBEAT_INTERVAL_S if interval_s is None else interval_s)
        self.alive = False
        self._task: asyncio.Task | None = None

    @property
    def interval_s(self) -> float:
        return self._interval_s

    @property
    def running(self) -> bool:
        return self._task is not None

    def touch(self) -> None:
        self.alive = True

    def start(self) -> asyncio.Task:
        self.alive = True
        if self._task is None:
            self._task = asyncio.create_task(self._tick_loop())
        return self._task

    def stop(self) -> None:
        task, self._task = self._task, None
        if task is not None:
            task.cancel()

    async def _tick_loop(self) -> None:
        try:
            while True:
                await asyncio.sleep(self._interval_s)
                if not self.alive:
                    logger.warning("no traffic for %.1fs; treating peer as dead", self._interval_s)
                    self._on_dead()
                    return
                self.alive = False
                self._on_ping()
        except asyncio.CancelledError:
            return
        except Exception:
            logger.exception("heartbeat loop exiting due to unexpected error")


__all__ = ["HeartbeatMonitor"]
