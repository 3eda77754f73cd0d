"""Codec contract shared by the session and its wire formats."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from .packets import Packet


@runtime_checkable
class Codec(Protocol):
    """Turns packets into text frames and back.

    ``parse`` may return ``None`` for input it chooses to ignore, or raise
    :class:`~duplex.errors.PacketParseError`; the session contains both.
    """

    def serialize(self, packet: Packet) -> str: ...

    def parse(self, raw: str | bytes) -> Packet | None: ...


__all__ = ["Codec"]
