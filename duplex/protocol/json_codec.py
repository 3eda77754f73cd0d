"""Default codec: plain JSON via orjson, structural checks only."""

from __future__ import annotations

import orjson

from duplex.errors import PacketParseError

from .packets import Packet, packet_to_wire, packet_from_wire


class JsonCodec:
    """Stateless JSON codec; message payloads may be any JSON value."""

    def serialize(self, packet: Packet) -> str:
        try:
            return orjson.dumps(packet_to_wire(packet)).decode("utf-8")
        except TypeError as exc:
            raise PacketParseError(f"packet is not JSON serializable: {exc}") from exc

    def parse(self, raw: str | bytes) -> Packet | None:
        try:
            data = orjson.loads(raw)
        except orjson.JSONDecodeError as exc:
            raise PacketParseError(f"invalid JSON: {exc}") from exc
        return packet_from_wire(data)


__all__ = ["JsonCodec"]
