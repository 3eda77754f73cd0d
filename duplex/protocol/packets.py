"""Packet shapes exchanged over the socket and their wire-dict form.

Two packet kinds share the wire:

- control packets carry session housekeeping (``ping``/``pong``)
- message packets carry an application payload of any type

Both carry a ``messageId`` and may carry ``respondsTo``, the ``messageId`` of
the packet they answer.
"""

from __future__ import annotations

from typing import Any, Generic, Literal, TypeVar, ClassVar, Union
from dataclasses import dataclass

from duplex.errors import PacketParseError
from duplex.config.protocol import (
    CONTROL_TYPES,
    CONTROL_KEY_TYPE,
    PACKET_KEY_TYPE,
    CONTROL_KEY_INERT,
    PACKET_KEY_MESSAGE,
    PACKET_KEY_PAYLOAD,
    PACKET_TYPE_CONTROL,
    PACKET_TYPE_MESSAGE,
    PACKET_KEY_MESSAGE_ID,
    PACKET_KEY_RESPONDS_TO,
)

MessageT = TypeVar("MessageT")

ControlType = Literal["ping", "pong"]


@dataclass(frozen=True, slots=True)
class ControlPayload:
    type: ControlType
    inert: str | None = None


@dataclass(frozen=True, slots=True)
class ControlPacket:
    packet_type: ClassVar[Literal["control"]] = PACKET_TYPE_CONTROL

    message_id: str
    payload: ControlPayload
    responds_to: str | None = None


@dataclass(frozen=True, slots=True)
class MessagePacket(Generic[MessageT]):
    packet_type: ClassVar[Literal["message"]] = PACKET_TYPE_MESSAGE

    message_id: str
    message: MessageT
    responds_to: str | None = None


Packet = Union[ControlPacket, MessagePacket[Any]]


def payload_to_wire(payload: ControlPayload) -> dict[str, Any]:
    data: dict[str, Any] = {CONTROL_KEY_TYPE: payload.type}
    if payload.inert is not None:
        data[CONTROL_KEY_INERT] = payload.inert
    return data


def packet_to_wire(packet: Packet) -> dict[str, Any]:
    """Return the JSON-ready dict for *packet*; absent optional keys are omitted."""
    data: dict[str, Any] = {
        PACKET_KEY_TYPE: packet.packet_type,
        PACKET_KEY_MESSAGE_ID: packet.message_id,
    }
    if isinstance(packet, ControlPacket):
        data[PACKET_KEY_PAYLOAD] = payload_to_wire(packet.payload)
    else:
        data[PACKET_KEY_MESSAGE] = packet.message
    if packet.responds_to is not None:
        data[PACKET_KEY_RESPONDS_TO] = packet.responds_to
    return data


def _payload_from_wire(raw: Any) -> ControlPayload:
    if not isinstance(raw, dict):
        raise PacketParseError("control packet 'payload' must be an object")

    control_type = raw.get(CONTROL_KEY_TYPE)
    if control_type not in CONTROL_TYPES:
        raise PacketParseError(f"unknown control payload type: {control_type!r}")

    inert = raw.get(CONTROL_KEY_INERT)
    if inert is not None and not isinstance(inert, str):
        raise PacketParseError("control payload 'inert' must be a string")
    return ControlPayload(type=control_type, inert=inert)


def packet_from_wire(data: Any) -> Packet:
    if not isinstance(data, dict):
        raise PacketParseError("packet must be a JSON object")

    message_id = data.get(PACKET_KEY_MESSAGE_ID)
    if not isinstance(message_id, str) or not message_id:
        raise PacketParseError("packet missing non-empty 'messageId'")

    responds_to = data.get(PACKET_KEY_RESPONDS_TO)
    if responds_to is not None and not isinstance(responds_to, str):
        raise PacketParseError("packet 'respondsTo' must be a string")

    packet_type = data.get(PACKET_KEY_TYPE)
    if packet_type == PACKET_TYPE_CONTROL:
        payload = _payload_from_wire(data.get(PACKET_KEY_PAYLOAD))
        return ControlPacket(message_id=message_id, payload=payload, responds_to=responds_to)
    if packet_type == PACKET_TYPE_MESSAGE:
        if PACKET_KEY_MESSAGE not in data:
            raise PacketParseError("message packet missing 'message'")
        return MessagePacket(message_id=message_id, message=data[PACKET_KEY_MESSAGE], responds_to=responds_to)
    raise PacketParseError(f"unknown packetType: {packet_type!r}")


def ping(message_id: str) -> ControlPacket:
    return ControlPacket(message_id=message_id, payload=ControlPayload(type="ping"))


def pong(message_id: str, responds_to: str) -> ControlPacket:
    return ControlPacket(message_id=message_id, payload=ControlPayload(type="pong"), responds_to=responds_to)


__all__ = [
    "ControlType",
    "ControlPayload",
    "ControlPacket",
    "MessagePacket",
    "MessageT",
    "Packet",
    "packet_from_wire",
    "packet_to_wire",
    "payload_to_wire",
    "ping",
    "pong",
]
