"""Packet model, codecs and id generation."""

from .codec import Codec
from .json_codec import JsonCodec
from .schema_codec import SchemaCodec
from .ids import IdGenerator, generate_id
from .packets import (
    Packet,
    ControlType,
    ControlPacket,
    MessagePacket,
    ControlPayload,
    packet_to_wire,
    packet_from_wire,
)

__all__ = [
    "Codec",
    "ControlPacket",
    "ControlPayload",
    "ControlType",
    "IdGenerator",
    "JsonCodec",
    "MessagePacket",
    "Packet",
    "SchemaCodec",
    "generate_id",
    "packet_from_wire",
    "packet_to_wire",
]
