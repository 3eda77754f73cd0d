"""Packet wire format constants."""

from __future__ import annotations

# Packet keys
PACKET_KEY_TYPE = "packetType"
PACKET_KEY_MESSAGE_ID = "messageId"
PACKET_KEY_RESPONDS_TO = "respondsTo"
PACKET_KEY_PAYLOAD = "payload"
PACKET_KEY_MESSAGE = "message"

# Control payload keys
CONTROL_KEY_TYPE = "type"
CONTROL_KEY_INERT = "inert"

# Packet types
PACKET_TYPE_CONTROL = "control"
PACKET_TYPE_MESSAGE = "message"

# Control payload types
CONTROL_TYPE_PING = "ping"
CONTROL_TYPE_PONG = "pong"
CONTROL_TYPES = frozenset({CONTROL_TYPE_PING, CONTROL_TYPE_PONG})

__all__ = [
    "PACKET_KEY_TYPE",
    "PACKET_KEY_MESSAGE_ID",
    "PACKET_KEY_RESPONDS_TO",
    "PACKET_KEY_PAYLOAD",
    "PACKET_KEY_MESSAGE",
    "CONTROL_KEY_TYPE",
    "CONTROL_KEY_INERT",
    "PACKET_TYPE_CONTROL",
    "PACKET_TYPE_MESSAGE",
    "CONTROL_TYPE_PING",
    "CONTROL_TYPE_PONG",
    "CONTROL_TYPES",
]
