from __future__ import annotations

import pytest

from duplex.errors import PacketParseError
from duplex.protocol.packets import (
    ControlPacket,
    MessagePacket,
    ControlPayload,
    ping,
    pong,
    packet_to_wire,
    packet_from_wire,
)


def test_message_packet_to_wire_omits_absent_responds_to() -> None:
    wire = packet_to_wire(MessagePacket(message_id="m1", message={"x": 1}))
    assert wire == {"packetType": "message", "messageId": "m1", "message": {"x": 1}}


def test_control_packet_to_wire_keeps_responds_to() -> None:
    wire = packet_to_wire(pong("p2", "p1"))
    assert wire == {
        "packetType": "control",
        "messageId": "p2",
        "payload": {"type": "pong"},
        "respondsTo": "p1",
    }


def test_ping_payload_with_inert() -> None:
    packet = ControlPacket(message_id="c", payload=ControlPayload(type="ping", inert="pad"))
    assert packet_to_wire(packet)["payload"] == {"type": "ping", "inert": "pad"}


def test_packet_from_wire_message() -> None:
    packet = packet_from_wire({"packetType": "message", "messageId": "a", "message": None, "respondsTo": "b"})
    assert isinstance(packet, MessagePacket)
    assert packet.message is None
    assert packet.responds_to == "b"


def test_packet_from_wire_control() -> None:
    packet = packet_from_wire({"packetType": "control", "messageId": "a", "payload": {"type": "ping"}})
    assert packet == ping("a")


@pytest.mark.parametrize(
    "data",
    [
        [],
        "message",
        {"packetType": "message", "message": 1},
        {"packetType": "message", "messageId": "", "message": 1},
        {"packetType": "message", "messageId": 7, "message": 1},
        {"packetType": "message", "messageId": "a"},
        {"packetType": "message", "messageId": "a", "message": 1, "respondsTo": 3},
        {"packetType": "other", "messageId": "a"},
        {"messageId": "a", "message": 1},
        {"packetType": "control", "messageId": "a"},
        {"packetType": "control", "messageId": "a", "payload": {"type": "hello"}},
        {"packetType": "control", "messageId": "a", "payload": {"type": "ping", "inert": 5}},
    ],
)
def test_packet_from_wire_invalid(data: object) -> None:
    with pytest.raises(PacketParseError):
        packet_from_wire(data)


def test_parse_error_is_value_error() -> None:
    with pytest.raises(ValueError):
        packet_from_wire({})
