"""Schema-validating codec built from a caller-supplied message type."""

from __future__ import annotations

from typing import Any, Generic, Union, Annotated

from pydantic import Field, TypeAdapter, ValidationError

from duplex.errors import PacketParseError

from .schema_models import ControlPacketModel, MessagePacketModel
from .packets import Packet, MessageT, ControlPacket, MessagePacket, ControlPayload, packet_to_wire


class SchemaCodec(Generic[MessageT]):
    """Validate both packet kinds against a pydantic schema.

    The top level is discriminated by ``packetType`` and control payloads by
    ``type``. ``message_type`` is anything pydantic can validate: a model, a
    discriminated union of models, a ``TypedDict``, a plain type.
    """

    def __init__(self, message_type: Any) -> None:
        self.message_type = message_type
        packet_union = Annotated[
            Union[ControlPacketModel, MessagePacketModel[message_type]],  # type: ignore[valid-type]
            Field(discriminator="packet_type"),
        ]
        self._adapter: TypeAdapter[Any] = TypeAdapter(packet_union)

    def serialize(self, packet: Packet) -> str:
        try:
            model = self._adapter.validate_python(packet_to_wire(packet))
        except ValidationError as exc:
            raise PacketParseError(f"packet does not match schema: {exc}") from exc
        return self._adapter.dump_json(model, by_alias=True, exclude_unset=True).decode("utf-8")

    def parse(self, raw: str | bytes) -> Packet | None:
        try:
            model = self._adapter.validate_json(raw)
        except ValidationError as exc:
            raise PacketParseError(f"packet does not match schema: {exc}") from exc

        if isinstance(model, ControlPacketModel):
            return ControlPacket(
                message_id=model.message_id,
                payload=ControlPayload(type=model.payload.type, inert=model.payload.inert),
                responds_to=model.responds_to,
            )
        return MessagePacket(message_id=model.message_id, message=model.message, responds_to=model.responds_to)


__all__ = ["SchemaCodec"]
