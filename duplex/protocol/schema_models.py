"""Pydantic models mirroring the packet wire format for schema validation."""

from __future__ import annotations

from typing import Generic, Literal, TypeVar, Union, Annotated

from pydantic import Field, BaseModel, ConfigDict

MessageT = TypeVar("MessageT")


class PingPayloadModel(BaseModel):
    model_config = ConfigDict(extra="forbid")

    type: Literal["ping"]
    inert: str | None = None


class PongPayloadModel(BaseModel):
    model_config = ConfigDict(extra="forbid")

    type: Literal["pong"]
    inert: str | None = None


ControlPayloadModel = Annotated[Union[PingPayloadModel, PongPayloadModel], Field(discriminator="type")]


class ControlPacketModel(BaseModel):
    model_config = ConfigDict(extra="forbid")

    packet_type: Literal["control"] = Field(alias="packetType")
    message_id: str = Field(alias="messageId", min_length=1)
    payload: ControlPayloadModel
    responds_to: str | None = Field(default=None, alias="respondsTo")


class MessagePacketModel(BaseModel, Generic[MessageT]):
    model_config = ConfigDict(extra="forbid")

    packet_type: Literal["message"] = Field(alias="packetType")
    message_id: str = Field(alias="messageId", min_length=1)
    message: MessageT
    responds_to: str | None = Field(default=None, alias="respondsTo")


__all__ = [
    "ControlPacketModel",
    "ControlPayloadModel",
    "MessagePacketModel",
    "PingPayloadModel",
    "PongPayloadModel",
]
