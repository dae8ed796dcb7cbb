"""Wire value models.

``Packet`` and ``Options`` are the second and third elements of the envelope
published on the broker.  Field names are the on-wire map keys.
"""

from __future__ import annotations

from typing import NamedTuple

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictInt, StrictStr

from socketio_emitter.enums import PacketType

EMITTER_UID = "emitter"
"""Sender id distinguishing emitted messages from real cluster members."""


class Packet(BaseModel):
    """A single Socket.IO packet scoped to a namespace."""

    model_config = ConfigDict(frozen=True)

    type: StrictInt = int(PacketType.EVENT)
    data: list[StrictStr] = Field(default_factory=list)
    nsp: StrictStr = "/"


class Options(BaseModel):
    """Addressing options read by the receiving adapter."""

    model_config = ConfigDict(frozen=True)

    rooms: list[StrictStr] = Field(default_factory=list)
    flags: dict[StrictStr, StrictBool] = Field(default_factory=dict)


class Envelope(NamedTuple):
    """Decoded ``(sender_id, packet, options)`` triple."""

    sender_id: str
    packet: Packet
    options: Options
