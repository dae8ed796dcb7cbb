"""Emit Socket.IO events through the Redis adapter protocol."""

from socketio_emitter.broker import Publisher, RedisPublisher, connect
from socketio_emitter.channel import address, base_channel
from socketio_emitter.codec import decode, encode
from socketio_emitter.emitter import Emitter, EmitterOptions
from socketio_emitter.enums import Flag, PacketType
from socketio_emitter.errors import ConnectionError, EmitterError, EncodingError, PublishError  # noqa: A004
from socketio_emitter.models import EMITTER_UID, Envelope, Options, Packet

__all__ = [
    "EMITTER_UID",
    "ConnectionError",
    "Emitter",
    "EmitterError",
    "EmitterOptions",
    "EncodingError",
    "Envelope",
    "Flag",
    "Options",
    "Packet",
    "PacketType",
    "PublishError",
    "Publisher",
    "RedisPublisher",
    "address",
    "base_channel",
    "connect",
    "decode",
    "encode",
]
