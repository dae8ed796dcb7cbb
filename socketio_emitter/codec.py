"""MessagePack envelope codec.

An envelope is a three element array::

    ["emitter", {"type": 2, "data": [...], "nsp": "/"}, {"rooms": [...], "flags": {...}}]

Map keys are always written in the order shown; flag keys are sorted.  Any
Socket.IO Redis adapter decodes this layout, so it must not change.
"""

from __future__ import annotations

from typing import Any

import msgpack
from loguru import logger
from pydantic import ValidationError

from socketio_emitter.errors import EncodingError
from socketio_emitter.models import Envelope, Options, Packet

PACKET_KEYS = ("type", "data", "nsp")
OPTIONS_KEYS = ("rooms", "flags")


def encode(sender_id: str, packet: Packet, options: Options) -> bytes:
    """Serialise an envelope to bytes.  Raises ``EncodingError`` on bad input."""
    body = [
        sender_id,
        {"type": int(packet.type), "data": list(packet.data), "nsp": packet.nsp},
        {"rooms": list(options.rooms), "flags": {k: options.flags[k] for k in sorted(options.flags)}},
    ]
    try:
        return msgpack.packb(body, use_bin_type=True)
    except (TypeError, ValueError, OverflowError) as exc:
        logger.error("Cannot encode envelope from {}: {}", sender_id, exc)
        msg = f"Cannot encode envelope from {sender_id!r}: {exc}"
        raise EncodingError(msg) from exc


def decode(payload: bytes) -> Envelope:
    """Inverse of :func:`encode`."""
    try:
        body = msgpack.unpackb(payload, raw=False, strict_map_key=True)
    except (ValueError, TypeError) as exc:  # msgpack unpack errors are ValueErrors
        msg = f"Malformed envelope: {exc}"
        raise EncodingError(msg) from exc

    if not isinstance(body, list) or len(body) != 3:
        msg = f"Envelope must be a 3-element array, got {_describe(body)}"
        raise EncodingError(msg)

    sender_id, raw_packet, raw_options = body
    if not isinstance(sender_id, str):
        msg = f"Sender id must be a string, got {_describe(sender_id)}"
        raise EncodingError(msg)

    try:
        packet = Packet.model_validate(_expect_map(raw_packet, "packet", PACKET_KEYS))
        options = Options.model_validate(_expect_map(raw_options, "options", OPTIONS_KEYS))
    except ValidationError as exc:
        msg = f"Envelope from {sender_id!r} has an invalid shape: {exc}"
        raise EncodingError(msg) from exc

    return Envelope(sender_id, packet, options)


def _expect_map(value: Any, what: str, keys: tuple[str, ...]) -> dict:
    if not isinstance(value, dict):
        msg = f"{what} must be a map, got {_describe(value)}"
        raise EncodingError(msg)
    missing = [key for key in keys if key not in value]
    if missing:
        msg = f"{what} is missing {', '.join(missing)}"
        raise EncodingError(msg)
    return value


def _describe(value: Any) -> str:
    return type(value).__name__
