"""Protocol enumerations shared by the codec and the emitter."""

from __future__ import annotations

from enum import IntEnum, StrEnum


class PacketType(IntEnum):
    """Socket.IO packet types.  Only ``EVENT`` is ever emitted."""

    CONNECT = 0
    DISCONNECT = 1
    EVENT = 2
    ACK = 3
    CONNECT_ERROR = 4
    BINARY_EVENT = 5
    BINARY_ACK = 6


class Flag(StrEnum):
    """Delivery modifiers understood by the receiving adapter."""

    JSON = "json"
    VOLATILE = "volatile"
    BROADCAST = "broadcast"
