"""Broker channel naming.

Receiving adapters subscribe to ``{prefix}#{namespace}#*`` patterns.  A single
target room is folded into the channel so the broker can route it; any other
room selection is published on the namespace channel and filtered downstream
using the room list carried in the options.
"""

from __future__ import annotations

from collections.abc import Sequence

SEPARATOR = "#"


def base_channel(prefix: str, namespace: str) -> str:
    """Channel shared by every emission in ``namespace``."""
    return f"{prefix}{SEPARATOR}{namespace}{SEPARATOR}"


def address(prefix: str, namespace: str, rooms: Sequence[str]) -> str:
    if len(rooms) == 1:
        return f"{base_channel(prefix, namespace)}{rooms[0]}{SEPARATOR}"
    return base_channel(prefix, namespace)
