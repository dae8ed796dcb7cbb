"""Exceptions raised by the emitter.

``ConnectionError`` deliberately shadows the builtin inside this module, the
same way ``redis.exceptions.ConnectionError`` does; import it qualified.
"""

from __future__ import annotations


class EmitterError(Exception):
    """Base class for every error raised by socketio_emitter."""


class ConnectionError(EmitterError):  # noqa: A001
    """The broker could not be reached while connecting."""


class PublishError(EmitterError):
    """The broker rejected or failed a publish call."""

    def __init__(self, channel: str, message: str) -> None:
        super().__init__(message)
        self.channel = channel


class EncodingError(EmitterError):
    """A value cannot be represented in (or recovered from) the wire format."""
