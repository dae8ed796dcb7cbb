"""Socket.IO Redis emitter.

Publishes events to a Socket.IO cluster that uses the Redis adapter, without
holding a Socket.IO connection::

    emitter = Emitter.from_url("redis://localhost:6379/0")
    emitter.to("room1").emit("chat", "hello")
    emitter.of("/admin").broadcast().emit("reload")

Builder calls (``to``, ``json``, ``volatile``, ``broadcast``) mutate the
emitter and return it.  Rooms and flags apply to the next ``emit`` only and are
cleared afterwards, whether or not publishing succeeded.  ``of`` returns a new
emitter and leaves the receiver untouched.

An ``Emitter`` is not thread-safe; give each thread its own (they can share a
publisher).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from loguru import logger
from pydantic import ValidationError

from socketio_emitter.broker import Publisher, connect
from socketio_emitter.channel import address, base_channel
from socketio_emitter.codec import encode
from socketio_emitter.enums import Flag, PacketType
from socketio_emitter.errors import EncodingError, PublishError
from socketio_emitter.models import EMITTER_UID, Options, Packet

if TYPE_CHECKING:
    import redis

    from socketio_emitter.settings import EmitterSettings

DEFAULT_PREFIX = "socket.io"
DEFAULT_NAMESPACE = "/"


@dataclass(frozen=True)
class EmitterOptions:
    """Connection options for :meth:`Emitter.from_options`.

    ``socket`` is a Unix socket path and wins over ``host``/``port``.  ``key``
    overrides the channel prefix.
    """

    host: str = "localhost"
    port: int = 6379
    socket: str | None = None
    key: str | None = None


class Emitter:
    def __init__(
        self,
        publisher: Publisher | redis.Redis,
        prefix: str = DEFAULT_PREFIX,
        namespace: str = DEFAULT_NAMESPACE,
    ) -> None:
        if not prefix:
            msg = "Emitter prefix must not be empty"
            raise ValueError(msg)
        self._publisher = publisher
        self._prefix = prefix
        self._namespace = namespace
        self._rooms: list[str] = []
        self._flags: dict[str, bool] = {}
        self._last_channel: str | None = None

    # -- Construction ----------------------------------------------------------

    @classmethod
    def from_client(
        cls,
        client: Publisher | redis.Redis,
        prefix: str = DEFAULT_PREFIX,
        namespace: str = DEFAULT_NAMESPACE,
    ) -> Emitter:
        """Wrap an existing redis-py client (or any publisher)."""
        return cls(client, prefix=prefix, namespace=namespace)

    @classmethod
    def from_url(
        cls,
        url: str,
        prefix: str = DEFAULT_PREFIX,
        namespace: str = DEFAULT_NAMESPACE,
    ) -> Emitter:
        """Connect to ``url``.  Raises ``ConnectionError`` if unreachable."""
        return cls(connect(url), prefix=prefix, namespace=namespace)

    @classmethod
    def from_address(
        cls,
        addr: str,
        prefix: str = DEFAULT_PREFIX,
        namespace: str = DEFAULT_NAMESPACE,
    ) -> Emitter:
        """Connect to a ``host:port`` address."""
        return cls.from_url(f"redis://{addr}", prefix=prefix, namespace=namespace)

    @classmethod
    def from_options(cls, opts: EmitterOptions, namespace: str = DEFAULT_NAMESPACE) -> Emitter:
        if opts.socket:
            publisher = connect(unix_socket_path=opts.socket)
        else:
            publisher = connect(f"redis://{opts.host}:{opts.port}")
        return cls(publisher, prefix=opts.key or DEFAULT_PREFIX, namespace=namespace)

    @classmethod
    def from_settings(cls, settings: EmitterSettings) -> Emitter:
        publisher = connect(
            settings.redis_url,
            socket_connect_timeout=settings.socket_connect_timeout,
            socket_timeout=settings.socket_timeout,
        )
        return cls(publisher, prefix=settings.prefix, namespace=settings.namespace)

    # -- Introspection ---------------------------------------------------------

    @property
    def publisher(self) -> Publisher | redis.Redis:
        return self._publisher

    @property
    def prefix(self) -> str:
        return self._prefix

    @property
    def namespace(self) -> str:
        return self._namespace

    @property
    def uid(self) -> str:
        return EMITTER_UID

    @property
    def rooms(self) -> list[str]:
        """Rooms targeted by the next emission (a copy)."""
        return list(self._rooms)

    @property
    def flags(self) -> dict[str, bool]:
        """Flags applied to the next emission (a copy)."""
        return dict(self._flags)

    @property
    def channel(self) -> str:
        """Namespace channel, before any room is folded in."""
        return base_channel(self._prefix, self._namespace)

    @property
    def last_channel(self) -> str | None:
        """Channel the most recent successful ``emit`` published on."""
        return self._last_channel

    def __repr__(self) -> str:
        return (
            f"Emitter(prefix={self._prefix!r}, namespace={self._namespace!r}, "
            f"rooms={self._rooms!r}, flags={self._flags!r})"
        )

    # -- Builder ---------------------------------------------------------------

    def to(self, room: str) -> Emitter:
        """Target ``room`` on the next emission.  Repeated rooms are kept."""
        self._rooms.append(room)
        return self

    in_ = to

    def of(self, namespace: str) -> Emitter:
        """Return a fresh emitter for ``namespace`` sharing this publisher."""
        return type(self)(self._publisher, prefix=self._prefix, namespace=namespace)

    # Each flag replaces the whole flag map: only one is ever active.

    def json(self) -> Emitter:
        return self._set_flag(Flag.JSON)

    def volatile(self) -> Emitter:
        return self._set_flag(Flag.VOLATILE)

    def broadcast(self) -> Emitter:
        return self._set_flag(Flag.BROADCAST)

    def _set_flag(self, flag: Flag) -> Emitter:
        self._flags = {flag.value: True}
        return self

    # -- Emission --------------------------------------------------------------

    def emit(self, *args: str) -> Emitter:
        """Publish an event carrying ``args`` to the current target.

        Raises ``EncodingError`` if an argument cannot be put on the wire and
        ``PublishError`` if the broker call fails.  Rooms and flags are reset
        in every case.
        """
        try:
            channel, payload = self._build(args)
            logger.debug("Emitting {} bytes on {} (flags={})", len(payload), channel, self._flags)
            self._publish(channel, payload)
            self._last_channel = channel
        finally:
            self._reset()
        return self

    def _build(self, args: tuple[str, ...]) -> tuple[str, bytes]:
        try:
            packet = Packet(type=int(PacketType.EVENT), data=list(args), nsp=self._namespace)
            options = Options(rooms=list(self._rooms), flags=dict(self._flags))
        except ValidationError as exc:
            logger.error("Cannot build packet for {}: {}", self._namespace, exc)
            msg = f"Cannot build packet: {exc}"
            raise EncodingError(msg) from exc
        channel = address(self._prefix, self._namespace, options.rooms)
        return channel, encode(EMITTER_UID, packet, options)

    def _publish(self, channel: str, payload: bytes) -> None:
        try:
            self._publisher.publish(channel, payload)
        except PublishError:
            raise
        except Exception as exc:
            # Raw clients raise their own errors; normalise them.
            logger.error("Publish to {} failed: {}", channel, exc)
            msg = f"Failed to publish on {channel!r}: {exc}"
            raise PublishError(channel, msg) from exc

    def _reset(self) -> None:
        self._rooms = []
        self._flags = {}
