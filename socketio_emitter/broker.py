"""Broker collaborator.

The emitter only needs something with ``publish(channel, payload)``.  A plain
``redis.Redis`` client already satisfies :class:`Publisher`; ``RedisPublisher``
wraps one to translate redis-py errors into :class:`PublishError`.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable
from urllib.parse import urlsplit, urlunsplit

import redis
from loguru import logger

from socketio_emitter.errors import ConnectionError, PublishError  # noqa: A004


@runtime_checkable
class Publisher(Protocol):
    """Anything able to publish raw bytes on a named channel."""

    def publish(self, channel: str, payload: bytes) -> Any:
        """Publish ``payload`` on ``channel``.  Fire-and-forget."""
        ...


class RedisPublisher:
    """``Publisher`` backed by a synchronous redis-py client.

    Redis clients pool their connections and are thread-safe, so one
    ``RedisPublisher`` may back any number of emitters.
    """

    def __init__(self, client: redis.Redis) -> None:
        self._client = client

    @property
    def client(self) -> redis.Redis:
        return self._client

    def publish(self, channel: str, payload: bytes) -> int:
        """Publish and return the number of subscribers that received it."""
        try:
            receivers = self._client.publish(channel, payload)
        except redis.RedisError as exc:
            logger.error("Publish to {} failed: {}", channel, exc)
            msg = f"Failed to publish on {channel!r}: {exc}"
            raise PublishError(channel, msg) from exc
        logger.debug("Published {} bytes on {} (receivers={})", len(payload), channel, receivers)
        return receivers

    def close(self) -> None:
        self._client.close()


def connect(
    url: str | None = None,
    *,
    unix_socket_path: str | None = None,
    socket_connect_timeout: float | None = 5.0,
    socket_timeout: float | None = 5.0,
) -> RedisPublisher:
    """Create a Redis client, check it is reachable and wrap it.

    ``unix_socket_path`` takes precedence over ``url`` when both are given.
    Raises :class:`ConnectionError` when the broker cannot be reached or the
    URL is invalid.
    """
    if not (unix_socket_path or url):
        msg = "Either a Redis URL or a Unix socket path is required"
        raise ValueError(msg)

    target = unix_socket_path or _redact(url)

    try:
        if unix_socket_path:
            client = redis.Redis(
                unix_socket_path=unix_socket_path,
                socket_connect_timeout=socket_connect_timeout,
                socket_timeout=socket_timeout,
            )
        else:
            client = redis.Redis.from_url(
                url,
                socket_connect_timeout=socket_connect_timeout,
                socket_timeout=socket_timeout,
            )
        client.ping()
    except (redis.RedisError, ValueError) as exc:
        logger.error("Redis unreachable at {}: {}", target, exc)
        msg = f"Cannot connect to Redis at {target}: {exc}"
        raise ConnectionError(msg) from exc

    logger.info("Redis: connected ({})", target)
    return RedisPublisher(client)


def _redact(url: str) -> str:
    """Hide the password of a Redis URL for logging."""
    parts = urlsplit(url)
    if not parts.password:
        return url
    netloc = parts.netloc.replace(f":{parts.password}@", ":***@", 1)
    return urlunsplit(parts._replace(netloc=netloc))
