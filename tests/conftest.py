"""Shared test fixtures.

Unit tests publish into an in-memory ``RecordingPublisher``.  Integration
tests use a real Redis container managed by testcontainers-python; they are
marked ``@pytest.mark.integration`` and need Docker.
"""

from __future__ import annotations

import os
from collections.abc import Iterator

import pytest
import redis
from testcontainers.redis import RedisContainer

from socketio_emitter.settings import get_settings


class RecordingPublisher:
    """Publisher stub that keeps every ``(channel, payload)`` it receives."""

    def __init__(self) -> None:
        self.published: list[tuple[str, bytes]] = []

    def publish(self, channel: str, payload: bytes) -> int:
        self.published.append((channel, payload))
        return 1

    @property
    def last(self) -> tuple[str, bytes]:
        return self.published[-1]


@pytest.fixture
def publisher() -> RecordingPublisher:
    return RecordingPublisher()


@pytest.fixture(autouse=True)
def _clean_settings(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Drop SOCKETIO_EMITTER_* overrides from the environment and the settings cache."""
    for key in list(os.environ):
        if key.startswith("SOCKETIO_EMITTER_"):
            monkeypatch.delenv(key)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


# ---------------------------------------------------------------------------
# Session-scoped: Redis container (started once, only by integration tests)
# ---------------------------------------------------------------------------


@pytest.fixture(scope="session")
def redis_container() -> Iterator[RedisContainer]:
    """Start a Redis 7 container for the test session."""
    with RedisContainer(image="redis:7") as r:
        yield r


@pytest.fixture(scope="session")
def redis_url(redis_container: RedisContainer) -> str:
    host = redis_container.get_container_host_ip()
    port = redis_container.get_exposed_port(6379)
    return f"redis://{host}:{port}/0"


@pytest.fixture
def redis_client(redis_url: str) -> Iterator[redis.Redis]:
    """Redis client; database flushed after each test."""
    client = redis.Redis.from_url(redis_url)
    yield client
    client.flushdb()
    client.close()
