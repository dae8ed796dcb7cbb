"""Emitter configuration loaded from SOCKETIO_EMITTER_* environment variables."""

from __future__ import annotations

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class EmitterSettings(BaseSettings):
    """socketio-emitter settings.

    All fields are read from environment variables with the
    ``SOCKETIO_EMITTER_`` prefix.  For example,
    ``SOCKETIO_EMITTER_REDIS_URL=redis://cache:6379/1`` maps to ``redis_url``.
    """

    model_config = SettingsConfigDict(
        env_prefix="SOCKETIO_EMITTER_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # -- Logging ---------------------------------------------------------------
    log_level: str = "INFO"
    quiet_loggers: list[str] = ["redis"]
    """Stdlib loggers capped at WARNING, e.g. ``SOCKETIO_EMITTER_QUIET_LOGGERS='["redis"]'``."""

    # -- Broker ----------------------------------------------------------------
    redis_url: str = "redis://localhost:6379/0"
    socket_connect_timeout: float = 5.0
    socket_timeout: float = 5.0

    # -- Addressing ------------------------------------------------------------
    prefix: str = "socket.io"
    """Channel prefix; must match the ``key`` option of the receiving adapter."""

    namespace: str = "/"


@lru_cache(maxsize=1)
def get_settings() -> EmitterSettings:
    """Return a cached settings instance.

    Call ``get_settings.cache_clear()`` in tests after overriding env vars.
    """
    return EmitterSettings()
