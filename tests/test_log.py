"""Unit tests for loguru setup."""

from __future__ import annotations

import logging
import sys
from collections.abc import Iterator

import pytest
from loguru import logger

from socketio_emitter.log import setup_logging


@pytest.fixture
def captured() -> Iterator[list[str]]:
    messages: list[str] = []
    yield messages
    # Restore loguru and stdlib logging defaults.
    logger.remove()
    logger.add(sys.stderr)
    logging.basicConfig(handlers=[logging.NullHandler()], force=True)


def test_stdlib_logging_is_intercepted(captured: list[str]) -> None:
    setup_logging("debug")
    logger.add(lambda m: captured.append(m.record["message"]), level="DEBUG")

    logging.getLogger("some.library").warning("broker %s", "down")

    assert "broker down" in captured


def test_level_filters_loguru(captured: list[str]) -> None:
    setup_logging("WARNING")
    logger.add(lambda m: captured.append(m.record["message"]), level="WARNING")

    logger.info("quiet")
    logger.warning("loud")

    assert captured == ["loud"]


def test_redis_logger_is_quieted(captured: list[str]) -> None:
    setup_logging("DEBUG")
    logger.add(lambda m: captured.append(m.record["message"]), level="DEBUG")

    logging.getLogger("redis.connection").debug("noise")

    assert "noise" not in captured


def test_custom_quiet_loggers(captured: list[str]) -> None:
    setup_logging("DEBUG", quiet=["chatty.client"])
    logger.add(lambda m: captured.append(m.record["message"]), level="DEBUG")

    logging.getLogger("chatty.client.pool").info("hidden")
    logging.getLogger("chatty.client").warning("shown")
    logging.getLogger("other.lib").info("kept")

    assert captured == ["shown", "kept"]
