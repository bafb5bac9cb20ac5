"""Tests for logging setup."""

import io
import json
import logging

import pytest

from pathgraph.config import ObservabilityConfig
from pathgraph.domain.errors import ConfigurationError
from pathgraph.monitoring import configure_logging, logger


@pytest.fixture(autouse=True)
def restore_logger():
    handlers = list(logger.handlers)
    level = logger.level
    yield
    logger.handlers = handlers
    logger.setLevel(level)


def test_text_format():
    stream = io.StringIO()
    configure_logging(ObservabilityConfig(level="INFO", format="%(levelname)s %(message)s"), stream)

    logging.getLogger("pathgraph.services.pathfinding").info("Path found")
    logging.getLogger("pathgraph.graph.engine").debug("hidden")

    assert stream.getvalue() == "INFO Path found\n"


def test_structured_format_keeps_extra_fields():
    stream = io.StringIO()
    configure_logging(ObservabilityConfig(level="DEBUG", structured=True), stream)

    logging.getLogger("pathgraph.graph.engine").debug(
        "Engine built", extra={"nodes": 4, "directed": True}
    )

    payload = json.loads(stream.getvalue())
    assert payload["message"] == "Engine built"
    assert payload["logger"] == "pathgraph.graph.engine"
    assert payload["level"] == "DEBUG"
    assert payload["nodes"] == 4
    assert payload["directed"] is True


def test_reconfiguring_replaces_handler():
    first = configure_logging(ObservabilityConfig(), io.StringIO())
    second = configure_logging(ObservabilityConfig(), io.StringIO())

    assert first not in logger.handlers
    assert second in logger.handlers


def test_unknown_level():
    with pytest.raises(ConfigurationError):
        configure_logging(ObservabilityConfig(level="LOUD"), io.StringIO())
