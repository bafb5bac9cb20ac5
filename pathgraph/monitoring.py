"""Logging setup driven by ObservabilityConfig.

Modules log through ``logging.getLogger(__name__)`` and attach context
with ``extra={...}``. configure_logging() installs one handler on the
``pathgraph`` logger, either with the configured text format or with a
JSON formatter that keeps the ``extra`` fields.
"""

from __future__ import annotations

import json
import logging
from typing import IO, Any, Dict, Optional

from .config import ObservabilityConfig, get_config
from .domain.errors import ConfigurationError

logger = logging.getLogger("pathgraph")

_RESERVED = set(vars(logging.LogRecord("", 0, "", 0, "", None, None))) | {
    "message",
    "asctime",
}


class StructuredFormatter(logging.Formatter):
    """Format records as one JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "time": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key, value in record.__dict__.items():
            if key not in _RESERVED and not key.startswith("_"):
                payload[key] = value
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


def configure_logging(
    config: Optional[ObservabilityConfig] = None,
    stream: Optional[IO[str]] = None,
) -> logging.Handler:
    """Install the package log handler, replacing any earlier one.

    Args:
        config: Observability settings; defaults to the global config.
        stream: Output stream; defaults to stderr.

    Returns:
        The installed handler.

    Raises:
        ConfigurationError: If the configured level is not a logging level.
    """
    config = config or get_config().observability

    level = logging.getLevelName(config.level.upper())
    if not isinstance(level, int):
        raise ConfigurationError(
            f"Unknown log level: {config.level!r}",
            setting_name="observability.level",
            expected_type="DEBUG, INFO, WARNING, ERROR or CRITICAL",
        )

    for handler in list(logger.handlers):
        if getattr(handler, "_pathgraph_handler", False):
            logger.removeHandler(handler)

    handler = logging.StreamHandler(stream)
    if config.structured:
        handler.setFormatter(StructuredFormatter())
    else:
        handler.setFormatter(logging.Formatter(config.format))
    handler._pathgraph_handler = True  # type: ignore[attr-defined]

    logger.setLevel(level)
    logger.addHandler(handler)
    return handler
