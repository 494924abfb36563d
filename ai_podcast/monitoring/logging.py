"""
Structured logging for ai-podcast.

Modules log through ``logging.getLogger(__name__)``; this module only
decides how records under the "ai_podcast" logger are rendered.
"""

from __future__ import annotations

import json
import logging
import sys
import time
from enum import Enum
from typing import Any, TextIO

ROOT_LOGGER = "ai_podcast"

# Attributes every LogRecord has; anything else came in through extra=
_STANDARD_ATTRS = frozenset(
    vars(logging.LogRecord("", 0, "", 0, "", (), None)).keys()
) | {"message", "asctime", "taskName"}


class LogLevel(Enum):
    """Log levels."""

    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"

    @property
    def numeric(self) -> int:
        """Get numeric log level."""
        return {
            "debug": logging.DEBUG,
            "info": logging.INFO,
            "warning": logging.WARNING,
            "error": logging.ERROR,
            "critical": logging.CRITICAL,
        }[self.value]


class StructuredFormatter(logging.Formatter):
    """Render records as JSON lines or as a compact human-readable line.

    Fields passed with ``extra=`` are included in both formats.

    Example:
        logger.info("Segment ready", extra={"index": 3, "speaker": "Мария"})

        # JSON:
        # {"timestamp": ..., "level": "info", "logger": "ai_podcast.runtime...",
        #  "thread": "MainThread", "message": "Segment ready",
        #  "index": 3, "speaker": "Мария"}
        # Human:
        # [2025-01-01 12:00:00] [INFO] [ai_podcast.runtime...] Segment ready (index=3 speaker=Мария)
    """

    def __init__(self, json_format: bool = False):
        super().__init__()
        self.json_format = json_format

    def format(self, record: logging.LogRecord) -> str:
        data = self._extra(record)
        message = record.getMessage()
        if record.exc_info:
            data["exception"] = self.formatException(record.exc_info)

        if self.json_format:
            payload = {
                "timestamp": record.created,
                "level": record.levelname.lower(),
                "logger": record.name,
                "thread": record.threadName,
                "message": message,
                **data,
            }
            return json.dumps(payload, ensure_ascii=False, default=str)

        return self._format_human(record, message, data)

    def _format_human(
        self, record: logging.LogRecord, message: str, data: dict[str, Any]
    ) -> str:
        timestamp = time.strftime("%Y-%m-%d %H:%M:%S", time.localtime(record.created))
        parts = [f"[{timestamp}]", f"[{record.levelname}]", f"[{record.name}]", message]

        exception = data.pop("exception", None)
        if data:
            parts.append("(" + " ".join(f"{k}={v}" for k, v in data.items()) + ")")

        line = " ".join(parts)
        if exception:
            line = f"{line}\n{exception}"
        return line

    @staticmethod
    def _extra(record: logging.LogRecord) -> dict[str, Any]:
        return {
            key: value
            for key, value in vars(record).items()
            if key not in _STANDARD_ATTRS and not key.startswith("_")
        }


def configure_logging(
    level: LogLevel | str = LogLevel.INFO,
    json_format: bool = False,
    output: TextIO | None = None,
) -> logging.Logger:
    """Configure the "ai_podcast" logger.

    Calling it again replaces the handler installed by the previous call.

    Args:
        level: Log level.
        json_format: Use JSON lines.
        output: Output stream (default: stderr).

    Returns:
        The configured package logger.
    """
    if isinstance(level, str):
        level = LogLevel(level.lower())

    logger = logging.getLogger(ROOT_LOGGER)
    for handler in list(logger.handlers):
        if getattr(handler, "_ai_podcast", False):
            logger.removeHandler(handler)

    handler = logging.StreamHandler(output or sys.stderr)
    handler.setFormatter(StructuredFormatter(json_format=json_format))
    handler._ai_podcast = True
    logger.addHandler(handler)
    logger.setLevel(level.numeric)
    logger.propagate = False
    return logger
