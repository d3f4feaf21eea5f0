"""Logging setup.

Stdout handler with either a single-line JSON formatter or plain text,
selected by ``logging.format`` in config. Loggers live under the
``professor`` namespace (``professor.chat``, ``professor.api`` ...).
"""
from __future__ import annotations

import json
import logging
import sys
import time

_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "error": logging.ERROR,
}

TEXT_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class JSONFormatter(logging.Formatter):
    """Format log records as compact JSON with timestamp."""

    def format(self, record: logging.LogRecord) -> str:
        base = {
            "level": record.levelname,
            "ts": round(time.time(), 3),
            "logger": record.name,
            "msg": record.getMessage(),
        }
        if record.exc_info:
            base["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(base, ensure_ascii=False)


def configure_logging(level: str = "info", fmt: str = "json") -> logging.Logger:
    """Install the stdout handler on the root logger.

    Returns the ``professor`` logger.
    """
    handler = logging.StreamHandler(sys.stdout)
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(TEXT_FORMAT))
    logging.basicConfig(
        level=_LEVELS.get(level.lower(), logging.INFO),
        handlers=[handler],
        force=True,
    )
    return logging.getLogger("professor")


__all__ = ["JSONFormatter", "configure_logging"]
