# src/reqlog/transports/stdlib.py
"""
Transport backed by a standard library `logging.Logger`.

This is the bridge between the middleware and the logging configuration built by
`reqlog.core.logging.setup_logging`: request events become ordinary LogRecords,
with the metadata attached as `record.meta` so `JsonFormatter` serialises it and
`RedactFilter` can scrub it.

    from reqlog import RequestLoggerMiddleware, LoggerTransport

    app.add_middleware(RequestLoggerMiddleware, transports=[LoggerTransport()])

Metadata is passed as `extra={"meta": meta}` rather than spread into `extra`,
because exception metadata has keys ("process", "stack") that collide with
LogRecord attributes and would make `Logger.makeRecord` raise.
"""

import logging
from collections.abc import Mapping
from typing import Any

from .base import Callback, noop_callback

LEVELS = {
    "silly": logging.DEBUG,
    "debug": logging.DEBUG,
    "verbose": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "warning": logging.WARNING,
    "error": logging.ERROR,
    "critical": logging.CRITICAL,
}


def to_logging_level(level: str | int) -> int:
    """Map a level name ("info", "warn", ...) to a logging level; unknown names map to INFO."""
    if isinstance(level, int):
        return level
    return LEVELS.get(str(level).lower(), logging.INFO)


class LoggerTransport:
    """
    Log request / error events through `logger` (or the logger called `name`).
    """

    def __init__(self, logger: logging.Logger | None = None, name: str = "reqlog.requests"):
        self.logger = logger or logging.getLogger(name)

    def __repr__(self) -> str:
        return f"LoggerTransport({self.logger.name!r})"

    def log(self, level: str, msg: str, meta: Mapping[str, Any], callback: Callback = noop_callback) -> None:
        self.logger.log(to_logging_level(level), msg, extra={"meta": dict(meta)})
        callback(None, True)

    def log_exception(self, msg: str, meta: Mapping[str, Any], callback: Callback = noop_callback) -> None:
        self.logger.error(msg, extra={"meta": dict(meta)})
        callback(None, True)


__all__ = ["LEVELS", "LoggerTransport", "to_logging_level"]
