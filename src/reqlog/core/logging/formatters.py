# src/reqlog/core/logging/formatters.py

"""
Custom logging formatters.

  - JsonFormatter: one JSON object per line, for log collectors (ELK, Fluentd,
    CloudWatch, ...). Request events carry their metadata under "meta", e.g.

        {"timestamp": "...", "level": "INFO", "logger": "reqlog.requests",
         "message": "HTTP GET /x", "service": "reqlog", "env": "production",
         "version": "0.3.0", "meta": {"req": {"url": "/x", "method": "GET", ...}}}

  - ColorFormatter: compact ANSI-colored lines for local development consoles.

builder.py picks one or the other from `settings.LOG_FORMAT`.

Formatters include whatever is attached to the record. Secrets are expected to
be removed earlier, by the request selector or by RedactFilter.
"""

import json
import logging
from typing import Any
from logging import LogRecord
from reqlog.utils.logging import get_project_version

PROJECT_VERSION = get_project_version()

# Attributes every LogRecord has; anything else on the record came from `extra`.
_RECORD_ATTRS = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", None, None)).keys()
) | {"message", "asctime", "taskName"}


class JsonFormatter(logging.Formatter):
    """
    Structured JSON formatter.

    Construction:
      - env: environment name (e.g., "development" | "production"); optional.
      - service: logical service name included in every line.
      - datefmt: optional date format passed to logging.Formatter (used by formatTime).

    Non-serializable extras are converted with str(); format() never raises on
    odd values.
    """

    def __init__(self, *, env: str | None = None, service: str | None = "reqlog", datefmt: str | None = None):
        super().__init__(datefmt=datefmt)
        self.env = env
        self.service = service or "reqlog"

    def format(self, record: LogRecord) -> str:
        log_record: dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "pathname": record.pathname,
            "lineno": record.lineno,
            "service": self.service,
            "env": self.env,
            "version": PROJECT_VERSION,
        }

        if record.exc_info:
            log_record["exc_info"] = self.formatException(record.exc_info)
        if record.stack_info:
            log_record["stack_info"] = self.formatStack(record.stack_info)

        # Extras: whatever `extra={...}` put on the record (e.g. "meta").
        for k, v in record.__dict__.items():
            if k in _RECORD_ATTRS or k in log_record or k.startswith("_"):
                continue
            try:
                json.dumps(v)
                log_record[k] = v
            except (TypeError, ValueError):
                # not serializable as-is: fall back to str() on the leaves
                log_record[k] = json.loads(json.dumps(v, default=str))

        # ensure_ascii=False keeps unicode readable; default=str is the last safety net.
        return json.dumps(log_record, ensure_ascii=False, default=str)


class ColorFormatter(logging.Formatter):
    """
    Development-friendly colored formatter.

    Line shape: TIMESTAMP | LEVEL | LOGGER_NAME | MESSAGE, with the level colored
    and the traceback appended when exc_info is set.
    """

    COLOR_CODES = {
        "DEBUG": "\033[1;36;47m",   # bold cyan on white
        "INFO": "\033[32m",         # green
        "WARNING": "\033[33m",      # yellow
        "ERROR": "\033[31m",        # red
        "CRITICAL": "\033[1;41m",   # bold on red background
        "RESET": "\033[0m",
    }

    def __init__(self, fmt: str | None = None, datefmt: str | None = None) -> None:
        super().__init__(fmt=fmt, datefmt=datefmt)

    def format(self, record: LogRecord) -> str:
        color = self.COLOR_CODES.get(record.levelname, "")
        # reset right after the level name so the color does not spill over the line
        reset = self.COLOR_CODES["RESET"]
        timestamp = self.formatTime(record, self.datefmt)

        base = (
            f"{timestamp} | {color}{record.levelname:<10}{reset} | "
            f"{record.name:<30} | "
            f"{record.getMessage()}"
        )

        if record.exc_info:
            base = base + "\n" + self.formatException(record.exc_info)

        return base


__all__ = ["JsonFormatter", "ColorFormatter"]
