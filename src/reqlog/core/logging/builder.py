# src/reqlog/core/logging/builder.py
"""
Logging builder: create and apply a dictConfig logging configuration and
optionally move log IO to a background QueueListener.

This module:
 - builds a dictConfig-compatible mapping from Settings
 - allows a queue-backed logging mode (LOG_USE_QUEUE) so `LoggerTransport` calls
   made from the request path only enqueue a record; formatting and writing
   happen on the listener thread
 - provides a NonBlockingQueueHandler that drops records instead of blocking
   producers when a bounded queue is full
 - exposes stop_queue_logging() to flush & stop the background listener at shutdown.

Configuration knobs (on your Settings object):
 - LOG_USE_QUEUE: bool - enable queue-backed logging
 - LOG_QUEUE_MAX_SIZE: int | None - if > 0, use a bounded queue with this size.
 - LOG_QUEUE_BLOCKING: bool - with a bounded queue, block producers when full
   instead of dropping records.
 - LOG_TO_STDOUT, LOG_DIR, LOG_FORMAT, LOG_LEVEL, ENV, SERVICE_NAME - standard settings.

Queue settings are read with getattr() so any duck-typed settings object works.
"""

from __future__ import annotations

from pathlib import Path
import logging
import logging.config
import queue as _queue
import threading
from typing import Optional
from logging.handlers import QueueHandler, QueueListener

from reqlog.utils.logging import get_project_name
from .formatters import JsonFormatter, ColorFormatter
from .filters import RedactFilter
from .handlers import (
    get_console_handler,
    get_file_handler,
    get_error_file_handler,
    get_error_console_handler,
)

from reqlog.config.settings import Settings  # type: ignore

_log = logging.getLogger(__name__)

_QUEUE_LISTENER: Optional[QueueListener] = None
_QUEUE: Optional[_queue.Queue] = None

_DROPPED_LOGS_COUNT = 0
_DROPPED_LOGS_LOCK = threading.Lock()


class NonBlockingQueueHandler(QueueHandler):
    """
    QueueHandler variant that never blocks producers on a full bounded queue.

    When the queue is full the record is dropped and a module-level counter is
    incremented (see get_queue_stats()).
    """

    def emit(self, record: logging.LogRecord) -> None:
        global _DROPPED_LOGS_COUNT
        try:
            self.queue.put_nowait(self.prepare(record))
        except _queue.Full:
            with _DROPPED_LOGS_LOCK:
                _DROPPED_LOGS_COUNT += 1
        except Exception:
            self.handleError(record)


def get_queue_stats() -> dict:
    """Return small diagnostics about queue usage (dropped logs count)."""
    with _DROPPED_LOGS_LOCK:
        return {"dropped_logs": _DROPPED_LOGS_COUNT, "queue_present": _QUEUE is not None}


def make_dict_config(settings: Settings) -> dict:
    """
    Build the dictConfig mapping using the provided settings.

    The returned mapping includes:
      - formatters: "standard" (color in text mode) and "json"
      - filters: "redact"
      - handlers: console, (file/error_file) OR error_console depending on LOG_TO_STDOUT
      - loggers: root, the request logger, uvicorn.error, uvicorn.access
    """
    formatters = {
        "standard": {
            "()": ColorFormatter if settings.LOG_FORMAT == "text" else logging.Formatter,
            "format": "%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        },
        "json": {
            "()": JsonFormatter,
            "env": settings.ENV,
            "service": getattr(settings, "SERVICE_NAME", None) or get_project_name(default="reqlog"),
        },
    }

    filters = {
        "redact": {"()": RedactFilter},
    }

    handlers: dict[str, dict] = {"console": get_console_handler(settings)}

    if (not settings.LOG_TO_STDOUT) and (settings.LOG_DIR):
        handlers["file"] = get_file_handler(settings)
        handlers["error_file"] = get_error_file_handler(settings)
    else:
        handlers["error_console"] = get_error_console_handler(settings)

    request_logger_name = getattr(settings, "REQUEST_LOGGER_NAME", "reqlog.requests")

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": formatters,
        "filters": filters,
        "handlers": handlers,
        "loggers": {
            "": {
                "handlers": list(handlers.keys()),
                "level": settings.LOG_LEVEL,
                "propagate": True,
            },
            # request events go through the root handlers; keep the level explicit
            # so a quieter root level can be set without losing request logs
            request_logger_name: {
                "level": settings.LOG_LEVEL,
                "propagate": True,
            },
            "uvicorn.error": {
                "level": settings.LOG_LEVEL,
                "handlers": list(handlers.keys()),
                "propagate": False,
            },
            # the request logger middleware already records every request
            "uvicorn.access": {
                "level": "WARNING",
                "handlers": ["console"],
                "propagate": False,
            },
        },
    }


def setup_logging(settings: Settings) -> None:
    """
    Initialize logging using settings and optionally switch to queue-backed logging.

    Steps:
      1. Ensure LOG_DIR exists when writing files.
      2. Apply dictConfig(make_dict_config(settings)).
      3. If settings.LOG_USE_QUEUE:
            - create a (bounded or unbounded) queue
            - detach the real handlers from all loggers and hand them to a
              QueueListener running in a background thread
            - attach a QueueHandler (or NonBlockingQueueHandler) to the root logger,
              with RedactFilter so secrets are scrubbed before entering the queue
    """
    global _QUEUE_LISTENER, _QUEUE

    # a previous queue-backed setup would keep writing through stale handlers
    stop_queue_logging()

    if (not settings.LOG_TO_STDOUT) and (settings.LOG_DIR):
        Path(settings.LOG_DIR).mkdir(parents=True, exist_ok=True)

    logging.config.dictConfig(make_dict_config(settings))

    if not getattr(settings, "LOG_USE_QUEUE", False):
        return

    max_size = getattr(settings, "LOG_QUEUE_MAX_SIZE", 0) or 0
    blocking = bool(getattr(settings, "LOG_QUEUE_BLOCKING", False))

    root_logger = logging.getLogger()
    current_handlers = list(root_logger.handlers)
    if not current_handlers:
        return

    handlers_to_move = set(current_handlers)

    # Remove the handler instances from every logger so they only run on the listener thread.
    for logger_obj in list(logging.Logger.manager.loggerDict.values()):
        if isinstance(logger_obj, logging.Logger):
            for h in list(logger_obj.handlers):
                if h in handlers_to_move:
                    logger_obj.removeHandler(h)
    for h in list(root_logger.handlers):
        root_logger.removeHandler(h)

    log_queue: _queue.Queue = _queue.Queue(max_size) if max_size > 0 else _queue.Queue()

    if max_size > 0 and not blocking:
        qh: QueueHandler = NonBlockingQueueHandler(log_queue)
    else:
        qh = QueueHandler(log_queue)
    qh.addFilter(RedactFilter())

    listener = QueueListener(log_queue, *current_handlers, respect_handler_level=True)
    listener.start()
    root_logger.addHandler(qh)

    _QUEUE_LISTENER = listener
    _QUEUE = log_queue


def stop_queue_logging() -> None:
    """
    Stop the QueueListener (flushing what is queued) and clear module refs.
    """
    global _QUEUE_LISTENER, _QUEUE
    listener = _QUEUE_LISTENER
    if listener is None:
        return

    try:
        listener.stop()
        for handler in listener.handlers:
            handler.close()
    except Exception:
        _log.exception("Failed to stop QueueListener cleanly")
    finally:
        _QUEUE_LISTENER = None
        _QUEUE = None
