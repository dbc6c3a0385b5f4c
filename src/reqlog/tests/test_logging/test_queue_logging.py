# src/reqlog/tests/test_logging/test_queue_logging.py
import json
import logging
import queue
import threading
from pathlib import Path

from reqlog.core.logging.builder import (
    NonBlockingQueueHandler,
    get_queue_stats,
    setup_logging,
    stop_queue_logging,
)
from reqlog.middleware.factories import logger
from reqlog.transports import LoggerTransport


def test_queue_listener_writes_request_events_to_file(tmp_path, make_settings, reset_logging):
    settings = make_settings(LOG_TO_STDOUT=False, LOG_DIR=tmp_path, LOG_USE_QUEUE=True)
    setup_logging(settings)
    assert get_queue_stats()["queue_present"] is True

    handle = logger({"transports": [LoggerTransport()]})
    for i in range(5):
        handle({"method": "GET", "url": f"/items/{i}", "headers": {"authorization": "Bearer t"}}, lambda: None)

    # stopping the listener flushes everything still queued
    stop_queue_logging()
    assert get_queue_stats()["queue_present"] is False

    app_log = Path(settings.LOG_DIR) / "app.log"
    lines = [json.loads(line) for line in app_log.read_text().splitlines()]
    messages = [line["message"] for line in lines if line["logger"] == "reqlog.requests"]
    assert messages == [f"HTTP GET /items/{i}" for i in range(5)]
    first = next(line for line in lines if line["logger"] == "reqlog.requests")
    assert first["meta"]["req"]["headers"]["authorization"] == "***REDACTED***"


def test_bounded_non_blocking_queue(tmp_path, make_settings, reset_logging):
    settings = make_settings(
        LOG_TO_STDOUT=False,
        LOG_DIR=tmp_path,
        LOG_USE_QUEUE=True,
        LOG_QUEUE_MAX_SIZE=10,
        LOG_QUEUE_BLOCKING=False,
    )
    setup_logging(settings)

    root = logging.getLogger()
    assert any(isinstance(h, NonBlockingQueueHandler) for h in root.handlers)


def test_full_bounded_queue_drops_and_counts_records():
    log_queue = queue.Queue(1)
    handler = NonBlockingQueueHandler(log_queue)
    before = get_queue_stats()["dropped_logs"]

    def emit_three():
        for i in range(3):
            handler.emit(logging.LogRecord("reqlog.requests", logging.INFO, __file__, 1, f"event {i}", None, None))

    worker = threading.Thread(target=emit_three, daemon=True)
    worker.start()
    worker.join(timeout=2)

    assert not worker.is_alive()
    assert log_queue.qsize() == 1
    assert log_queue.get_nowait().getMessage() == "event 0"
    assert get_queue_stats()["dropped_logs"] - before == 2
