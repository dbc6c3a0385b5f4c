# src/reqlog/middleware/factories.py
"""
Request / error logging middleware factories.

Both factories validate their options immediately and return a plain handler
function. The handlers are framework neutral: a request is any mapping (see
`reqlog.middleware.asgi.request_record` for the Starlette snapshot) and `next_`
is the continuation of the pipeline.

    handle = logger({"transports": [LoggerTransport()]})
    handle({"method": "GET", "url": "/x"}, next_)        # -> next_()

    handle_error = error_logger({"transports": [LoggerTransport()]})
    handle_error(exc, {"method": "GET", "url": "/x"}, next_)   # -> next_(exc)

Dispatch to transports is fire-and-forget:
  - each transport gets `noop_callback`, the outcome is never inspected;
  - a transport method returning an awaitable is scheduled as a task on the
    running loop and not awaited;
  - a transport raising is logged at WARNING and skipped;
  - `next_` is always called once every transport has been invoked.
"""

import asyncio
import inspect
import logging
from collections.abc import Callable, Mapping
from typing import Any

from ..core.exception_info import get_all_info
from ..core.options import ErrorLoggerOptions, LoggerOptions, build_options
from ..core.request_filter import filter_request
from ..transports.base import noop_callback

_log = logging.getLogger(__name__)

ERROR_MESSAGE = "middlewareError"

RequestHandler = Callable[[Mapping[str, Any], Callable[[], Any]], Any]
ErrorHandler = Callable[[BaseException, Mapping[str, Any], Callable[[BaseException], Any]], Any]

# strong references to scheduled transport coroutines until they finish
_pending: set[asyncio.Future] = set()


def _on_task_done(task: asyncio.Future) -> None:
    _pending.discard(task)
    if task.cancelled():
        return
    exc = task.exception()
    if exc is not None:
        _log.warning("Async transport call failed", exc_info=exc)


def _schedule(result: Any) -> None:
    try:
        loop = asyncio.get_running_loop()
    except RuntimeError:
        # no loop to run it on; close the coroutine so it is not reported as never awaited
        if inspect.iscoroutine(result):
            result.close()
        raise
    task = asyncio.ensure_future(result, loop=loop)
    _pending.add(task)
    task.add_done_callback(_on_task_done)


def dispatch(transports: list[Any], method: str, *args: Any) -> None:
    """Call `method(*args, noop_callback)` on every transport without waiting."""
    for transport in transports:
        try:
            result = getattr(transport, method)(*args, noop_callback)
            if inspect.isawaitable(result):
                _schedule(result)
        except Exception:
            _log.warning("Transport %r failed in %s()", transport, method, exc_info=True)


def format_message(req: Mapping[str, Any]) -> str:
    return "HTTP %s %s" % (req.get("method"), req.get("url"))


def logger(options: Mapping[str, Any] | LoggerOptions | None) -> RequestHandler:
    """
    Build the request logging handler.

    Raises MissingOptionsError / MissingTransportsError / ConfigurationError
    immediately on bad options.
    """
    opts = build_options(options, LoggerOptions)

    def handle(req: Mapping[str, Any], next_: Callable[[], Any]) -> Any:
        meta = {"req": filter_request(req, opts.request_filter)}
        dispatch(opts.transports, "log", opts.level, format_message(req), meta)
        return next_()

    handle.options = opts
    return handle


def error_logger(options: Mapping[str, Any] | ErrorLoggerOptions | None) -> ErrorHandler:
    """
    Build the error logging handler. The handler passes the error it receives,
    unchanged, to `next_`.
    """
    opts = build_options(options, ErrorLoggerOptions)

    def handle(err: BaseException, req: Mapping[str, Any], next_: Callable[[BaseException], Any]) -> Any:
        meta = get_all_info(err)
        meta["req"] = filter_request(req, opts.request_filter)
        dispatch(opts.transports, "log_exception", ERROR_MESSAGE, meta)
        return next_(err)

    handle.options = opts
    return handle


__all__ = ["logger", "error_logger", "dispatch", "format_message", "ERROR_MESSAGE"]
