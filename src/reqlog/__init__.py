"""
reqlog: request / error logging middleware for Starlette and FastAPI.

    from fastapi import FastAPI
    from reqlog import ErrorLoggerMiddleware, RequestLoggerMiddleware, options_from_settings
    from reqlog.config import get_settings
    from reqlog.core.logging import setup_logging

    settings = get_settings()
    setup_logging(settings)

    app = FastAPI()
    app.add_middleware(ErrorLoggerMiddleware, **options_from_settings(settings))
    app.add_middleware(RequestLoggerMiddleware, **options_from_settings(settings))
"""

from .core.request_filter import (
    REQUEST_WHITELIST,
    default_request_filter,
    filter_request,
    redacting_request_filter,
)
from .core.options import ErrorLoggerOptions, LoggerOptions, options_from_settings
from .exceptions import ConfigurationError, MissingOptionsError, MissingTransportsError, ReqlogError
from .middleware import (
    ErrorLoggerMiddleware,
    RequestLoggerMiddleware,
    error_logger,
    logger,
    request_record,
)
from .transports import LoggerTransport, Transport, noop_callback

__all__ = [
    "REQUEST_WHITELIST",
    "default_request_filter",
    "filter_request",
    "redacting_request_filter",
    "ErrorLoggerOptions",
    "LoggerOptions",
    "options_from_settings",
    "ConfigurationError",
    "MissingOptionsError",
    "MissingTransportsError",
    "ReqlogError",
    "ErrorLoggerMiddleware",
    "RequestLoggerMiddleware",
    "error_logger",
    "logger",
    "request_record",
    "LoggerTransport",
    "Transport",
    "noop_callback",
]
