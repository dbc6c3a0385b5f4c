from .factories import error_logger, logger
from .asgi import ErrorLoggerMiddleware, RequestLoggerMiddleware, request_record

__all__ = [
    "error_logger",
    "logger",
    "ErrorLoggerMiddleware",
    "RequestLoggerMiddleware",
    "request_record",
]
