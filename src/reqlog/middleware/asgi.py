# src/reqlog/middleware/asgi.py
"""
Starlette / FastAPI adapters for the request and error loggers.

    from fastapi import FastAPI
    from reqlog import ErrorLoggerMiddleware, LoggerTransport, RequestLoggerMiddleware

    app = FastAPI()
    transports = [LoggerTransport()]
    app.add_middleware(ErrorLoggerMiddleware, transports=transports)
    app.add_middleware(RequestLoggerMiddleware, transports=transports, level="info")

Options are given either as keyword arguments or as a single `options=` mapping
(or `LoggerOptions` instance), not both. They are validated in `__init__`, so a bad
configuration raises when Starlette builds the middleware stack, i.e. at
application startup.

Register ErrorLoggerMiddleware *before* RequestLoggerMiddleware with
`add_middleware` if you want it innermost (closest to the routes); the order
between the two does not change what gets logged.
"""

from collections.abc import Mapping
from typing import Any

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

from ..exceptions import ConfigurationError
from .factories import error_logger, logger


def request_record(request: Request) -> dict[str, Any]:
    """
    Snapshot `request` into a plain dict keyed like the request whitelist.

    Every container is a fresh copy, so whatever the transports hold on to is not
    affected by anything that happens to the request afterwards. `path_params`,
    `client` and `cookies` are included for custom selectors but are not
    allow-listed, so the default filter drops them.
    """
    query_string = request.url.query
    url = request.url.path + (f"?{query_string}" if query_string else "")
    client = request.client
    return {
        "url": url,
        "originalUrl": str(request.url),
        "method": request.method,
        "httpVersion": request.scope.get("http_version", "1.1"),
        "headers": dict(request.headers),
        "query": dict(request.query_params),
        "path_params": dict(request.path_params),
        "client": [client.host, client.port] if client else None,
        "cookies": dict(request.cookies),
    }


def _resolve_options(options: Any, kwargs: Mapping[str, Any]) -> Any:
    if options is not None:
        if kwargs:
            raise ConfigurationError(
                "pass middleware options either as options= or as keywords, not both",
                fields=sorted(kwargs),
            )
        return options
    return dict(kwargs) or None


def _pass_along(err: BaseException) -> BaseException:
    return err


class RequestLoggerMiddleware(BaseHTTPMiddleware):
    """
    Log one "HTTP <method> <url>" event per request, then hand the request on.
    """

    def __init__(self, app: ASGIApp, options: Any = None, **kwargs: Any) -> None:
        super().__init__(app)
        self.handle = logger(_resolve_options(options, kwargs))

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        # the handler calls the continuation synchronously and returns its awaitable
        return await self.handle(request_record(request), lambda: call_next(request))


class ErrorLoggerMiddleware(BaseHTTPMiddleware):
    """
    Log unhandled exceptions raised further down the stack and re-raise them
    unchanged, so ServerErrorMiddleware / exception handlers still see them.
    """

    def __init__(self, app: ASGIApp, options: Any = None, **kwargs: Any) -> None:
        super().__init__(app)
        self.handle = error_logger(_resolve_options(options, kwargs))

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        try:
            return await call_next(request)
        except Exception as exc:
            self.handle(exc, request_record(request), _pass_along)
            raise


__all__ = ["request_record", "RequestLoggerMiddleware", "ErrorLoggerMiddleware"]
