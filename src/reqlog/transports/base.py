# src/reqlog/transports/base.py
"""
Transport interface expected by the middleware.

A transport is any object with the two methods below. The middleware never
waits on them: it passes `noop_callback` as completion callback, and when a
method returns an awaitable it is scheduled on the running loop instead of
being awaited.
"""

from collections.abc import Callable, Mapping
from typing import Any, Protocol, runtime_checkable

Callback = Callable[..., Any]


@runtime_checkable
class Transport(Protocol):
    def log(self, level: str, msg: str, meta: Mapping[str, Any], callback: Callback) -> Any:
        ...

    def log_exception(self, msg: str, meta: Mapping[str, Any], callback: Callback) -> Any:
        ...


def noop_callback(*args: Any, **kwargs: Any) -> None:
    """Completion callback handed to transports; the outcome is not observed."""
    return None


__all__ = ["Callback", "Transport", "noop_callback"]
