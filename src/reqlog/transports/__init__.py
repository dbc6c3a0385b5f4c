from .base import Callback, Transport, noop_callback
from .stdlib import LoggerTransport, to_logging_level

__all__ = ["Callback", "Transport", "noop_callback", "LoggerTransport", "to_logging_level"]
