from .base import (
    ReqlogError,
    ConfigurationError,
    MissingOptionsError,
    MissingTransportsError,
)

__all__ = [
    "ReqlogError",
    "ConfigurationError",
    "MissingOptionsError",
    "MissingTransportsError",
]
