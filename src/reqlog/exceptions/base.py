"""
Exceptions raised by the reqlog middleware factories.

All of them are construction-time errors: they surface while the application
is being wired (creating the middleware / building the middleware stack),
never while a request is being handled.
"""

from typing import Iterable


class ReqlogError(Exception):
    """
    Base exception for reqlog errors.

    - message: human-friendly message
    - fields: optional list of option names related to the error (e.g., ['transports'])
    - error_code: canonical short code (e.g., 'missing_options', 'invalid_option')
    """

    def __init__(self, message: str, *, fields: Iterable[str] | None = None,
                 error_code: str | None = None):
        super().__init__(message)
        self.message = message
        self.fields = list(fields) if fields else None
        self.error_code = error_code

    def __str__(self) -> str:
        base = self.message
        parts = []
        if self.fields:
            parts.append(f"fields: {', '.join(self.fields)}")
        if self.error_code:
            parts.append(f"code: {self.error_code}")
        if parts:
            return f"{base} ({'; '.join(parts)})"
        return base

    def to_payload(self) -> dict:
        """
        Return a JSON-serializable dict describing the error, e.g. for startup diagnostics:
            {"detail": "...", "code": "missing_transports", "fields": ["transports"]}
        """
        payload = {"detail": self.message}
        if self.error_code:
            payload["code"] = self.error_code
        if self.fields:
            payload["fields"] = list(self.fields)
        return payload


class ConfigurationError(ReqlogError):
    """Invalid middleware options (wrong types, unknown values)."""

    def __init__(self, message: str, *, fields: Iterable[str] | None = None,
                 error_code: str | None = "invalid_option"):
        super().__init__(message, fields=fields, error_code=error_code)


class MissingOptionsError(ConfigurationError):
    def __init__(self, message: str = "options are required by reqlog middleware"):
        super().__init__(message, error_code="missing_options")


class MissingTransportsError(ConfigurationError):
    def __init__(self, message: str = "transports are required by reqlog middleware"):
        super().__init__(message, fields=["transports"], error_code="missing_transports")


__all__ = [
    "ReqlogError",
    "ConfigurationError",
    "MissingOptionsError",
    "MissingTransportsError",
]
