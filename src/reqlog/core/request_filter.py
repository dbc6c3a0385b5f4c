# src/reqlog/core/request_filter.py
"""
Request filtering

Produces the safe-to-log view of an inbound request.

How it works
------------
- `REQUEST_WHITELIST` lists the request fields that may be logged without an
  explicit opt-in. `body` is not in the list: it can contain passwords and other
  secrets.
- A *selector* (`request_filter` option) is called as `selector(req, prop_name)`
  for every allow-listed field present on the request and decides what gets
  logged for that field. Returning `None` drops the field.
- `filter_request(req, selector)` walks the request's keys and builds a new dict.
  It never mutates the request and never catches selector errors.

Both `REQUEST_WHITELIST` and `default_request_filter` are public so callers can
compose their own selectors, e.g.:

    def no_cookies(req, prop_name):
        value = default_request_filter(req, prop_name)
        if prop_name == "headers" and value is not None:
            value = {k: v for k, v in value.items() if k.lower() != "cookie"}
        return value
"""

from collections.abc import Callable, Iterable, Mapping
from typing import Any

RequestFilter = Callable[[Mapping[str, Any], str], Any]

REQUEST_WHITELIST: tuple[str, ...] = (
    "url",
    "headers",
    "method",
    "httpVersion",
    "originalUrl",
    "query",
)

REDACTED = "***REDACTED***"

SENSITIVE_KEYS = frozenset({
    "authorization",
    "proxy-authorization",
    "cookie",
    "set-cookie",
    "x-api-key",
    "password",
    "password_confirmation",
    "secret",
    "token",
    "access_token",
    "refresh_token",
})


def default_request_filter(req: Mapping[str, Any], prop_name: str) -> Any:
    """Identity selector: log the request value unchanged."""
    return req.get(prop_name)


def filter_request(original_req: Mapping[str, Any], initial_filter: RequestFilter) -> dict[str, Any]:
    """
    Return a new dict with the allow-listed fields of `original_req` that
    `initial_filter` resolves to a value.
    """
    req: dict[str, Any] = {}
    for prop_name in original_req.keys():
        if prop_name not in REQUEST_WHITELIST:
            continue
        value = initial_filter(original_req, prop_name)
        if value is not None:
            req[prop_name] = value
    return req


def redact_mapping(value: Any, sensitive: Iterable[str] = SENSITIVE_KEYS) -> Any:
    """
    Return a copy of `value` with sensitive keys masked, recursing into nested
    mappings and lists. Key matching is case-insensitive. Non-container values are
    returned as is.
    """
    keys = {k.lower() for k in sensitive}
    return _redact(value, keys)


def _redact(value: Any, keys: set[str]) -> Any:
    if isinstance(value, Mapping):
        return {
            k: REDACTED if isinstance(k, str) and k.lower() in keys else _redact(v, keys)
            for k, v in value.items()
        }
    if isinstance(value, (list, tuple)):
        return [_redact(v, keys) for v in value]
    return value


def redacting_request_filter(
    base: RequestFilter = default_request_filter,
    sensitive: Iterable[str] = SENSITIVE_KEYS,
) -> RequestFilter:
    """
    Build a selector that runs `base` and masks sensitive keys in what it returns
    (e.g. the `authorization` header or a `token` query parameter).
    """
    keys = {k.lower() for k in sensitive}

    def _filter(req: Mapping[str, Any], prop_name: str) -> Any:
        value = base(req, prop_name)
        if value is None:
            return None
        return _redact(value, keys)

    return _filter


__all__ = [
    "REQUEST_WHITELIST",
    "REDACTED",
    "SENSITIVE_KEYS",
    "RequestFilter",
    "default_request_filter",
    "filter_request",
    "redact_mapping",
    "redacting_request_filter",
]
