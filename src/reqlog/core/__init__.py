from .request_filter import (
    REQUEST_WHITELIST,
    SENSITIVE_KEYS,
    default_request_filter,
    filter_request,
    redact_mapping,
    redacting_request_filter,
)
from .exception_info import get_all_info
from .options import ErrorLoggerOptions, LoggerOptions, build_options, options_from_settings

__all__ = [
    "REQUEST_WHITELIST",
    "SENSITIVE_KEYS",
    "default_request_filter",
    "filter_request",
    "redact_mapping",
    "redacting_request_filter",
    "get_all_info",
    "ErrorLoggerOptions",
    "LoggerOptions",
    "build_options",
    "options_from_settings",
]
