# src/reqlog/core/logging/filters.py
"""
Logging filters

RedactFilter masks secrets on LogRecords before they reach a formatter.

Request events logged through `LoggerTransport` carry their metadata as
`record.meta` (a dict: `{"req": {...}}`, plus exception diagnostics for errors).
The filtered request keeps whole `headers` and `query` mappings, so an
`Authorization` header or a `?token=` parameter would otherwise end up in the
log output. The filter:

  - replaces any top-level record attribute whose name is sensitive
    (e.g. `logger.info("...", extra={"password": ...})`);
  - replaces sensitive keys anywhere inside `record.meta`, case-insensitively,
    without mutating the dict the transport was given.

It always returns True; it annotates, it never drops.

Installed through dictConfig by builder.py:

    "filters": {"redact": {"()": RedactFilter}},
    "handlers": {"console": {..., "filters": ["redact"]}}

Extra keys can be passed from dictConfig too:

    "filters": {"redact": {"()": RedactFilter, "extra_keys": ["x-tenant-secret"]}}
"""

import logging
from collections.abc import Iterable
from logging import LogRecord

from ..request_filter import REDACTED, SENSITIVE_KEYS, redact_mapping


class RedactFilter(logging.Filter):
    SENSITIVE = SENSITIVE_KEYS

    def __init__(self, name: str = "", extra_keys: Iterable[str] | None = None):
        super().__init__(name)
        self.keys = {k.lower() for k in self.SENSITIVE} | {k.lower() for k in (extra_keys or ())}

    def filter(self, record: LogRecord) -> bool:
        for key in list(record.__dict__.keys()):
            if key.lower() in self.keys:
                record.__dict__[key] = REDACTED

        meta = getattr(record, "meta", None)
        if meta is not None:
            record.meta = redact_mapping(meta, self.keys)
        return True


__all__ = ["RedactFilter"]
