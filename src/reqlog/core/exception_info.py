# src/reqlog/core/exception_info.py
"""
Exception diagnostics for the error logger.

`get_all_info(exc)` gathers everything worth knowing about a failure into one
JSON-friendly dict:

    {
        "date": "2026-10-19T10:31:04.512301+00:00",
        "process": {"pid": ..., "uid": ..., "gid": ..., "cwd": ..., "executable": ...,
                    "version": ..., "argv": [...], "memory": {"max_rss": ...}},
        "os": {"loadavg": [0.1, 0.2, 0.3], "uptime": 12.5},
        "trace": [{"column": None, "file": ..., "function": ..., "line": ...,
                   "method": None, "native": False}, ...],
        "stack": ["Traceback (most recent call last):", ...],
    }

The error middleware adds the filtered request under "req" before handing the
dict to the transports.
"""

import os
import sys
import time
import traceback
from datetime import datetime, timezone
from typing import Any

_STARTED_AT = time.monotonic()


def get_process_info() -> dict[str, Any]:
    info: dict[str, Any] = {
        "pid": os.getpid(),
        "uid": os.getuid() if hasattr(os, "getuid") else None,
        "gid": os.getgid() if hasattr(os, "getgid") else None,
        "cwd": os.getcwd(),
        "executable": sys.executable,
        "version": sys.version.split()[0],
        "argv": list(sys.argv),
        "memory": {"max_rss": None},
    }
    # `resource` only exists on POSIX platforms
    if sys.platform != "win32":
        import resource

        info["memory"]["max_rss"] = resource.getrusage(resource.RUSAGE_SELF).ru_maxrss
    return info


def get_os_info() -> dict[str, Any]:
    loadavg = list(os.getloadavg()) if hasattr(os, "getloadavg") else None
    return {
        "loadavg": loadavg,
        "uptime": round(time.monotonic() - _STARTED_AT, 3),
    }


def get_trace(exc: BaseException) -> list[dict[str, Any]]:
    """
    One entry per traceback frame, innermost last.

    `method` is the class name when the frame belongs to a method call (first
    argument named `self` or `cls`), otherwise None.
    """
    trace = []
    for frame, lineno in traceback.walk_tb(exc.__traceback__):
        code = frame.f_code
        owner = frame.f_locals.get("self", frame.f_locals.get("cls"))
        method = None
        if owner is not None:
            method = owner.__name__ if isinstance(owner, type) else type(owner).__name__
        trace.append({
            "column": None,
            "file": code.co_filename,
            "function": code.co_name,
            "line": lineno,
            "method": method,
            "native": False,
        })
    return trace


def get_stack(exc: BaseException) -> list[str]:
    text = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
    return text.rstrip("\n").split("\n")


def get_all_info(exc: BaseException) -> dict[str, Any]:
    return {
        "date": datetime.now(timezone.utc).isoformat(),
        "process": get_process_info(),
        "os": get_os_info(),
        "trace": get_trace(exc),
        "stack": get_stack(exc),
    }


__all__ = ["get_all_info", "get_process_info", "get_os_info", "get_trace", "get_stack"]
