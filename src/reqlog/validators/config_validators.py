# src/reqlog/validators/config_validators.py
"""
Small normalisation helpers shared by Settings and the middleware options.
"""

from typing import Any


def to_uppercase(value: str | None) -> str | None:
    """
    Converts a string to uppercase if it's not None.
    """
    if value is None:
        return None
    return value.upper()


def to_lowercase(value: str | None) -> str | None:
    """
    Converts a string to lowercase if it's not None.
    """
    if value is None:
        return None
    return value.lower()


def has_items(value: Any) -> bool:
    """
    True when `value` is a sized, non-string collection with at least one item.

    Strings are rejected: `transports="console"` is a wiring mistake,
    not a list of one transport.
    """
    if value is None or isinstance(value, (str, bytes)):
        return False
    try:
        return len(value) > 0
    except TypeError:
        return False
