"""Emptiness of raw HTTP values."""

from typing import Any


def is_empty(value: Any) -> bool:
    """Check if an HTTP value is empty.

    ``None``, ``""`` and empty lists, tuples and dicts are empty.
    ``0``, ``False`` and ``"0"`` are not.
    """
    if value is None or value == "":
        return True
    return isinstance(value, (list, tuple, dict)) and not value


def or_default(value: Any, default: Any) -> Any:
    """Return *default* if *value* is empty and a default is defined."""
    if default is None or not is_empty(value):
        return value
    return default
