"""HTTP value filters, applied by a child before its element sees the value.

A filter is any object with ``filter(value, child, default) -> value``.
Plain callables taking ``(value, child)`` are wrapped in ``ClosureFilter``.

Children get a ``TrimFilter`` by default, and array children an
``EmptyArrayValuesFilter``.
"""

from __future__ import annotations

import html
import unicodedata
from collections.abc import Callable, Mapping
from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from formtree.child.child import Child


class Filter(Protocol):
    def filter(self, value: Any, child: Child, default: Any) -> Any: ...


def _is_trimmed(char: str) -> bool:
    category = unicodedata.category(char)
    return category.startswith("Z") or category == "Cc"


class TrimFilter:
    """Strip unicode separators and control characters around strings.

    Non-string values are returned unchanged.
    """

    __slots__ = ()

    def filter(self, value: Any, child: Child | None = None, default: Any = None) -> Any:
        if not isinstance(value, str):
            return value

        start, end = 0, len(value)
        while start < end and _is_trimmed(value[start]):
            start += 1
        while end > start and _is_trimmed(value[end - 1]):
            end -= 1

        return value[start:end]

    def __repr__(self) -> str:
        return "TrimFilter()"


class ClosureFilter:
    """Filter calling ``callback(value, child)``."""

    __slots__ = ("callback",)

    def __init__(self, callback: Callable[[Any, Any], Any]) -> None:
        self.callback = callback

    def filter(self, value: Any, child: Child | None = None, default: Any = None) -> Any:
        return self.callback(value, child)


def _empty_item(value: Any) -> bool:
    if value is None or value == "":
        return True
    return isinstance(value, (list, tuple, dict)) and not value


class EmptyArrayValuesFilter:
    """Remove empty items (``None``, ``""``, ``[]``, ``{}``) from an array.

    A list becomes a dict keyed by index, so the remaining items keep
    their position (and errors their index).
    """

    __slots__ = ()

    def filter(self, value: Any, child: Child | None = None, default: Any = None) -> Any:
        if isinstance(value, Mapping):
            return {key: item for key, item in value.items() if not _empty_item(item)}
        if isinstance(value, (list, tuple)):
            return {index: item for index, item in enumerate(value) if not _empty_item(item)}
        return value

    def __repr__(self) -> str:
        return "EmptyArrayValuesFilter()"


class HtmlFilter:
    """Escape HTML special characters of strings, and of string items of a list."""

    __slots__ = ("quote",)

    def __init__(self, quote: bool = False) -> None:
        self.quote = quote

    def filter(self, value: Any, child: Child | None = None, default: Any = None) -> Any:
        if isinstance(value, str):
            return html.escape(value, quote=self.quote)
        if isinstance(value, list):
            return [self.filter(item) for item in value]
        if isinstance(value, Mapping):
            return {key: self.filter(item) for key, item in value.items()}
        return value


def as_filter(value: Filter | Callable[[Any, Any], Any]) -> Filter:
    """Normalise a filter. A bare callable is wrapped with ``ClosureFilter``."""
    if hasattr(value, "filter"):
        return value  # type: ignore[return-value]
    return ClosureFilter(value)
