"""HTTP field strategies — where a child lives in the submitted payload.

A child reads its slice of the parent payload through an ``HttpFields``
strategy, and writes its HTTP value back through the same strategy:

- ``ArrayOffsetHttpFields``: the child is stored under its own key
  (``user[name]``). This is the default.
- ``PrefixedHttpFields``: an embedded form is flattened into its parent
  payload, every field name carrying a prefix (``address_city``).

``HttpFieldPath`` builds the full field names used in error reports and
views, like ``user[address_city]`` or ``tags[0]``.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Protocol, runtime_checkable


class HttpFieldPath:
    """Immutable builder of HTTP field names.

    Usage::

        path = HttpFieldPath.named("user")
        str(path.add("name"))                 # "user[name]"
        str(path.prefix("addr_").add("city")) # "user[addr_city]"
    """

    __slots__ = ("_path", "_prefix")

    _empty: HttpFieldPath | None = None

    def __init__(self, path: str = "", prefix: str = "") -> None:
        self._path = path
        self._prefix = prefix

    def add(self, name: str | int) -> HttpFieldPath:
        """Append a field name. The pending prefix is consumed."""
        name = f"{self._prefix}{name}"
        return HttpFieldPath(f"{self._path}[{name}]" if self._path else name)

    def prefix(self, prefix: str) -> HttpFieldPath:
        """Add a prefix to the next field name."""
        return HttpFieldPath(self._path, self._prefix + prefix)

    def concat(self, other: HttpFieldPath) -> HttpFieldPath:
        """Append another path, the same way as its first segment was added."""
        if not other.get():
            return self

        head, sep, tail = other._path.partition("[")
        path = self.add(head) if head else self
        if sep:
            path = HttpFieldPath(f"{path._path}[{tail}", other._prefix)
        elif other._prefix:
            path = path.prefix(other._prefix)
        return path

    def get(self) -> str:
        if not self._path:
            return self._prefix
        if not self._prefix:
            return self._path
        return f"{self._path}[{self._prefix}]"

    @classmethod
    def empty(cls) -> HttpFieldPath:
        """The shared empty path."""
        if cls._empty is None:
            cls._empty = cls()
        return cls._empty

    @classmethod
    def named(cls, name: str | int) -> HttpFieldPath:
        return cls(str(name))

    @classmethod
    def prefixed(cls, prefix: str) -> HttpFieldPath:
        return cls("", prefix)

    def __str__(self) -> str:
        return self.get()

    def __repr__(self) -> str:
        return f"HttpFieldPath({self.get()!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, HttpFieldPath):
            return NotImplemented
        return self._path == other._path and self._prefix == other._prefix

    def __hash__(self) -> int:
        return hash((self._path, self._prefix))


@runtime_checkable
class HttpFields(Protocol):
    """Strategy mapping a child to its slice of the parent payload."""

    def extract(self, data: Any) -> Any:
        """Read the child value from the parent payload."""
        ...

    def contains(self, data: Any) -> bool:
        """Check if the parent payload holds a value for the child."""
        ...

    def format(self, value: Any) -> dict[Any, Any]:
        """Turn the child HTTP value into parent payload entries."""
        ...

    def get(self, path: HttpFieldPath | None = None) -> HttpFieldPath:
        """The field path of the child, relative to *path*."""
        ...


class ArrayOffsetHttpFields:
    """The child value is stored under a single key of the payload."""

    __slots__ = ("offset",)

    def __init__(self, offset: str | int) -> None:
        self.offset = offset

    def extract(self, data: Any) -> Any:
        if not isinstance(data, Mapping):
            return None
        return data.get(self.offset)

    def contains(self, data: Any) -> bool:
        return isinstance(data, Mapping) and data.get(self.offset) is not None

    def format(self, value: Any) -> dict[Any, Any]:
        return {self.offset: value}

    def get(self, path: HttpFieldPath | None = None) -> HttpFieldPath:
        return HttpFieldPath.named(self.offset) if path is None else path.add(self.offset)

    def __repr__(self) -> str:
        return f"ArrayOffsetHttpFields({self.offset!r})"


class PrefixedHttpFields:
    """The child value is spread on the parent payload, under a prefix.

    Used to embed a form without nesting: the ``city`` field of an
    ``address`` embedded with the prefix ``"address_"`` is submitted as
    ``address_city``. An empty prefix shares the parent payload as is.
    """

    __slots__ = ("prefix",)

    def __init__(self, prefix: str = "") -> None:
        self.prefix = prefix

    def extract(self, data: Any) -> dict[Any, Any]:
        if not isinstance(data, Mapping):
            return {}

        if not self.prefix:
            return dict(data)

        size = len(self.prefix)
        return {
            name[size:]: value
            for name, value in data.items()
            if isinstance(name, str) and name.startswith(self.prefix)
        }

    def contains(self, data: Any) -> bool:
        # Absent fields can not be distinguished from an empty embedded form
        return True

    def format(self, value: Any) -> dict[Any, Any]:
        if not isinstance(value, Mapping):
            return {}
        return {f"{self.prefix}{name}": item for name, item in value.items()}

    def get(self, path: HttpFieldPath | None = None) -> HttpFieldPath:
        return HttpFieldPath.prefixed(self.prefix) if path is None else path.prefix(self.prefix)

    def __repr__(self) -> str:
        return f"PrefixedHttpFields({self.prefix!r})"
