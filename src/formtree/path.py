"""Field paths — reach another element of the same form tree.

Used by rules comparing two fields, and by custom forms::

    "password"         sibling field (same as "../password")
    "../password"      sibling field
    "./address/city"   child of the current element
    "."                the current element
    "/user/password"   absolute path, from the root form
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, ClassVar

from formtree.element import ChildAggregate, Element

if TYPE_CHECKING:
    from formtree.child.child import Child

logger = logging.getLogger("formtree.path")

SELF_ELEMENT = "."
PARENT_ELEMENT = ".."
SEPARATOR = "/"


class FieldPath:
    """A parsed field path. Use ``FieldPath.parse()``, which caches paths."""

    __slots__ = ("absolute", "parts")

    _cache: ClassVar[dict[str, FieldPath]] = {}

    def __init__(self, parts: tuple[str, ...], absolute: bool = False) -> None:
        self.parts = parts
        self.absolute = absolute

    @classmethod
    def parse(cls, path: str) -> FieldPath:
        cached = cls._cache.get(path)
        if cached is not None:
            return cached

        if path.startswith(SEPARATOR):
            parsed = cls(tuple(part for part in path[1:].split(SEPARATOR) if part), absolute=True)
        else:
            parts = path.split(SEPARATOR)
            if parts[0] == SELF_ELEMENT:
                parts = parts[1:]
            elif parts[0] != PARENT_ELEMENT:
                parts.insert(0, PARENT_ELEMENT)
            parsed = cls(tuple(part for part in parts if part))

        cls._cache[path] = parsed
        return parsed

    def resolve(self, current: Element | Child) -> Element | None:
        """Find the target element, starting from *current*.

        Returns ``None`` if the path leads nowhere.
        """
        element: Any = current if isinstance(current, Element) else current.element

        if self.absolute:
            element = element.root()

        for part in self.parts:
            if part == PARENT_ELEMENT:
                container = element.container
                element = container.parent if container is not None else None
                if element is None:
                    logger.debug("Field path %r goes above the root element", self)
                    return None
                continue

            if not isinstance(element, ChildAggregate):
                return None

            key: Any = part
            if key not in element and part.isdigit():
                key = int(part)
            if key not in element:
                logger.debug("Field path %r: no child %r", self, part)
                return None

            element = element[key].element

        return element

    def value(self, current: Element | Child) -> Any:
        """Value of the target element, ``None`` if not found."""
        element = self.resolve(current)
        return element.value() if element is not None else None

    def __str__(self) -> str:
        path = SEPARATOR.join(self.parts)
        return SEPARATOR + path if self.absolute else path

    def __repr__(self) -> str:
        return f"FieldPath({str(self)!r})"


class FieldFinder:
    """Mixin for elements looking up their own children by path.

    Relative paths start from the element itself, not from its parent.
    """

    def find_field(self, path: str) -> Element | None:
        return _child_path(path).resolve(self)  # type: ignore[arg-type]

    def find_field_value(self, path: str) -> Any:
        return _child_path(path).value(self)  # type: ignore[arg-type]


def _child_path(path: str) -> FieldPath:
    if not path.startswith((".", SEPARATOR)):
        path = "./" + path
    return FieldPath.parse(path)
