"""Dependency levels — the layering behind submission order.

Fields are laid out on a chain of levels. Level 0 holds the newest
fields and every field nothing depends on; each time a field becomes a
dependency of a field on level N, it moves to level N + 1, carrying its
own dependencies one level further. The chain is built incrementally,
one ``add()`` at a time, and never shrinks.

Example::

    root = Level()
    root.add("e1", [])            # lvl0(e1)
    root.add("e2", ["e1"])        # lvl0(e2), lvl1(e1)
    root.add("e3", ["e2"])        # lvl0(e3), lvl1(e2), lvl2(e1)
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator

logger = logging.getLogger("formtree.collection")


class Level:
    """One depth bucket of the dependency layering.

    Maps each field name assigned to the level to the dependency names
    it declared. Internal to ``DependencyTree``.
    """

    __slots__ = ("_elements", "_last", "_next", "_number", "_prev")

    def __init__(self, prev: Level | None = None, number: int = 0) -> None:
        self._prev = prev
        self._number = number
        self._next: Level | None = None
        self._last: Level | None = None
        self._elements: dict[str, list[str]] = {}

    @property
    def number(self) -> int:
        """Depth of the level. 0 is the root level."""
        return self._number

    @property
    def prev(self) -> Level | None:
        """The shallower level (n - 1), ``None`` on the root level."""
        return self._prev

    @property
    def next(self) -> Level | None:
        """The deeper level (n + 1), created on the first shift."""
        return self._next

    @property
    def last(self) -> Level | None:
        """The deepest level reachable from this one.

        ``None`` if nothing was ever shifted from this level.
        """
        return self._last

    def add(self, name: str, dependencies: Iterable[str]) -> dict[str, int]:
        """Register *name* on this level and push its dependencies deeper.

        Every dependency is shifted to the next level, even if it is not
        registered yet: this reserves its depth for a later ``add()``.

        Returns:
            The new level number of every moved name, in the order the
            moves happened. Used to update the tree depth index.
        """
        dependencies = self.place(name, dependencies)
        result = {name: self._number}

        for dependency in dependencies:
            result.update(self.shift(dependency))

        return result

    def place(self, name: str, dependencies: Iterable[str]) -> list[str]:
        """Record the slot of *name* without moving anything.

        An existing slot keeps its position, only its dependencies change.
        """
        dependencies = list(dependencies)
        self._elements[name] = dependencies
        return dependencies

    def pop(self, name: str) -> list[str]:
        """Remove the slot of *name* and return its recorded dependencies."""
        return self._elements.pop(name, [])

    def has(self, name: str) -> bool:
        """Check if *name* is assigned to this level."""
        return name in self._elements

    def descend(self) -> Level:
        """The next level, created (and linked as ``last``) on first use."""
        if self._next is None:
            self._next = Level(self, self._number + 1)

            level: Level | None = self
            while level is not None:
                level._last = self._next
                level = level._prev

        return self._next

    def shift(self, name: str) -> dict[str, int]:
        """Move *name* to the next level (the element becomes a dependency).

        Its recorded dependencies move along, one level further.

        Returns:
            Same as ``add()``.
        """
        following = self.descend()
        dependencies = self.pop(name)

        logger.debug("Shift %r from level %d to level %d", name, self._number, following.number)
        return following.add(name, dependencies)

    def reset(self, name: str) -> None:
        """Drop the dependencies of *name*, keeping its slot."""
        if name in self._elements:
            self._elements[name] = []

    def remove(self, name: str) -> None:
        """Delete the slot of *name*."""
        self._elements.pop(name, None)

    def __iter__(self) -> Iterator[tuple[str, list[str]]]:
        return iter(list(self._elements.items()))

    def __repr__(self) -> str:
        return f"Level({self._number}, {list(self._elements)!r})"
