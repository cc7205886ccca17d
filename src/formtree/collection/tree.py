"""Dependency tree — the ordered collection of a form's children.

All children are aligned on ``Level`` objects:

- The root level holds children without dependants, and the newest ones
- Every child is added to the root level, unless its depth was already
  reserved by a dependant declared before it
- When a child becomes a dependency of a newly added child, it shifts to
  a deeper level, recursively with its own dependencies. It leaves its
  previous slot, whatever level held it
- A dependency can be named before it is added: its depth is reserved
- Dependency cycles are rejected with ``ConfigurationError``

Example::

    add(E1())       -> lvl0(E1)
    add(E2())       -> lvl0(E1, E2)
    add(E3(E2))     -> lvl0(E1, E3), lvl1(E2)
    add(E4(E2, E3)) -> lvl0(E1, E4), lvl1(E3), lvl2(E2)

Submission iterates from the deepest level to the root, so a child is
always submitted after everything it depends on.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from types import MappingProxyType
from typing import TYPE_CHECKING

from formtree.collection.level import Level
from formtree.errors import ConfigurationError

if TYPE_CHECKING:
    from formtree.child.child import Child
    from formtree.element import ChildAggregate

logger = logging.getLogger("formtree.collection")


def iterate_levels(
    children: Mapping[str, Child],
    first: Level,
    *,
    reverse: bool = True,
) -> Iterator[Child]:
    """Walk the levels starting at *first* and yield registered children.

    Names reserved on a level but absent from *children* are skipped, so
    are empty levels, however many of them follow each other.

    Args:
        children: The registered children, by name.
        first: The level to start from.
        reverse: Walk towards the root level (``prev``) when true,
            towards deeper levels (``next``) otherwise.
    """
    level: Level | None = first

    while level is not None:
        for name, _dependencies in level:
            child = children.get(name)
            if child is not None:
                yield child

        level = level.prev if reverse else level.next


class DependencyTree:
    """Children of a container, ordered by their declared dependencies.

    Usage::

        tree = DependencyTree()
        tree.add(Child("password", StringElement()))
        tree.add(Child("confirm", StringElement(), dependencies=["password"]))

        [c.name for c in tree.reverse_iterator()]  # ["password", "confirm"]
        [c.name for c in tree.forward_iterator()]  # ["confirm", "password"]
    """

    __slots__ = ("_children", "_depth", "_last", "_root")

    def __init__(self) -> None:
        self._children: dict[str, Child] = {}
        self._root = Level()
        self._last = self._root
        # Level of each known name. A name can be known before being
        # added, when it is declared as a dependency.
        self._depth: dict[str, int] = {}

    @property
    def depth(self) -> Mapping[str, int]:
        """Read-only view of the level number of every known name."""
        return MappingProxyType(self._depth)

    def add(self, child: Child) -> None:
        """Register a child, and shift its dependencies deeper.

        Re-adding a name replaces the child but keeps its level.

        Raises:
            ConfigurationError: If the dependencies form a cycle.
        """
        name = child.name
        self._children[name] = child

        level = self._level(name)
        self._depth[name] = level.number

        for dependency in level.place(name, child.dependencies):
            self._sink(dependency, level, (name,))

        self._last = self._root.last or self._root

    def has(self, name: str) -> bool:
        return name in self._children

    def remove(self, name: str) -> bool:
        """Remove a child. Returns ``False`` if it was not registered.

        A child still used as a dependency keeps its slot (and so the
        position of its dependants), only its own dependencies are dropped.
        """
        if name not in self._children:
            return False

        level = self._level(name)

        if level.number == 0:
            level.remove(name)
            del self._depth[name]
        else:
            level.reset(name)

        del self._children[name]

        return True

    def all(self) -> dict[str, Child]:
        """All children by name, in insertion order."""
        return dict(self._children)

    def reverse_iterator(self) -> Iterator[Child]:
        """Dependencies first: deepest level to the root level.

        This is the submission order.
        """
        return iterate_levels(dict(self._children), self._deepest(), reverse=True)

    def forward_iterator(self) -> Iterator[Child]:
        """Root level to the deepest level. This is the display order."""
        return iterate_levels(dict(self._children), self._root, reverse=False)

    def duplicate(self, new_parent: ChildAggregate) -> DependencyTree:
        """Copy the collection with every child re-parented to *new_parent*.

        The current collection and its children are left untouched. The
        level chain is shared: re-parenting does not change the order.
        """
        collection = DependencyTree.__new__(DependencyTree)
        collection._root = self._root
        collection._last = self._last
        collection._depth = dict(self._depth)
        collection._children = {
            name: child.set_parent(new_parent) for name, child in self._children.items()
        }

        return collection

    def __contains__(self, name: object) -> bool:
        return name in self._children

    def __getitem__(self, name: str) -> Child:
        return self._children[name]

    def __setitem__(self, name: str, child: Child) -> None:
        self.add(child)

    def __delitem__(self, name: str) -> None:
        self.remove(name)

    def __iter__(self) -> Iterator[Child]:
        return iter(list(self._children.values()))

    def __len__(self) -> int:
        return len(self._children)

    def __repr__(self) -> str:
        return f"DependencyTree({list(self._children)!r})"

    def _deepest(self) -> Level:
        level = self._last
        while level.next is not None:
            level = level.next
        return level

    def _level(self, name: str) -> Level:
        """The level *name* belongs to: its reserved depth, or the root."""
        target = self._depth.get(name)
        level = self._root

        if target is None:
            return level

        while target > level.number and level.next is not None:
            level = level.next

        return level

    def _sink(self, name: str, dependant: Level, chain: tuple[str, ...]) -> None:
        """Move *name* below *dependant*, with its own dependencies.

        A name already registered deeper than *dependant* is resolved and
        stays where it is. A name registered on a shallower or equal level
        leaves its slot, so every name keeps exactly one slot. An unknown
        name gets its depth reserved.

        Args:
            name: The dependency to move.
            dependant: The level of the child depending on *name*.
            chain: The names being moved, from the added child down to
                the dependant of *name*.
        """
        if name in chain:
            msg = f"Circular dependency between children: {' -> '.join((*chain, name))}"
            raise ConfigurationError(msg)

        current = self._depth.get(name)

        if current is not None and current > dependant.number:
            return

        dependencies = self._level(name).pop(name) if current is not None else []
        level = dependant.descend()

        logger.debug("Move %r from level %s to level %d", name, current, level.number)

        level.place(name, dependencies)
        self._depth[name] = level.number

        for dependency in dependencies:
            self._sink(dependency, level, (*chain, name))
