"""Element base classes.

Every form part is an ``Element``: leaves (string, integer...), forms and
arrays. Containers of named children are ``ChildAggregate`` elements.

An element is attached to its parent through a ``Child``, its
*container*. Elements are never shared between two containers:
``set_container()`` returns a bound copy, so a form definition can be
embedded or reused any number of times.

Back-references (element to container, child to parent) are weak: a
form tree is owned from the top, and dropping the top form releases it.
"""

from __future__ import annotations

import copy
import weakref
from abc import ABC, abstractmethod
from collections.abc import Iterator
from typing import TYPE_CHECKING, Any, Self

from formtree.errors import InvalidOperation

if TYPE_CHECKING:
    from formtree.child.child import Child
    from formtree.http.fields import HttpFieldPath
    from formtree.validation.error import FormError


class Element(ABC):
    """A form element: receives HTTP data, holds a value and an error.

    Lifecycle::

        element.submit(http_data)   # or patch() / import_(value)
        element.valid               # True once submitted without error
        element.value()             # the model value
        element.http_value()        # the value, formatted for HTTP
        element.error()             # FormError, empty if valid
    """

    _container: weakref.ref[Child] | None = None

    @property
    def container(self) -> Child | None:
        """The child holding this element, ``None`` for a root element."""
        if self._container is None:
            return None
        return self._container()

    def set_container(self, container: Child) -> Self:
        """Return a copy of the element bound to *container*.

        The current element is left untouched.
        """
        element = copy.copy(self)
        element._container = weakref.ref(container)
        element._rebind()
        return element

    def _rebind(self) -> None:
        """Hook called on the copy made by ``set_container()``."""

    def root(self) -> Element:
        """The topmost element, reached through containers."""
        container = self.container
        parent = container.parent if container is not None else None

        return parent.root() if parent is not None else self

    @abstractmethod
    def submit(self, data: Any) -> Self:
        """Submit HTTP data: transform, validate, and store the value."""

    @abstractmethod
    def patch(self, data: Any) -> Self:
        """Like ``submit()``, but a ``None`` value keeps the current value."""

    @abstractmethod
    def import_(self, entity: Any) -> Self:
        """Set the model value, without validation."""

    @abstractmethod
    def value(self) -> Any: ...

    @abstractmethod
    def http_value(self) -> Any: ...

    @property
    @abstractmethod
    def valid(self) -> bool: ...

    @abstractmethod
    def error(self, field: HttpFieldPath | None = None) -> FormError:
        """The submission error, located on *field* when given."""

    @abstractmethod
    def view(self, field: HttpFieldPath | None = None) -> Any:
        """Rendering state of the element (see ``formtree.view``)."""


class ChildAggregate(Element):
    """An element made of named children.

    Children are read with the item API (``form["name"]``) and iterated
    in display order. The item API is read-only: children are defined
    by the builder, and values go through ``submit()`` or ``import_()``.
    """

    @abstractmethod
    def __getitem__(self, name: Any) -> Child: ...

    @abstractmethod
    def __contains__(self, name: object) -> bool: ...

    @abstractmethod
    def __iter__(self) -> Iterator[Child]: ...

    @abstractmethod
    def __len__(self) -> int: ...

    def __setitem__(self, name: Any, value: Any) -> None:
        msg = f"{type(self).__name__} children are read-only, use submit() or import_()"
        raise InvalidOperation(msg)

    def __delitem__(self, name: Any) -> None:
        msg = f"{type(self).__name__} children are read-only, use submit() or import_()"
        raise InvalidOperation(msg)
