"""Child — a named slot of a container, wrapping one element.

The child is the link between a container and an element: it knows the
element name, where its value lives in the parent HTTP payload, how to
read and write the model, and which sibling fields it depends on.

Usage::

    child = Child("name", StringElement(), filters=[TrimFilter()])
    child.set_parent(form)
    child.submit({"name": "  John "})   # True
    child.element.value()                # "John"
"""

from __future__ import annotations

import logging
import weakref
from collections.abc import Iterable
from typing import TYPE_CHECKING, Any

from formtree.http.fields import ArrayOffsetHttpFields, HttpFieldPath, HttpFields
from formtree.http.value import or_default
from formtree.transformers import NullTransformer, Transformer

if TYPE_CHECKING:
    from formtree.access import Extractor, Hydrator
    from formtree.element import ChildAggregate, Element
    from formtree.filters import Filter
    from formtree.validation.error import FormError

logger = logging.getLogger("formtree.child")


class Child:
    """A named element inside a container.

    Args:
        name: Child name, or index inside an array.
        element: The element. The child holds a copy bound to itself.
        fields: Location in the parent payload. Defaults to the key *name*.
        filters: Applied in order to the raw HTTP value.
        default: HTTP value used when the filtered value is empty.
        hydrator: Writes the element value into the parent model.
        extractor: Reads the element value from the parent model.
        dependencies: Names of sibling children submitted before this one.
        transformer: Converts between the element value and the model value.
    """

    __slots__ = (
        "__weakref__",
        "_default",
        "_dependencies",
        "_element",
        "_extractor",
        "_fields",
        "_filters",
        "_hydrator",
        "_name",
        "_parent",
        "_transformer",
    )

    def __init__(
        self,
        name: str | int,
        element: Element,
        fields: HttpFields | None = None,
        filters: Iterable[Filter] = (),
        default: Any = None,
        hydrator: Hydrator | None = None,
        extractor: Extractor | None = None,
        dependencies: Iterable[str] = (),
        transformer: Transformer | None = None,
    ) -> None:
        self._name = name
        self._fields = fields or ArrayOffsetHttpFields(name)
        self._filters = tuple(filters)
        self._default = default
        self._hydrator = hydrator
        self._extractor = extractor
        self._dependencies = tuple(dict.fromkeys(dependencies))
        self._transformer = transformer or NullTransformer.instance()
        self._parent: weakref.ref[ChildAggregate] | None = None
        self._element = element.set_container(self)

    @property
    def name(self) -> str | int:
        return self._name

    @property
    def element(self) -> Element:
        return self._element

    @property
    def parent(self) -> ChildAggregate | None:
        """The container, ``None`` before attachment or once it is released."""
        if self._parent is None:
            return None
        return self._parent()

    @property
    def dependencies(self) -> tuple[str, ...]:
        return self._dependencies

    @property
    def fields(self) -> HttpFields:
        return self._fields

    @property
    def default(self) -> Any:
        return self._default

    def set_parent(self, parent: ChildAggregate) -> Child:
        """Attach the child to *parent*.

        The first call attaches this child and returns it. Once attached,
        a new child is returned, with its own copy of the element: the
        current child stays attached to its current parent.
        """
        if self._parent is None:
            self._parent = weakref.ref(parent)
            return self

        logger.debug("Copy child %r for a new parent", self._name)
        child = Child(
            self._name,
            self._element,
            self._fields,
            self._filters,
            self._default,
            self._hydrator,
            self._extractor,
            self._dependencies,
            self._transformer,
        )
        child._parent = weakref.ref(parent)

        return child

    def submit(self, data: Any) -> bool:
        """Submit the parent payload. Returns the element validity."""
        return self._element.submit(self._extract_value(data)).valid

    def patch(self, data: Any) -> bool:
        """Patch with the parent payload.

        A field absent from the payload is patched with ``None``, keeping
        the current value.
        """
        value = (
            self._extract_value(data)
            if data is not None and self._fields.contains(data)
            else None
        )
        return self._element.patch(value).valid

    def import_(self, entity: Any) -> None:
        """Import the element value from the parent model. No-op without extractor."""
        if self._extractor is None:
            return

        value = self._extractor.extract(entity, self)
        value = self._transformer.transform_to_http(value, self._element)
        self._element.import_(value)

    def fill(self, target: Any) -> None:
        """Write the element value into the parent model. No-op without hydrator."""
        if self._hydrator is None:
            return

        value = self._element.value()
        value = self._transformer.transform_from_http(value, self._element)
        self._hydrator.hydrate(target, value, self)

    def http_fields(self) -> dict[Any, Any]:
        """The element HTTP value, as parent payload entries."""
        return self._fields.format(self._element.http_value())

    def error(self, field: HttpFieldPath | None = None) -> FormError:
        """The element error, located on the child HTTP field."""
        return self._element.error(self._fields.get(field))

    def view(self, field: HttpFieldPath | None = None) -> Any:
        return self._element.view(self._fields.get(field))

    def _extract_value(self, data: Any) -> Any:
        value = self._fields.extract(data)
        default = self._default

        for filter_ in self._filters:
            value = filter_.filter(value, self, default)

        return or_default(value, default)

    def __repr__(self) -> str:
        return f"Child({self._name!r}, {type(self._element).__name__})"
