"""Form — a container of named children of any type.

Submission order follows the declared dependencies: a child is always
submitted after the children it depends on, so its rules can read their
values. The form value is generated by a value generator (a ``dict`` by
default) and filled by the children hydrators.

Usage::

    builder = FormBuilder()
    builder.string("name").required().setter()
    builder.integer("age").min(0).setter()
    form = builder.build_element()

    form.submit({"name": "John", "age": "42"})
    form.valid      # True
    form.value()    # {"name": "John", "age": 42}
"""

from __future__ import annotations

import copy
import logging
import weakref
from collections.abc import Iterator
from typing import TYPE_CHECKING, Any, Self

from formtree.access import MappingAccessor
from formtree.aggregate.value import ValueGenerator, ValueSource
from formtree.element import ChildAggregate
from formtree.path import FieldFinder
from formtree.transformers import NullTransformer, Transformer
from formtree.validation.error import FormError
from formtree.validation.validator import NullValueValidator, ValueValidator
from formtree.view import FormView

if TYPE_CHECKING:
    from formtree.access import Accessor
    from formtree.aggregate.root import RootForm
    from formtree.child.child import Child
    from formtree.collection.tree import DependencyTree
    from formtree.element import Element
    from formtree.http.fields import HttpFieldPath

logger = logging.getLogger("formtree.aggregate")


class Form(FieldFinder, ChildAggregate):
    """A form element. Nested fields are found by path with ``find_field()``.

    Args:
        children: The children definitions. The form holds a duplicate,
            with every child attached to it.
        validator: Validates the whole form value, once every child is valid.
        transformer: Converts the HTTP payload before it reaches the children.
        generator: Creates the form value. Defaults to ``dict``.
        accessor: Model accessor used by the children getters and setters.
            Defaults to ``MappingAccessor``, matching the default ``dict`` value.
    """

    def __init__(
        self,
        children: DependencyTree,
        validator: ValueValidator | None = None,
        transformer: Transformer | None = None,
        generator: ValueSource | None = None,
        accessor: Accessor | None = None,
    ) -> None:
        self.validator = validator or NullValueValidator.instance()
        self.transformer = transformer or NullTransformer.instance()
        self.generator = generator or ValueGenerator()
        self.accessor = accessor or MappingAccessor()
        self._error = FormError.null()
        self._valid = False
        self._value: Any = None
        self._children = children.duplicate(self)
        self._root: weakref.ref[RootForm] | None = None

    # -- Submission ------------------------------------------------------------

    def submit(self, data: Any) -> Self:
        self._valid = True
        self._value = None

        data = self._transform_http_value(data)
        self._submit_to_children_and_validate(data, patch=False)

        return self

    def patch(self, data: Any) -> Self:
        self._valid = True
        self._value = None

        if data is not None:
            data = self._transform_http_value(data)

        self._submit_to_children_and_validate(data, patch=True)

        return self

    @property
    def valid(self) -> bool:
        return self._valid

    def error(self, field: HttpFieldPath | None = None) -> FormError:
        return self._error.with_field(field) if field is not None else self._error

    # -- Model -----------------------------------------------------------------

    def import_(self, entity: Any) -> Self:
        """Import the children values from *entity*, through their extractors."""
        if entity is not None:
            self.generator.attach(entity)

        self._value = entity

        for child in self._children:
            child.import_(entity)

        return self

    def attach(self, entity: Any) -> Self:
        """Fill *entity* (or an instance of a class) on the next ``value()`` call."""
        self.generator.attach(entity)
        self._value = None
        return self

    def value(self) -> Any:
        if self._value is not None:
            return self._value

        self._value = self.generator.generate(self)

        for child in self._children.reverse_iterator():
            child.fill(self._value)

        return self._value

    def http_value(self) -> Any:
        http: dict[Any, Any] = {}

        for child in self._children:
            for name, value in child.http_fields().items():
                http.setdefault(name, value)

        return self.transformer.transform_to_http(http, self)

    def root(self) -> Element:
        """The topmost element. A top form wrapped by a ``RootForm`` returns it."""
        root = super().root()

        if root is self and self._root is not None:
            return self._root() or self

        return root

    def set_root(self, root: RootForm) -> None:
        """Link the ``RootForm`` wrapping this form. The link is weak."""
        self._root = weakref.ref(root)

    def view(self, field: HttpFieldPath | None = None) -> FormView:
        return FormView(
            type=type(self).__name__,
            name=str(field) if field is not None else "",
            error=self._error.message,
            children={child.name: child.view(field) for child in self},
        )

    # -- Children --------------------------------------------------------------

    @property
    def children(self) -> DependencyTree:
        return self._children

    def __getitem__(self, name: Any) -> Child:
        return self._children[name]

    def __contains__(self, name: object) -> bool:
        return name in self._children

    def __iter__(self) -> Iterator[Child]:
        return self._children.forward_iterator()

    def __len__(self) -> int:
        return len(self._children)

    def __repr__(self) -> str:
        return f"Form({[child.name for child in self._children]!r})"

    # -- Internals -------------------------------------------------------------

    def _rebind(self) -> None:
        self._root = None
        self.generator = copy.copy(self.generator)
        self._children = self._children.duplicate(self)

    def _transform_http_value(self, data: Any) -> Any:
        try:
            return self.transformer.transform_from_http(data, self)
        except Exception as exc:
            logger.debug("Form payload transformation failed: %s", exc)
            self._error = self.validator.on_transformer_exception(exc, data, self)
            self._valid = self._error.is_empty

            for child in self._children:
                child.element.import_(None)

            return None

    def _submit_to_children_and_validate(self, data: Any, *, patch: bool) -> None:
        if not self._submit_to_children(data, patch=patch):
            return

        # The value is generated only when a rule needs it
        self._error = (
            self.validator.validate(self.value(), self)
            if self.validator.has_constraints()
            else FormError.null()
        )
        self._valid = self._error.is_empty

    def _submit_to_children(self, data: Any, *, patch: bool) -> bool:
        if not self._valid:
            return False

        errors: dict[Any, FormError] = {}

        for child in self._children.reverse_iterator():
            submitted = child.patch(data) if patch else child.submit(data)
            if not submitted:
                self._valid = False
                errors[child.name] = child.error()

        if not self._valid:
            self._error = FormError.aggregate(errors)
            return False

        return True
