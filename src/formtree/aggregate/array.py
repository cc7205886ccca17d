"""Array element — a variable number of values sharing one definition.

Each item is held by a child created from the template element, named
after its key in the submitted payload (an index for lists). Items
whose value ends up ``None`` are dropped, unless they failed: a failing
item is always kept, so its error can be displayed.

Usage::

    builder.array("tags").string().configure(lambda tags: tags.count(max=5))

    form.submit({"tags": ["a", "", "b"]})
    form["tags"].element.value()   # {0: "a", 2: "b"}
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Mapping
from typing import TYPE_CHECKING, Any, Self

from formtree.child.child import Child
from formtree.element import ChildAggregate, Element
from formtree.transformers import NullTransformer, Transformer
from formtree.validation.error import FormError
from formtree.validation.validator import NullValueValidator, ValueValidator
from formtree.view import ArrayView, normalize_rules

if TYPE_CHECKING:
    from formtree.http.fields import HttpFieldPath

logger = logging.getLogger("formtree.aggregate")


def _items(data: Any) -> Iterable[tuple[Any, Any]]:
    if data is None:
        return ()
    if isinstance(data, Mapping):
        return data.items()
    if isinstance(data, (list, tuple)):
        return enumerate(data)
    return ((0, data),)


class ArrayElement(ChildAggregate):
    """Array of elements built from *template*.

    Args:
        template: Element copied for every item.
        transformer: Converts the HTTP value of the whole array.
        validator: Validates the array value (a dict of item values).
    """

    def __init__(
        self,
        template: Element,
        transformer: Transformer | None = None,
        validator: ValueValidator | None = None,
    ) -> None:
        self.template = template
        self.transformer = transformer or NullTransformer.instance()
        self.validator = validator or NullValueValidator.instance()
        self._valid = False
        self._error = FormError.null()
        self._children: dict[Any, Child] = {}

    # -- Submission ------------------------------------------------------------

    def submit(self, data: Any) -> Self:
        self._valid = True
        self._children = {}

        try:
            data = self.transformer.transform_from_http(data, self)
        except Exception as exc:
            self._error = self.validator.on_transformer_exception(exc, data, self)
            self._valid = self._error.is_empty
            if not self._valid:
                return self
            data = None

        errors: dict[Any, FormError] = {}

        for key, item in _items(data):
            child = Child(key, self.template).set_parent(self)
            element = child.element.submit(item)

            if not element.valid:
                self._valid = False
                self._children[key] = child
                errors[key] = child.error()
                continue

            if element.value() is None:
                logger.debug("Drop empty array item %r", key)
                continue

            self._children[key] = child

        self._validate(errors)

        return self

    def patch(self, data: Any) -> Self:
        if data is not None:
            return self.submit(data)

        self._valid = True
        errors: dict[Any, FormError] = {}

        for key, child in self._children.items():
            if not child.element.patch(None).valid:
                self._valid = False
                errors[key] = child.error()

        self._validate(errors)

        return self

    @property
    def valid(self) -> bool:
        return self._valid

    def error(self, field: HttpFieldPath | None = None) -> FormError:
        return self._error.with_field(field) if field is not None else self._error

    # -- Model -----------------------------------------------------------------

    def import_(self, entity: Any) -> Self:
        """Replace the items by the values of *entity*, a list or a mapping.

        ``None`` values are kept.

        Raises:
            TypeError: If *entity* is not iterable.
        """
        if entity is None:
            entity = []
        elif isinstance(entity, (str, bytes)) or not isinstance(entity, Iterable):
            msg = f"The import_()'ed value of a {type(self).__name__} must be iterable or None"
            raise TypeError(msg)

        items = entity.items() if isinstance(entity, Mapping) else enumerate(entity)
        self._children = {}

        for key, value in items:
            child = Child(key, self.template).set_parent(self)
            child.element.import_(value)
            self._children[key] = child

        return self

    def value(self) -> dict[Any, Any]:
        return {key: child.element.value() for key, child in self._children.items()}

    def http_value(self) -> Any:
        http = {key: child.element.http_value() for key, child in self._children.items()}
        return self.transformer.transform_to_http(http, self)

    def view(self, field: HttpFieldPath | None = None) -> ArrayView:
        rules = normalize_rules(self.validator)
        return ArrayView(
            type=type(self).__name__,
            name=str(field) if field is not None else "",
            value=self.http_value(),
            error=self._error.message,
            required="required" in rules,
            constraints=rules,
            children={key: child.view(field) for key, child in self._children.items()},
        )

    # -- Children --------------------------------------------------------------

    def __getitem__(self, key: Any) -> Child:
        return self._children[key]

    def __contains__(self, key: object) -> bool:
        return key in self._children

    def __iter__(self) -> Iterator[Child]:
        return iter(list(self._children.values()))

    def __len__(self) -> int:
        return len(self._children)

    def __repr__(self) -> str:
        return f"ArrayElement({self.value()!r})"

    # -- Internals -------------------------------------------------------------

    def _rebind(self) -> None:
        self._children = {key: child.set_parent(self) for key, child in self._children.items()}

    def _validate(self, errors: dict[Any, FormError]) -> None:
        if not self._valid:
            self._error = FormError.aggregate(errors)
            return

        self._error = self.validator.validate(self.value(), self)
        self._valid = self._error.is_empty
