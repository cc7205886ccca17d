"""Element views — the rendering state of a submitted (or imported) form.

``form.view()`` returns a tree of frozen views, ready to be passed to a
template. Views hold HTTP field names and HTTP values, the error
message of each element, and its normalised rules::

    view = form.view()
    view["name"].name         # "name"
    view["name"].value        # "John"
    view["name"].error        # None
    view["name"].required     # True
    view["tags"][0].name      # "tags[0]"
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from formtree.validation.validator import ValueValidator

_EMPTY: Mapping[str, Any] = MappingProxyType({})


def normalize_rules(validator: ValueValidator) -> Mapping[str, Mapping[str, Any]]:
    """Rules of a validator, by name, with their options."""
    rules = getattr(validator, "rules", ())
    return MappingProxyType({rule.name: rule.options for rule in rules})


@dataclass(frozen=True, slots=True)
class FieldView:
    """View of a leaf element.

    Attributes:
        type: Element class name.
        name: HTTP field name.
        value: HTTP value.
        error: Global error message, ``None`` if valid.
        required: The element has a ``required`` rule.
        constraints: Rule options, by rule name.
        checked: For boolean elements, the model value.
    """

    type: str
    name: str
    value: Any
    error: str | None = None
    required: bool = False
    constraints: Mapping[str, Mapping[str, Any]] = field(default_factory=lambda: _EMPTY)
    checked: bool | None = None

    @property
    def has_error(self) -> bool:
        return self.error is not None


@dataclass(frozen=True, slots=True)
class ButtonView:
    """View of a submit button of a root form."""

    name: str
    value: str
    clicked: bool = False


@dataclass(frozen=True, slots=True)
class FormView:
    """View of a form. Children views are read with ``view[name]``.

    Buttons are set on the view of a root form only.
    """

    type: str
    name: str
    error: str | None = None
    children: Mapping[Any, Any] = field(default_factory=lambda: _EMPTY)
    buttons: Mapping[str, ButtonView] = field(default_factory=lambda: _EMPTY)

    @property
    def has_error(self) -> bool:
        return self.error is not None or any(child.has_error for child in self.children.values())

    def __getitem__(self, name: Any) -> Any:
        return self.children[name]

    def __contains__(self, name: object) -> bool:
        return name in self.children

    def __iter__(self) -> Iterator[Any]:
        return iter(self.children.values())


@dataclass(frozen=True, slots=True)
class ArrayView:
    """View of an array element. Item views are read with ``view[index]``."""

    type: str
    name: str
    value: Any
    error: str | None = None
    required: bool = False
    constraints: Mapping[str, Mapping[str, Any]] = field(default_factory=lambda: _EMPTY)
    children: Mapping[Any, Any] = field(default_factory=lambda: _EMPTY)

    @property
    def has_error(self) -> bool:
        return self.error is not None or any(child.has_error for child in self.children.values())

    def __getitem__(self, key: Any) -> Any:
        return self.children[key]

    def __iter__(self) -> Iterator[Any]:
        return iter(self.children.values())

    def __len__(self) -> int:
        return len(self.children)
