"""Property access — move values between a form and its model.

A form child reads the model with an *extractor* (on ``import_()``) and
writes it with a *hydrator* (on ``value()``). The built-in ones are
``Getter`` and ``Setter``, which go through the accessor of the parent
form:

- ``MappingAccessor``: the model is a dict, property paths are keys
- ``RecordAccessor``: the model is an object, property paths are attributes

The accessor is chosen when the form is defined: ``FormBuilder.generates()``
with a class or object that is not a mapping selects ``RecordAccessor``.
Dotted paths (``"address.city"``) reach nested values.

Usage::

    builder.string("name").getter().setter()
    builder.string("city").getter("address.city").setter("address.city")
    builder.integer("age").setter(lambda value, child: value or 0)
"""

from __future__ import annotations

from collections.abc import Callable, Mapping, MutableMapping
from typing import TYPE_CHECKING, Any, Literal, Protocol, TypeAlias

if TYPE_CHECKING:
    from formtree.child.child import Child

Mode: TypeAlias = Literal["hydration", "extraction"]

HYDRATION: Mode = "hydration"
EXTRACTION: Mode = "extraction"


class Accessor(Protocol):
    def get(self, target: Any, path: str) -> Any: ...

    def set(self, target: Any, path: str, value: Any) -> None: ...


class MappingAccessor:
    """Access dict keys. Missing intermediate dicts are created on write."""

    __slots__ = ()

    def get(self, target: Any, path: str) -> Any:
        for part in path.split("."):
            if not isinstance(target, Mapping):
                return None
            target = target.get(part)
        return target

    def set(self, target: Any, path: str, value: Any) -> None:
        *parents, last = path.split(".")

        for part in parents:
            child = target.get(part)
            if not isinstance(child, MutableMapping):
                child = target[part] = {}
            target = child

        target[last] = value

    def __repr__(self) -> str:
        return "MappingAccessor()"


class RecordAccessor:
    """Access object attributes."""

    __slots__ = ()

    def get(self, target: Any, path: str) -> Any:
        for part in path.split("."):
            if target is None:
                return None
            target = getattr(target, part, None)
        return target

    def set(self, target: Any, path: str, value: Any) -> None:
        *parents, last = path.split(".")

        for part in parents:
            target = getattr(target, part)

        setattr(target, last, value)

    def __repr__(self) -> str:
        return "RecordAccessor()"


def accessor_for(value: Any) -> Accessor:
    """The accessor matching a model value, or a model class."""
    if isinstance(value, type):
        return MappingAccessor() if issubclass(value, Mapping) else RecordAccessor()
    if value is None or isinstance(value, Mapping):
        return MappingAccessor()
    return RecordAccessor()


ValueTransformer: TypeAlias = Callable[[Any, Any], Any]
CustomAccessor: TypeAlias = Callable[[Any, Any, Mode, "AbstractAccessor"], Any]


class AbstractAccessor:
    """Common base of ``Getter`` and ``Setter``.

    Args:
        property_name: Path of the model property. Defaults to the child
            name. A callable given here is taken as the *transformer*.
        transformer: ``(value, child) -> value``, applied to the value
            read from the model, or before writing to it.
        custom_accessor: ``(target, value, mode, accessor) -> value``,
            replaces the property accessor.
    """

    __slots__ = ("custom_accessor", "property_name", "transformer")

    def __init__(
        self,
        property_name: str | ValueTransformer | None = None,
        transformer: ValueTransformer | CustomAccessor | None = None,
        custom_accessor: CustomAccessor | None = None,
    ) -> None:
        if callable(property_name):
            custom_accessor = transformer  # type: ignore[assignment]
            transformer = property_name
            property_name = None

        self.property_name = property_name
        self.transformer = transformer
        self.custom_accessor = custom_accessor

    def path(self, child: Child) -> str:
        return self.property_name if self.property_name is not None else str(child.name)

    @staticmethod
    def accessor(child: Child, target: Any) -> Accessor:
        """The accessor chosen by the parent form.

        A child outside of any form (detached, or an array item) has no
        declared accessor and uses the one matching *target*.
        """
        accessor = getattr(child.parent, "accessor", None)
        return accessor if accessor is not None else accessor_for(target)


class Getter(AbstractAccessor):
    """Extractor reading the model property. Reading from ``None`` gives ``None``."""

    __slots__ = ()

    def extract(self, source: Any, child: Child) -> Any:
        if self.custom_accessor is not None:
            value = self.custom_accessor(source, None, EXTRACTION, self)
        elif source is None:
            value = None
        else:
            value = self.accessor(child, source).get(source, self.path(child))

        if self.transformer is not None:
            value = self.transformer(value, child)

        return value


class Setter(AbstractAccessor):
    """Hydrator writing the model property."""

    __slots__ = ()

    def hydrate(self, target: Any, value: Any, child: Child) -> None:
        if self.transformer is not None:
            value = self.transformer(value, child)

        if self.custom_accessor is not None:
            self.custom_accessor(target, value, HYDRATION, self)
        else:
            self.accessor(child, target).set(target, self.path(child), value)


class Extractor(Protocol):
    def extract(self, source: Any, child: Child) -> Any: ...


class Hydrator(Protocol):
    def hydrate(self, target: Any, value: Any, child: Child) -> None: ...
