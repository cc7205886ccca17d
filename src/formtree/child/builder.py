"""Child builder — the definition of a named child.

Returned by ``FormBuilder.add()`` and the typed shortcuts
(``string()``, ``integer()``...). Child options (default value, filters,
dependencies, model access) are set on the child builder; element
options are set on the element builder, reachable with ``configure()``::

    builder.string("name").required().setter().configure(
        lambda element: element.length(max=50)
    )

The most common element options are also available directly:
``required()``, ``satisfy()``, ``transformer()`` and ``value()``.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any, Generic, Self, TypeAlias, TypeVar

from formtree.access import Getter, Setter
from formtree.child.child import Child
from formtree.filters import TrimFilter
from formtree.http.fields import ArrayOffsetHttpFields, HttpFields, PrefixedHttpFields
from formtree.transformers import aggregate

if TYPE_CHECKING:
    from formtree.access import Extractor, Hydrator
    from formtree.builder import AbstractElementBuilder
    from formtree.filters import Filter
    from formtree.registry import Registry
    from formtree.transformers import Transformer
    from formtree.validation.rules import Rule

ChildFactory: TypeAlias = Callable[..., Child]

B = TypeVar("B", bound="AbstractElementBuilder")


class ChildBuilder(Generic[B]):
    """Definition of a child wrapping the element built by *element_builder*."""

    def __init__(
        self,
        name: str,
        element_builder: B,
        registry: Registry | None = None,
    ) -> None:
        self._name = name
        self._element_builder = element_builder
        self._registry = registry or element_builder.registry
        self._default: Any = None
        self._filters: list[Any] = []
        self._dependencies: dict[str, None] = {}
        self._fields: HttpFields | None = None
        self._hydrator: Hydrator | None = None
        self._extractor: Extractor | None = None
        self._transformers: list[Any] = []
        self._factory: ChildFactory = Child
        self._trim = self._registry.config.trim

    @property
    def name(self) -> str:
        return self._name

    @property
    def element_builder(self) -> B:
        return self._element_builder

    # -- Child options ---------------------------------------------------------

    def default(self, default: Any) -> Self:
        """HTTP value used when the submitted value is empty."""
        self._default = default
        return self

    def filter(self, filter: Filter | Callable[[Any, Any], Any], append: bool = True) -> Self:
        if append:
            self._filters.append(filter)
        else:
            self._filters.insert(0, filter)
        return self

    def depends(self, *names: str) -> Self:
        """Sibling children to submit before this one."""
        self._dependencies.update(dict.fromkeys(names))
        return self

    def hydrator(self, hydrator: Hydrator) -> Self:
        self._hydrator = hydrator
        return self

    def extractor(self, extractor: Extractor) -> Self:
        self._extractor = extractor
        return self

    def setter(
        self,
        property_name: str | Callable[..., Any] | None = None,
        transformer: Callable[..., Any] | None = None,
        custom_accessor: Callable[..., Any] | None = None,
    ) -> Self:
        """Write the value to the model property (defaults to the child name)."""
        return self.hydrator(Setter(property_name, transformer, custom_accessor))

    def getter(
        self,
        property_name: str | Callable[..., Any] | None = None,
        transformer: Callable[..., Any] | None = None,
        custom_accessor: Callable[..., Any] | None = None,
    ) -> Self:
        """Read the value from the model property (defaults to the child name)."""
        return self.extractor(Getter(property_name, transformer, custom_accessor))

    def model_transformer(
        self,
        transformer: Transformer | Callable[..., Any],
        append: bool = True,
    ) -> Self:
        """Transform between the element value and the model value."""
        if append:
            self._transformers.append(transformer)
        else:
            self._transformers.insert(0, transformer)
        return self

    def http_fields(self, fields: HttpFields) -> Self:
        self._fields = fields
        return self

    def prefix(self, prefix: str | None = None) -> Self:
        """Flatten the element into the parent payload, with a field prefix.

        The default prefix is the child name followed by the configured
        separator (``"address_"``).
        """
        if prefix is None:
            prefix = f"{self._name}{self._registry.config.prefix_separator}"
        return self.http_fields(PrefixedHttpFields(prefix))

    def trim(self, flag: bool = True) -> Self:
        """Strip the submitted value (enabled by default)."""
        self._trim = flag
        return self

    def child_factory(self, factory: ChildFactory) -> Self:
        """Callable creating the child, with the ``Child`` constructor arguments."""
        self._factory = factory
        return self

    def configure(self, callback: Callable[[B], Any]) -> Self:
        """Call *callback* with the element builder."""
        callback(self._element_builder)
        return self

    # -- Element options -------------------------------------------------------

    def required(self, message: str | None = None) -> Self:
        self._element_builder.required(message)
        return self

    def satisfy(self, *rules: Rule | Callable[..., Any], append: bool = True) -> Self:
        self._element_builder.satisfy(*rules, append=append)
        return self

    def transformer(self, transformer: Transformer | Callable[..., Any], append: bool = True) -> Self:
        self._element_builder.transformer(transformer, append)
        return self

    def value(self, value: Any) -> Self:
        self._element_builder.value(value)
        return self

    # -- Build -----------------------------------------------------------------

    def build_child(self) -> Child:
        filters = [self._registry.filter(f) for f in self._filters]
        filters.extend(self._default_filters())

        return self._factory(
            self._name,
            self._element_builder.build_element(),
            self._fields or ArrayOffsetHttpFields(self._name),
            filters,
            self._default,
            self._hydrator,
            self._extractor,
            list(self._dependencies),
            aggregate([self._registry.transformer(t) for t in self._transformers]),
        )

    def _default_filters(self) -> list[Filter]:
        return [TrimFilter()] if self._trim else []

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._name!r}, {type(self._element_builder).__name__})"
