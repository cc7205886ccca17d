"""Builders of forms and arrays.

Usage::

    builder = FormBuilder()
    builder.string("login").required().setter()
    builder.string("password").required().setter()
    builder.string("confirm").depends("password").satisfy(equal_to_field("password"))
    builder.embedded("address", lambda address: (
        address.string("city").setter(),
        address.string("zip").setter(),
    )).setter()
    builder.array("tags").string().setter()

    form = builder.build_element()
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import TYPE_CHECKING, Any, Self, TypeAlias

from formtree.access import Accessor, MappingAccessor, accessor_for
from formtree.aggregate.array import ArrayElement
from formtree.aggregate.form import Form
from formtree.aggregate.root import RootForm
from formtree.aggregate.value import ValueGenerator, ValueSource
from formtree.builder import AbstractElementBuilder
from formtree.child.builder import ChildBuilder
from formtree.collection.tree import DependencyTree
from formtree.filters import EmptyArrayValuesFilter
from formtree.leaf.elements import (
    AnyElement,
    BooleanElement,
    DateTimeElement,
    FloatElement,
    IntegerElement,
    StringElement,
)
from formtree.validation.rules import Rule, count, one_of
from formtree.validation.rules import required as required_rule

if TYPE_CHECKING:
    from formtree.button import SubmitButtonBuilder
    from formtree.config import FormConfig
    from formtree.element import Element
    from formtree.filters import Filter
    from formtree.leaf.builders import (
        AnyElementBuilder,
        BooleanElementBuilder,
        DateTimeElementBuilder,
        FloatElementBuilder,
        IntegerElementBuilder,
        StringElementBuilder,
    )
    from formtree.registry import Registry
    from formtree.transformers import Transformer
    from formtree.validation.validator import ValueValidator

Configurator: TypeAlias = Callable[[Any], Any]


class FormBuilder(AbstractElementBuilder):
    """Definition of a form.

    Args:
        registry: Element registry, shared with nested builders.
        element_class: Form class to build.
        config: Options of a new registry, when *registry* is omitted.
    """

    def __init__(
        self,
        registry: Registry | None = None,
        element_class: type[Form] | None = None,
        *,
        config: FormConfig | None = None,
    ) -> None:
        if registry is None:
            from formtree.registry import Registry

            registry = Registry(config)

        super().__init__(registry)
        self._element_class = element_class or Form
        self._children: dict[str, ChildBuilder[Any]] = {}
        self._generator: ValueSource | None = None
        self._accessor: Accessor = MappingAccessor()
        self._buttons: dict[str, SubmitButtonBuilder] = {}

    # -- Children --------------------------------------------------------------

    def add(self, name: str, element: type[Element]) -> ChildBuilder[Any]:
        """Declare a child of type *element*. Redeclaring a name replaces it."""
        builder = self._registry.child_builder(element, name)
        self._children[name] = builder
        return builder

    def string(self, name: str, default: str | None = None) -> ChildBuilder[StringElementBuilder]:
        return self._add_with_default(name, StringElement, default)

    def integer(self, name: str, default: int | None = None) -> ChildBuilder[IntegerElementBuilder]:
        return self._add_with_default(name, IntegerElement, default)

    def float(self, name: str, default: float | None = None) -> ChildBuilder[FloatElementBuilder]:
        return self._add_with_default(name, FloatElement, default)

    def boolean(self, name: str) -> ChildBuilder[BooleanElementBuilder]:
        return self.add(name, BooleanElement)

    def date_time(self, name: str, default: str | None = None) -> ChildBuilder[DateTimeElementBuilder]:
        return self._add_with_default(name, DateTimeElement, default)

    def any(self, name: str, default: Any = None) -> ChildBuilder[AnyElementBuilder]:
        return self._add_with_default(name, AnyElement, default)

    def embedded(self, name: str, configurator: Configurator | None = None) -> ChildBuilder[FormBuilder]:
        """Declare a nested form. *configurator* receives its ``FormBuilder``."""
        builder = self.add(name, Form)
        if configurator is not None:
            builder.configure(configurator)
        return builder

    def array(
        self,
        name: str,
        element: type[Element] | None = None,
        configurator: Configurator | None = None,
    ) -> ArrayChildBuilder:
        """Declare an array of *element* (strings by default)."""
        builder = self.add(name, ArrayElement)
        if element is not None:
            builder.element(element, configurator)
        return builder  # type: ignore[return-value]

    # -- Model -----------------------------------------------------------------

    def generator(self, generator: ValueSource) -> Self:
        self._generator = generator
        return self

    def generates(self, value: Any) -> Self:
        """Set the form value prototype: a class, a factory or an object.

        A class or object which is not a mapping switches the children
        getters and setters to attribute access. A factory keeps the
        current accessor (``MappingAccessor`` unless ``accessor()`` is called).
        """
        self._generator = ValueGenerator(value)
        if isinstance(value, type) or not callable(value):
            self._accessor = accessor_for(value)
        return self

    def accessor(self, accessor: Accessor) -> Self:
        """Force the model accessor of the children getters and setters."""
        self._accessor = accessor
        return self

    # -- Buttons ---------------------------------------------------------------

    def button(self, name: str, value: str | None = None) -> SubmitButtonBuilder:
        """Declare a submit button of the root form (see ``build_root()``)."""
        builder = self._registry.button_builder(name)
        if value is not None:
            builder.value(value)
        self._buttons[name] = builder
        return builder

    def build_root(self) -> RootForm:
        """Build the form, wrapped into a ``RootForm`` with the declared buttons."""
        return RootForm(
            self.build_element(),  # type: ignore[arg-type]
            [builder.build_button() for builder in self._buttons.values()],
        )

    # -- Access ----------------------------------------------------------------

    def __getitem__(self, name: str) -> ChildBuilder[Any]:
        return self._children[name]

    def __contains__(self, name: object) -> bool:
        return name in self._children

    # -- Build -----------------------------------------------------------------

    def _create_element(self, validator: ValueValidator, transformer: Transformer) -> Form:
        children = DependencyTree()

        for builder in self._children.values():
            children.add(builder.build_child())

        return self._element_class(
            children,
            validator,
            transformer,
            self._generator or ValueGenerator(),
            self._accessor,
        )

    def _add_with_default(self, name: str, element: type[Element], default: Any) -> ChildBuilder[Any]:
        builder = self.add(name, element)
        if default is not None:
            builder.default(default)
        return builder


class ArrayElementBuilder(AbstractElementBuilder):
    """Definition of an array.

    ``satisfy()`` and ``transformer()`` apply to every item. Rules and
    transformers of the array itself are set with ``satisfy_array()``
    and ``array_transformer()``.
    """

    def __init__(
        self,
        registry: Registry | None = None,
        element_class: type[ArrayElement] | None = None,
    ) -> None:
        super().__init__(registry)
        self._element_class = element_class or ArrayElement
        self._element: AbstractElementBuilder | None = None

    @property
    def element_builder(self) -> AbstractElementBuilder:
        """Builder of the items, a string builder unless defined."""
        if self._element is None:
            self.element(StringElement)
        return self._element  # type: ignore[return-value]

    def element(self, element: type[Element], configurator: Configurator | None = None) -> Self:
        """Set the item type. *configurator* receives the item builder."""
        self._element = self._registry.element_builder(element)
        if configurator is not None:
            configurator(self._element)
        return self

    def string(self, configurator: Configurator | None = None) -> Self:
        return self.element(StringElement, configurator)

    def integer(self, configurator: Configurator | None = None) -> Self:
        return self.element(IntegerElement, configurator)

    def float(self, configurator: Configurator | None = None) -> Self:
        return self.element(FloatElement, configurator)

    def boolean(self, configurator: Configurator | None = None) -> Self:
        return self.element(BooleanElement, configurator)

    def date_time(self, configurator: Configurator | None = None) -> Self:
        return self.element(DateTimeElement, configurator)

    def form(self, configurator: Configurator | None = None) -> Self:
        """Items are embedded forms. *configurator* receives the ``FormBuilder``."""
        return self.element(Form, configurator)

    # -- Item options ----------------------------------------------------------

    def satisfy(self, *rules: Rule | Callable[..., Any], append: bool = True) -> Self:
        self.element_builder.satisfy(*rules, append=append)
        return self

    def transformer(self, transformer: Transformer | Callable[..., Any], append: bool = True) -> Self:
        self.element_builder.transformer(transformer, append)
        return self

    # -- Array options ---------------------------------------------------------

    def required(self, message: str | None = None) -> Self:
        """The array must not be empty."""
        return self.satisfy_array(required_rule(message) if message else required_rule())

    def count(self, min: int | None = None, max: int | None = None) -> Self:
        return self.satisfy_array(count(min, max))

    def choices(self, choices: Iterable[Any], message: str | None = None) -> Self:
        """Every item must be one of *choices*."""
        return self.satisfy_array(one_of(*choices, message=message) if message else one_of(*choices))

    def satisfy_array(self, *rules: Rule | Callable[..., Any], append: bool = True) -> Self:
        return super().satisfy(*rules, append=append)

    def array_transformer(self, transformer: Transformer | Callable[..., Any], append: bool = True) -> Self:
        return super().transformer(transformer, append)

    # -- Build -----------------------------------------------------------------

    def _create_element(self, validator: ValueValidator, transformer: Transformer) -> ArrayElement:
        return self._element_class(self.element_builder.build_element(), transformer, validator)


class ArrayChildBuilder(ChildBuilder[ArrayElementBuilder]):
    """Child builder of arrays. Empty items are filtered out by default."""

    def __init__(
        self,
        name: str,
        element_builder: ArrayElementBuilder,
        registry: Registry | None = None,
    ) -> None:
        super().__init__(name, element_builder, registry)
        self._filter_empty_values = self._registry.config.filter_empty_values

    def filter_empty_values(self, flag: bool = True) -> Self:
        """Drop ``None``, ``""`` and empty arrays from the submitted items."""
        self._filter_empty_values = flag
        return self

    def element(self, element: type[Element], configurator: Configurator | None = None) -> Self:
        self._element_builder.element(element, configurator)
        return self

    def string(self, configurator: Configurator | None = None) -> Self:
        self._element_builder.string(configurator)
        return self

    def integer(self, configurator: Configurator | None = None) -> Self:
        self._element_builder.integer(configurator)
        return self

    def float(self, configurator: Configurator | None = None) -> Self:
        self._element_builder.float(configurator)
        return self

    def boolean(self, configurator: Configurator | None = None) -> Self:
        self._element_builder.boolean(configurator)
        return self

    def date_time(self, configurator: Configurator | None = None) -> Self:
        self._element_builder.date_time(configurator)
        return self

    def form(self, configurator: Configurator | None = None) -> Self:
        self._element_builder.form(configurator)
        return self

    def count(self, min: int | None = None, max: int | None = None) -> Self:
        self._element_builder.count(min, max)
        return self

    def _default_filters(self) -> list[Filter]:
        filters = super()._default_filters()
        if self._filter_empty_values:
            filters.append(EmptyArrayValuesFilter())
        return filters

