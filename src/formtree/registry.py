"""Element registry — which builder creates which element.

Every builder of a form definition shares one registry. It maps element
classes to element builders (and, for some elements, to a dedicated
child builder), and normalises filters, rules and transformers given as
plain callables.

Register a custom element::

    registry = Registry()
    registry.register(MoneyElement, MoneyElementBuilder)

    builder = FormBuilder(registry)
    builder.add("price", MoneyElement)
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any, TypeAlias, TypeVar

from formtree.config import FormConfig
from formtree.errors import ConfigurationError
from formtree.filters import Filter, as_filter
from formtree.transformers import Transformer, as_transformer
from formtree.validation.rules import Rule, as_rule

if TYPE_CHECKING:
    from formtree.builder import AbstractElementBuilder
    from formtree.button import SubmitButtonBuilder
    from formtree.child.builder import ChildBuilder
    from formtree.element import Element

ElementBuilderFactory: TypeAlias = "Callable[[Registry, type[Element]], AbstractElementBuilder]"
ChildBuilderFactory: TypeAlias = "Callable[[str, AbstractElementBuilder, Registry], ChildBuilder[Any]]"
ButtonBuilderFactory: TypeAlias = "Callable[[str], SubmitButtonBuilder]"

F = TypeVar("F")


class Registry:
    """Element builders by element class.

    Args:
        config: Form options, read by the builders.
    """

    def __init__(self, config: FormConfig | None = None) -> None:
        from formtree.aggregate.array import ArrayElement
        from formtree.aggregate.builder import ArrayChildBuilder, ArrayElementBuilder, FormBuilder
        from formtree.aggregate.custom import CustomForm, CustomFormBuilder
        from formtree.aggregate.form import Form
        from formtree.button import SubmitButtonBuilder
        from formtree.leaf.builders import (
            AnyElementBuilder,
            BooleanElementBuilder,
            DateTimeElementBuilder,
            FloatElementBuilder,
            IntegerElementBuilder,
            StringElementBuilder,
        )
        from formtree.leaf.elements import (
            AnyElement,
            BooleanElement,
            DateTimeElement,
            FloatElement,
            IntegerElement,
            StringElement,
        )

        self.config = config or FormConfig()
        self._element_builders: dict[type, ElementBuilderFactory] = {
            StringElement: StringElementBuilder,
            IntegerElement: IntegerElementBuilder,
            FloatElement: FloatElementBuilder,
            BooleanElement: BooleanElementBuilder,
            AnyElement: AnyElementBuilder,
            DateTimeElement: DateTimeElementBuilder,
            ArrayElement: ArrayElementBuilder,
            Form: FormBuilder,
        }
        self._child_builders: dict[type, ChildBuilderFactory] = {
            ArrayElement: ArrayChildBuilder,
        }
        self._button_builder: ButtonBuilderFactory = SubmitButtonBuilder

        self.register(
            CustomForm,
            lambda registry, form_class: CustomFormBuilder(form_class, FormBuilder(registry)),
        )

    def register(
        self,
        element: type[Element],
        builder_factory: ElementBuilderFactory,
        child_builder_factory: ChildBuilderFactory | None = None,
    ) -> None:
        """Register the builder of *element* (and of its subclasses).

        Factories are called with ``(registry, element_class)``; child
        builder factories with ``(name, element_builder, registry)``.
        """
        self._element_builders[element] = builder_factory
        if child_builder_factory is not None:
            self._child_builders[element] = child_builder_factory

    def element_builder(self, element: type[Element]) -> AbstractElementBuilder:
        """A new builder of *element*.

        Raises:
            ConfigurationError: If neither the class nor a parent class is registered.
        """
        factory = self._lookup(self._element_builders, element)
        if factory is None:
            msg = f"The element {element.__name__} is not registered"
            raise ConfigurationError(msg)
        return factory(self, element)

    def child_builder(self, element: type[Element], name: str) -> ChildBuilder[Any]:
        """A new child builder named *name*, wrapping a builder of *element*."""
        from formtree.child.builder import ChildBuilder

        element_builder = self.element_builder(element)
        factory = self._lookup(self._child_builders, element) or ChildBuilder
        return factory(name, element_builder, self)

    def register_button(self, builder_factory: ButtonBuilderFactory) -> None:
        """Replace the builder of submit buttons. Called with the button name."""
        self._button_builder = builder_factory

    def button_builder(self, name: str) -> SubmitButtonBuilder:
        return self._button_builder(name)

    def filter(self, filter: Any) -> Filter:
        return as_filter(filter)

    def rule(self, rule: Any) -> Rule:
        return as_rule(rule)

    def transformer(self, transformer: Any) -> Transformer:
        if not callable(transformer) and not hasattr(transformer, "transform_from_http"):
            msg = f"Invalid transformer {transformer!r}"
            raise ConfigurationError(msg)
        return as_transformer(transformer)

    @staticmethod
    def _lookup(factories: dict[type, F], element: type) -> F | None:
        if element in factories:
            return factories[element]
        for registered, factory in factories.items():
            if issubclass(element, registered):
                return factory
        return None
