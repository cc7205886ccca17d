"""Base of element builders.

An element builder collects the definition of an element (rules,
transformers, default value) and creates it with ``build_element()``.
Every call returns the builder, so definitions chain::

    IntegerElementBuilder().min(0).required().value(42).build_element()
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import replace
from typing import TYPE_CHECKING, Any, Self

from formtree.transformers import Transformer, aggregate
from formtree.validation.rules import Rule
from formtree.validation.rules import required as required_rule
from formtree.validation.validator import TransformerErrorPolicy, ValueValidator, from_rules

if TYPE_CHECKING:
    from formtree.config import FormConfig
    from formtree.element import Element
    from formtree.registry import Registry


class AbstractElementBuilder(ABC):
    """Rules, transformers and default value of an element.

    Args:
        registry: Shared by every builder of a form definition. A new
            default registry is created when omitted.
    """

    def __init__(self, registry: Registry | None = None) -> None:
        if registry is None:
            from formtree.registry import Registry

            registry = Registry()

        self._registry = registry
        self._rules: list[Rule] = []
        self._transformers: list[Any] = []
        self._transformer_errors: TransformerErrorPolicy | None = None
        self._value: Any = None

    @property
    def registry(self) -> Registry:
        return self._registry

    @property
    def config(self) -> FormConfig:
        return self._registry.config

    # -- Value -----------------------------------------------------------------

    def value(self, value: Any) -> Self:
        """Initial model value, imported into the built element."""
        self._value = value
        return self

    # -- Validation ------------------------------------------------------------

    def required(self, message: str | None = None) -> Self:
        """The value must not be empty."""
        return self.satisfy(required_rule(message) if message else required_rule())

    def satisfy(self, *rules: Rule | Callable[..., Any], append: bool = True) -> Self:
        """Add rules. Bare callables are wrapped with ``satisfy()`` rules."""
        normalized = [self._registry.rule(rule) for rule in rules]
        if append:
            self._rules.extend(normalized)
        else:
            self._rules[:0] = normalized
        return self

    def ignore_transformer_exception(self, flag: bool = True) -> Self:
        """On transformation failure, validate the raw value instead of failing."""
        return self._transformer_errors_option(ignore=flag)

    def transformer_error_message(self, message: str) -> Self:
        return self._transformer_errors_option(message=message)

    def transformer_error_code(self, code: str) -> Self:
        return self._transformer_errors_option(code=code)

    def transformer_exception_validation(
        self,
        callback: Callable[[Any, Exception, Any], bool],
    ) -> Self:
        """``callback(value, exc, element)`` returns ``False`` to ignore the failure."""
        return self._transformer_errors_option(callback=callback)

    # -- Transformation --------------------------------------------------------

    def transformer(self, transformer: Transformer | Callable[..., Any], append: bool = True) -> Self:
        """Add a transformer. ``transform_from_http`` runs the last added one first."""
        if append:
            self._transformers.append(transformer)
        else:
            self._transformers.insert(0, transformer)
        return self

    # -- Build -----------------------------------------------------------------

    def build_element(self) -> Element:
        element = self._create_element(self._build_validator(), self._build_transformer())

        if self._value is not None:
            element.import_(self._value)

        return element

    @abstractmethod
    def _create_element(self, validator: ValueValidator, transformer: Transformer) -> Element: ...

    def _default_rules(self) -> list[Rule]:
        """Rules added by the builder options, checked before the user rules."""
        return []

    def _build_validator(self) -> ValueValidator:
        return from_rules([*self._default_rules(), *self._rules], self._transformer_errors)

    def _build_transformer(self) -> Transformer:
        return aggregate([self._registry.transformer(t) for t in self._transformers])

    def _transformer_errors_option(self, **options: Any) -> Self:
        self._transformer_errors = replace(
            self._transformer_errors or TransformerErrorPolicy(),
            **options,
        )
        return self
