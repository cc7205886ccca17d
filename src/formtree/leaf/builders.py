"""Builders of leaf elements."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime, tzinfo
from typing import TYPE_CHECKING, Any, Self

from formtree.builder import AbstractElementBuilder
from formtree.leaf.elements import (
    AnyElement,
    BooleanElement,
    DateTimeElement,
    FloatElement,
    IntegerElement,
    LeafElement,
    StringElement,
)
from formtree.validation.fields import greater_than_field, less_than_field
from formtree.validation.rules import Rule, length, matches, max_value, min_value, one_of

if TYPE_CHECKING:
    from formtree.registry import Registry
    from formtree.transformers import Transformer
    from formtree.validation.validator import ValueValidator


class LeafElementBuilder(AbstractElementBuilder):
    """Builder of a leaf element class taking ``(validator, transformer)``."""

    element_class: type[LeafElement] = LeafElement

    def __init__(
        self,
        registry: Registry | None = None,
        element_class: type[LeafElement] | None = None,
    ) -> None:
        super().__init__(registry)
        if element_class is not None:
            self.element_class = element_class
        self._options: list[Rule] = []

    def _default_rules(self) -> list[Rule]:
        return list(self._options)

    def _create_element(self, validator: ValueValidator, transformer: Transformer) -> LeafElement:
        return self.element_class(validator, transformer)


class StringElementBuilder(LeafElementBuilder):
    element_class = StringElement

    def length(self, min: int | None = None, max: int | None = None) -> Self:
        self._options.append(length(min, max))
        return self

    def regex(self, pattern: str, message: str | None = None) -> Self:
        self._options.append(matches(pattern, message) if message else matches(pattern))
        return self

    def choices(self, choices: Iterable[Any], message: str | None = None) -> Self:
        rule = one_of(*choices, message=message) if message else one_of(*choices)
        self._options.append(rule)
        return self


class NumberElementBuilder(LeafElementBuilder):
    """Shared options of integer and float builders."""

    def min(self, limit: float, message: str | None = None) -> Self:
        self._options.append(min_value(limit, message) if message else min_value(limit))
        return self

    def max(self, limit: float, message: str | None = None) -> Self:
        self._options.append(max_value(limit, message) if message else max_value(limit))
        return self

    def positive(self, message: str = "This value should be positive.") -> Self:
        self._options.append(
            Rule(
                "positive",
                lambda value, element: value is None or value > 0,
                "TOO_LOW_ERROR",
                message,
            )
        )
        return self


class IntegerElementBuilder(NumberElementBuilder):
    element_class = IntegerElement


class FloatElementBuilder(NumberElementBuilder):
    element_class = FloatElement


class BooleanElementBuilder(LeafElementBuilder):
    element_class = BooleanElement

    def __init__(
        self,
        registry: Registry | None = None,
        element_class: type[LeafElement] | None = None,
    ) -> None:
        super().__init__(registry, element_class)
        self._http_value = "1"

    def http_value(self, value: str) -> Self:
        """HTTP value of the checked box."""
        self._http_value = value
        return self

    def _create_element(self, validator: ValueValidator, transformer: Transformer) -> LeafElement:
        return self.element_class(validator, transformer, http_value=self._http_value)  # type: ignore[call-arg]


class DateTimeElementBuilder(LeafElementBuilder):
    element_class = DateTimeElement

    def __init__(
        self,
        registry: Registry | None = None,
        element_class: type[LeafElement] | None = None,
    ) -> None:
        super().__init__(registry, element_class)
        self._format = self.config.datetime_format
        self._timezone: tzinfo | None = None

    def format(self, format: str | None) -> Self:
        """``strptime`` format of the HTTP value. ``None`` for ISO 8601."""
        self._format = format
        return self

    def timezone(self, timezone: tzinfo | None) -> Self:
        self._timezone = timezone
        return self

    def before(self, limit: datetime | str, message: str | None = None) -> Self:
        """The date must be before *limit*, a date or the path of another field."""
        if isinstance(limit, str):
            self._options.append(less_than_field(limit, message) if message else less_than_field(limit))
        else:
            self._options.append(
                Rule(
                    "before",
                    lambda value, element: value is None or value < limit,
                    "TOO_HIGH_ERROR",
                    message or "This value should be before {limit}.",
                    {"limit": limit},
                )
            )
        return self

    def after(self, limit: datetime | str, message: str | None = None) -> Self:
        """The date must be after *limit*, a date or the path of another field."""
        if isinstance(limit, str):
            self._options.append(greater_than_field(limit, message) if message else greater_than_field(limit))
        else:
            self._options.append(
                Rule(
                    "after",
                    lambda value, element: value is None or value > limit,
                    "TOO_LOW_ERROR",
                    message or "This value should be after {limit}.",
                    {"limit": limit},
                )
            )
        return self

    def _create_element(self, validator: ValueValidator, transformer: Transformer) -> LeafElement:
        return self.element_class(  # type: ignore[call-arg]
            validator,
            transformer,
            format=self._format,
            timezone=self._timezone,
        )


class AnyElementBuilder(LeafElementBuilder):
    element_class = AnyElement
