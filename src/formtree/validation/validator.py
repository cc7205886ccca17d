"""Value validators — run rules and report transformation failures.

Elements hold a ``ValueValidator``:

- ``ConstraintValueValidator``: runs rules in order, the first violation
  becomes the element error
- ``NullValueValidator``: no rule, always valid

Both report a transformer exception through a ``TransformerErrorPolicy``.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Any, ClassVar, Protocol

from formtree.validation.error import FormError
from formtree.validation.rules import Rule, as_rule

logger = logging.getLogger("formtree.validation")


@dataclass(frozen=True, slots=True)
class TransformerErrorPolicy:
    """How a failed transformation is reported.

    Attributes:
        message: Error message. ``None`` uses the exception message.
        code: Error code.
        ignore: Do not report the failure: the raw value is validated
            by the rules instead.
        callback: ``(value, exc, element) -> bool``, decides if the
            error is reported. Return ``False`` to ignore it.
    """

    message: str | None = None
    code: str = "TRANSFORM_ERROR"
    ignore: bool = False
    callback: Callable[[Any, Exception, Any], bool] | None = None

    def error(self, exc: Exception, value: Any, element: Any) -> FormError:
        if self.ignore:
            return FormError.null()

        if self.callback is not None and not self.callback(value, exc, element):
            return FormError.null()

        return FormError.single(self.message or str(exc), self.code)


class ValueValidator(Protocol):
    def validate(self, value: Any, element: Any) -> FormError: ...

    def has_constraints(self) -> bool: ...

    def on_transformer_exception(self, exc: Exception, value: Any, element: Any) -> FormError: ...


class ConstraintValueValidator:
    """Validate a value with a list of rules. Stops on the first violation."""

    __slots__ = ("rules", "transformer_errors")

    def __init__(
        self,
        rules: Iterable[Rule | Callable[..., Any]] = (),
        transformer_errors: TransformerErrorPolicy | None = None,
    ) -> None:
        self.rules = tuple(as_rule(rule) for rule in rules)
        self.transformer_errors = transformer_errors or TransformerErrorPolicy()

    def validate(self, value: Any, element: Any) -> FormError:
        for rule in self.rules:
            violation = rule(value, element)
            if violation is not None:
                return FormError.single(violation.message, violation.code)

        return FormError.null()

    def has_constraints(self) -> bool:
        return bool(self.rules)

    def on_transformer_exception(self, exc: Exception, value: Any, element: Any) -> FormError:
        logger.debug("Transformation failed on %r: %s", element, exc)
        return self.transformer_errors.error(exc, value, element)

    def __repr__(self) -> str:
        return f"ConstraintValueValidator({[rule.name for rule in self.rules]!r})"


class NullValueValidator:
    """Validator without rules. Shared through ``NullValueValidator.instance()``."""

    __slots__ = ("transformer_errors",)

    _instance: ClassVar[NullValueValidator | None] = None
    rules: ClassVar[tuple[Rule, ...]] = ()

    def __init__(self, transformer_errors: TransformerErrorPolicy | None = None) -> None:
        self.transformer_errors = transformer_errors or TransformerErrorPolicy()

    def validate(self, value: Any, element: Any) -> FormError:
        return FormError.null()

    def has_constraints(self) -> bool:
        return False

    def on_transformer_exception(self, exc: Exception, value: Any, element: Any) -> FormError:
        logger.debug("Transformation failed on %r: %s", element, exc)
        return self.transformer_errors.error(exc, value, element)

    @classmethod
    def instance(cls) -> NullValueValidator:
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance


def from_rules(
    rules: Iterable[Rule | Callable[..., Any]],
    transformer_errors: TransformerErrorPolicy | None = None,
) -> ValueValidator:
    """Build the cheapest validator for *rules*."""
    rules = list(rules)
    if not rules:
        if transformer_errors is None:
            return NullValueValidator.instance()
        return NullValueValidator(transformer_errors)
    return ConstraintValueValidator(rules, transformer_errors)
