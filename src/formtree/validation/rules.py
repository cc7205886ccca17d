"""Built-in validation rules.

A rule is a frozen ``Rule`` wrapping a check function::

    def check(value, element) -> bool | str | tuple[str, str] | None:
        '''Return True/None if valid, False or a message on failure.'''

Calling the rule normalises the check result into a ``Violation`` (or
``None`` when the value is valid). ``False`` uses the rule default
message, formatted with the rule options.

Rules other than ``required`` accept empty values (``None``, ``""``):
combine them with ``required`` to make the field mandatory.

Custom rules are plain callables with the same signature, or
``satisfy(callback)``::

    satisfy(lambda value, element: value != "admin" or "This name is reserved")
"""

from __future__ import annotations

import re
from collections.abc import Callable, Mapping, Sized
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, TypeAlias

CheckResult: TypeAlias = bool | str | tuple[str, str | None] | None
Check: TypeAlias = Callable[[Any, Any], CheckResult]


@dataclass(frozen=True, slots=True)
class Violation:
    """A failed rule: message and machine readable code."""

    message: str
    code: str | None = None


@dataclass(frozen=True, slots=True)
class Rule:
    """A named validation rule.

    Attributes:
        name: Rule identifier, used by views (``"required"``, ``"length"``).
        check: The check function, ``(value, element) -> result``.
        code: Code of the violation.
        message: Default message, formatted with *options*.
        options: Rule parameters, exposed to views.
    """

    name: str
    check: Check
    code: str | None = None
    message: str = "This value is not valid."
    options: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))

    def __call__(self, value: Any, element: Any = None) -> Violation | None:
        result = self.check(value, element)

        if result is None or result is True:
            return None

        if result is False:
            return Violation(self.message.format(**self.options), self.code)

        if isinstance(result, tuple):
            message, code = result
            return Violation(message, code)

        return Violation(str(result), self.code)


def _empty(value: Any) -> bool:
    return value is None or value == ""


def _rule(
    name: str,
    check: Check,
    code: str,
    message: str,
    **options: Any,
) -> Rule:
    return Rule(name, check, code, message, MappingProxyType(options))


# ---------------------------------------------------------------------------
# Presence
# ---------------------------------------------------------------------------


def required(message: str = "This value should not be blank.") -> Rule:
    """Value must not be empty (``None``, ``""``, ``False``, empty collection)."""

    def check(value: Any, element: Any) -> bool:
        if value is None or value is False or value == "":
            return False
        return not (isinstance(value, (list, tuple, dict, set)) and not value)

    return _rule("required", check, "IS_BLANK_ERROR", message)


# ---------------------------------------------------------------------------
# Strings
# ---------------------------------------------------------------------------


def length(
    min: int | None = None,
    max: int | None = None,
    *,
    min_message: str = "This value is too short. It should have {min} characters or more.",
    max_message: str = "This value is too long. It should have {max} characters or less.",
) -> Rule:
    """String length must be within ``[min, max]``."""

    def check(value: Any, element: Any) -> CheckResult:
        if _empty(value):
            return None
        size = len(str(value))
        if min is not None and size < min:
            return (min_message.format(min=min), "TOO_SHORT_ERROR")
        if max is not None and size > max:
            return (max_message.format(max=max), "TOO_LONG_ERROR")
        return None

    return _rule("length", check, "LENGTH_ERROR", "This value has an invalid length.", min=min, max=max)


def matches(pattern: str | re.Pattern[str], message: str = "This value is not valid.") -> Rule:
    """Value must match the regex *pattern* (searched from the start)."""
    compiled = re.compile(pattern)

    def check(value: Any, element: Any) -> bool:
        return _empty(value) or compiled.match(str(value)) is not None

    return _rule("matches", check, "REGEX_FAILED_ERROR", message, pattern=compiled.pattern)


# Basic email pattern, checks structure, not deliverability
_EMAIL_RE = re.compile(r"^[a-zA-Z0-9._%+\-]+@[a-zA-Z0-9.\-]+\.[a-zA-Z]{2,}$")


def email(message: str = "This value is not a valid email address.") -> Rule:
    """Value must be a valid email address (basic format check)."""

    def check(value: Any, element: Any) -> bool:
        return _empty(value) or _EMAIL_RE.match(str(value)) is not None

    return _rule("email", check, "INVALID_FORMAT_ERROR", message)


# Basic URL pattern, checks scheme + host structure
_URL_RE = re.compile(r"^https?://[^\s/$.?#].\S*$", re.IGNORECASE)


def url(message: str = "This value is not a valid URL.") -> Rule:
    """Value must be a valid URL (http/https)."""

    def check(value: Any, element: Any) -> bool:
        return _empty(value) or _URL_RE.match(str(value)) is not None

    return _rule("url", check, "INVALID_URL_ERROR", message)


# ---------------------------------------------------------------------------
# Choice
# ---------------------------------------------------------------------------


def one_of(*choices: Any, message: str = "The value you selected is not a valid choice.") -> Rule:
    """Value must be one of *choices*. A list value must only contain choices."""
    allowed = tuple(choices)

    def check(value: Any, element: Any) -> bool:
        if _empty(value):
            return True
        if isinstance(value, (list, tuple, set)):
            return all(item in allowed for item in value)
        if isinstance(value, Mapping):
            return all(item in allowed for item in value.values())
        return value in allowed

    return _rule("one_of", check, "NO_SUCH_CHOICE_ERROR", message, choices=allowed)


# ---------------------------------------------------------------------------
# Numbers
# ---------------------------------------------------------------------------


def min_value(
    limit: Any,
    message: str = "This value should be greater than or equal to {limit}.",
) -> Rule:
    """Value must be greater than or equal to *limit*."""

    def check(value: Any, element: Any) -> bool:
        return _empty(value) or value >= limit

    return _rule("min_value", check, "TOO_LOW_ERROR", message, limit=limit)


def max_value(
    limit: Any,
    message: str = "This value should be less than or equal to {limit}.",
) -> Rule:
    """Value must be less than or equal to *limit*."""

    def check(value: Any, element: Any) -> bool:
        return _empty(value) or value <= limit

    return _rule("max_value", check, "TOO_HIGH_ERROR", message, limit=limit)


# ---------------------------------------------------------------------------
# Collections
# ---------------------------------------------------------------------------


def count(
    min: int | None = None,
    max: int | None = None,
    *,
    min_message: str = "This collection should contain {min} elements or more.",
    max_message: str = "This collection should contain {max} elements or less.",
) -> Rule:
    """Collection size must be within ``[min, max]``. ``None`` counts as empty."""

    def check(value: Any, element: Any) -> CheckResult:
        size = len(value) if isinstance(value, Sized) and not isinstance(value, str) else 0
        if min is not None and size < min:
            return (min_message.format(min=min), "TOO_FEW_ERROR")
        if max is not None and size > max:
            return (max_message.format(max=max), "TOO_MANY_ERROR")
        return None

    return _rule("count", check, "COUNT_ERROR", "This collection has an invalid size.", min=min, max=max)


# ---------------------------------------------------------------------------
# Custom
# ---------------------------------------------------------------------------


def satisfy(
    callback: Callable[[Any, Any], CheckResult],
    message: str = "This value is not valid.",
    code: str = "CUSTOM_ERROR",
) -> Rule:
    """Custom rule. *callback* receives ``(value, element)``.

    It returns ``True`` or ``None`` when valid, ``False`` to use
    *message*, a message string, or a ``(message, code)`` tuple.
    """
    return Rule("satisfy", callback, code, message)


def as_rule(rule: Rule | Callable[..., Any]) -> Rule:
    """Normalise a rule. A bare callable is wrapped with ``satisfy()``."""
    if isinstance(rule, Rule):
        return rule
    return satisfy(rule)
