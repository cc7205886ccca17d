"""Rules comparing a value with another field of the form.

The other field is located with a field path, relative to the parent
of the validated element (``"password"`` is a sibling field). Declare
the other field as a dependency, so it is submitted first::

    builder.string("password").required()
    builder.string("confirm").depends("password").satisfy(equal_to_field("password"))

The rule passes when either value is empty.
"""

from __future__ import annotations

import operator
from collections.abc import Callable
from typing import Any

from formtree.path import FieldPath
from formtree.validation.rules import Rule


def _compare(
    name: str,
    compare: Callable[[Any, Any], bool],
    path: str,
    message: str,
    code: str,
) -> Rule:
    field_path = FieldPath.parse(path)

    def check(value: Any, element: Any) -> bool:
        if value is None or value == "" or element is None:
            return True

        other = field_path.value(element)
        if other is None or other == "":
            return True

        try:
            return compare(value, other)
        except TypeError:
            return False

    return Rule(name, check, code, message.replace("{field}", path), {"field": path})


def equal_to_field(path: str, message: str = "This value should be equal to {field}.") -> Rule:
    return _compare("equal_to_field", operator.eq, path, message, "NOT_EQUAL_ERROR")


def greater_than_field(path: str, message: str = "This value should be greater than {field}.") -> Rule:
    return _compare("greater_than_field", operator.gt, path, message, "TOO_LOW_ERROR")


def greater_than_or_equal_field(
    path: str,
    message: str = "This value should be greater than or equal to {field}.",
) -> Rule:
    return _compare("greater_than_or_equal_field", operator.ge, path, message, "TOO_LOW_ERROR")


def less_than_field(path: str, message: str = "This value should be less than {field}.") -> Rule:
    return _compare("less_than_field", operator.lt, path, message, "TOO_HIGH_ERROR")


def less_than_or_equal_field(
    path: str,
    message: str = "This value should be less than or equal to {field}.",
) -> Rule:
    return _compare("less_than_or_equal_field", operator.le, path, message, "TOO_HIGH_ERROR")
