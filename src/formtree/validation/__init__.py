"""Validation — rules, validators, and structured errors.

Usage::

    from formtree.validation import length, required

    builder.string("name").satisfy(required(), length(max=50))

    form.submit(data)
    if not form.valid:
        errors = form.error().print(FieldErrorPrinter())
"""

from formtree.validation.error import FormError
from formtree.validation.fields import (
    equal_to_field,
    greater_than_field,
    greater_than_or_equal_field,
    less_than_field,
    less_than_or_equal_field,
)
from formtree.validation.printers import (
    ErrorPrinter,
    FieldErrorPrinter,
    ImplodeErrorPrinter,
    StringErrorPrinter,
)
from formtree.validation.rules import (
    Rule,
    Violation,
    as_rule,
    count,
    email,
    length,
    matches,
    max_value,
    min_value,
    one_of,
    required,
    satisfy,
    url,
)
from formtree.validation.validator import (
    ConstraintValueValidator,
    NullValueValidator,
    TransformerErrorPolicy,
    ValueValidator,
    from_rules,
)

__all__ = [
    "ConstraintValueValidator",
    "ErrorPrinter",
    "FieldErrorPrinter",
    "FormError",
    "ImplodeErrorPrinter",
    "NullValueValidator",
    "Rule",
    "StringErrorPrinter",
    "TransformerErrorPolicy",
    "ValueValidator",
    "Violation",
    "as_rule",
    "count",
    "email",
    "equal_to_field",
    "from_rules",
    "greater_than_field",
    "greater_than_or_equal_field",
    "length",
    "less_than_field",
    "less_than_or_equal_field",
    "matches",
    "max_value",
    "min_value",
    "one_of",
    "required",
    "satisfy",
    "url",
]
