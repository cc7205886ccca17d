"""Leaf elements — single scalar values.

On submit, a leaf runs the HTTP value through:

1. ``sanitize()``: scalars become strings, anything else ``None``
2. the element transformer (``transform_from_http``)
3. ``to_python()``: the typed coercion of the element
4. the validator

A failure in 2 or 3 is reported with the transformer error policy; the
raw HTTP value is kept as the element value.
"""

from __future__ import annotations

from datetime import datetime, tzinfo
from typing import Any, Self

from formtree.element import Element
from formtree.errors import TransformationError
from formtree.http.fields import HttpFieldPath
from formtree.transformers import NullTransformer, Transformer
from formtree.validation.error import FormError
from formtree.validation.validator import NullValueValidator, ValueValidator
from formtree.view import FieldView, normalize_rules


class LeafElement(Element):
    """Base of scalar elements. Subclasses implement the coercions."""

    def __init__(
        self,
        validator: ValueValidator | None = None,
        transformer: Transformer | None = None,
    ) -> None:
        self.validator = validator or NullValueValidator.instance()
        self.transformer = transformer or NullTransformer.instance()
        self._value: Any = None
        self._error = FormError.null()
        self._submitted = False

    def submit(self, data: Any) -> Self:
        self._submitted = True

        try:
            self._value = self.to_python(
                self.transformer.transform_from_http(self.sanitize(data), self)
            )
        except Exception as exc:
            self._error = self.validator.on_transformer_exception(exc, data, self)
            self._value = data
            if not self._error.is_empty:
                return self

        self._error = self.validator.validate(self._value, self)
        return self

    def patch(self, data: Any) -> Self:
        if data is not None:
            return self.submit(data)

        self._submitted = True
        self._error = self.validator.validate(self._value, self)
        return self

    def import_(self, entity: Any) -> Self:
        self._value = self.try_cast(entity)
        return self

    def value(self) -> Any:
        return self._value

    def http_value(self) -> Any:
        try:
            return self.transformer.transform_to_http(self.to_http(self._value), self)
        except Exception:
            # Rendered raw when the value can not be formatted
            return self._value

    @property
    def valid(self) -> bool:
        return self._submitted and self._error.is_empty

    def error(self, field: HttpFieldPath | None = None) -> FormError:
        return self._error.with_field(field) if field is not None else self._error

    def view(self, field: HttpFieldPath | None = None) -> FieldView:
        rules = normalize_rules(self.validator)
        return FieldView(
            type=type(self).__name__,
            name=str(field) if field is not None else "",
            value=self.http_value(),
            error=self._error.message,
            required="required" in rules,
            constraints=rules,
        )

    def sanitize(self, data: Any) -> Any:
        """Reduce the raw HTTP value to a string, or ``None``."""
        if isinstance(data, bool):
            return "1" if data else ""
        if isinstance(data, (str, int, float)):
            return str(data)
        return None

    def to_python(self, value: Any) -> Any:
        return value

    def to_http(self, value: Any) -> Any:
        return value

    def try_cast(self, value: Any) -> Any:
        """Convert an imported model value."""
        return value

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._value!r})"


class StringElement(LeafElement):
    def try_cast(self, value: Any) -> str | None:
        if value is None:
            return None
        if not isinstance(value, (str, int, float)):
            msg = f"The import_()'ed value of a {type(self).__name__} must be a scalar value or None"
            raise TypeError(msg)
        return str(value)


class AnyElement(LeafElement):
    """Accept any HTTP value as is, including lists and dicts."""

    def sanitize(self, data: Any) -> Any:
        return data


def _scalar(element: LeafElement, value: Any) -> Any:
    if value is not None and not isinstance(value, (str, int, float)):
        msg = f"The import_()'ed value of a {type(element).__name__} must be a scalar value or None"
        raise TypeError(msg)
    return value


class IntegerElement(LeafElement):
    def to_python(self, value: Any) -> int | None:
        if value is None or value == "":
            return None
        if isinstance(value, int):
            return value
        try:
            return int(str(value).strip())
        except ValueError:
            msg = "This value should be a valid integer."
            raise TransformationError(msg) from None

    def to_http(self, value: Any) -> str | None:
        return None if value is None else str(value)

    def try_cast(self, value: Any) -> int | None:
        value = _scalar(self, value)
        return None if value is None else int(value)


class FloatElement(LeafElement):
    def to_python(self, value: Any) -> float | None:
        if value is None or value == "":
            return None
        if isinstance(value, float):
            return value
        try:
            return float(str(value).strip())
        except ValueError:
            msg = "This value should be a valid number."
            raise TransformationError(msg) from None

    def to_http(self, value: Any) -> str | None:
        return None if value is None else str(value)

    def try_cast(self, value: Any) -> float | None:
        value = _scalar(self, value)
        return None if value is None else float(value)


class BooleanElement(LeafElement):
    """A checkbox. Any submitted value other than ``None``, ``""`` and ``"0"`` is true.

    Args:
        http_value: HTTP value of the checked box.
    """

    def __init__(
        self,
        validator: ValueValidator | None = None,
        transformer: Transformer | None = None,
        http_value: str = "1",
    ) -> None:
        super().__init__(validator, transformer)
        self.checked_value = http_value

    def to_python(self, value: Any) -> bool:
        return value not in (None, "", "0")

    def to_http(self, value: Any) -> str | None:
        return self.checked_value if value else None

    def try_cast(self, value: Any) -> bool | None:
        value = _scalar(self, value)
        return None if value is None else bool(value)

    def view(self, field: HttpFieldPath | None = None) -> FieldView:
        rules = normalize_rules(self.validator)
        return FieldView(
            type=type(self).__name__,
            name=str(field) if field is not None else "",
            value=self.checked_value,
            error=self._error.message,
            required="required" in rules,
            constraints=rules,
            checked=bool(self._value),
        )


class DateTimeElement(LeafElement):
    """A date-time.

    Args:
        format: ``strptime`` format of the HTTP value. ``None`` for ISO 8601.
        timezone: Convert parsed values to this timezone. Naive values are
            assumed to be in it.
    """

    def __init__(
        self,
        validator: ValueValidator | None = None,
        transformer: Transformer | None = None,
        format: str | None = None,
        timezone: tzinfo | None = None,
    ) -> None:
        super().__init__(validator, transformer)
        self.format = format
        self.timezone = timezone

    def to_python(self, value: Any) -> datetime | None:
        if value is None or value == "":
            return None

        if not isinstance(value, datetime):
            try:
                value = (
                    datetime.strptime(value, self.format)
                    if self.format is not None
                    else datetime.fromisoformat(value)
                )
            except (TypeError, ValueError):
                msg = "This value is not a valid datetime."
                raise TransformationError(msg) from None

        return self._localize(value)

    def to_http(self, value: Any) -> str | None:
        if value is None:
            return None
        if self.format is not None:
            return value.strftime(self.format)
        return value.isoformat()

    def try_cast(self, value: Any) -> datetime | None:
        if value is None or isinstance(value, datetime):
            return value
        return self.to_python(value)

    def _localize(self, value: datetime) -> datetime:
        if self.timezone is None:
            return value
        if value.tzinfo is None:
            return value.replace(tzinfo=self.timezone)
        return value.astimezone(self.timezone)
