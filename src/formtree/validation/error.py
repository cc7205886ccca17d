"""Structured form errors.

A ``FormError`` is an immutable tree: a global message (and code) for the
element itself, and one error per failing child, keyed by child name
(or array index). Submitting never raises on bad data, the error is
read back with ``element.error()``.

Usage::

    form.submit({"name": ""})
    if not form.valid:
        form.error().to_dict()    # {"name": "This value should not be blank."}
        str(form.error())         # "name : This value should not be blank."
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, replace
from dataclasses import field as dc_field
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, ClassVar

if TYPE_CHECKING:
    from formtree.http.fields import HttpFieldPath
    from formtree.validation.printers import ErrorPrinter


@dataclass(frozen=True, slots=True)
class FormError:
    """Error of an element and of its children.

    Attributes:
        message: Error on the element itself, ``None`` if only children failed.
        code: Machine readable error code.
        children: Errors of the failing children, by name or index.
        field: HTTP field path of the element, once known.
    """

    message: str | None = None
    code: str | None = None
    children: Mapping[Any, FormError] = dc_field(default_factory=lambda: MappingProxyType({}))
    field: HttpFieldPath | None = None

    _null: ClassVar[FormError | None] = None

    @property
    def is_empty(self) -> bool:
        """True if neither the element nor any of its children failed."""
        if self.message or self.code:
            return False
        return all(child.is_empty for child in self.children.values())

    def to_dict(self) -> dict[Any, Any]:
        """Errors as a nested dict.

        The global message is stored under the key ``0``. A child with a
        global message is reduced to that message.
        """
        errors: dict[Any, Any] = {}

        if self.message:
            errors[0] = self.message

        for name, child in self.children.items():
            errors[name] = child.message if child.message else child.to_dict()

        return errors

    def print(self, printer: ErrorPrinter) -> Any:
        """Walk the error with *printer* and return its output."""
        if self.field is not None:
            printer.field(self.field)
        if self.message:
            printer.message(self.message)
        if self.code:
            printer.code(self.code)
        for name, child in self.children.items():
            printer.child(name, child)

        return printer.output()

    def with_field(self, path: HttpFieldPath) -> FormError:
        """Copy of the error located on the HTTP field *path*.

        Children fields are prefixed by *path*.
        """
        return replace(
            self,
            field=path,
            children=MappingProxyType(
                {name: child._with_prefix(path) for name, child in self.children.items()}
            ),
        )

    def _with_prefix(self, prefix: HttpFieldPath) -> FormError:
        return replace(
            self,
            field=prefix.concat(self.field) if self.field is not None else prefix,
            children=MappingProxyType(
                {name: child._with_prefix(prefix) for name, child in self.children.items()}
            ),
        )

    @classmethod
    def null(cls) -> FormError:
        """The shared empty error."""
        if cls._null is None:
            cls._null = cls()
        return cls._null

    @classmethod
    def single(cls, message: str, code: str | None = None) -> FormError:
        """Error with a global message only."""
        return cls(message, code)

    @classmethod
    def aggregate(cls, children: Mapping[Any, FormError]) -> FormError:
        """Error made only of children errors."""
        return cls(children=MappingProxyType(dict(children)))

    def __str__(self) -> str:
        from formtree.validation.printers import StringErrorPrinter

        return self.print(StringErrorPrinter())
