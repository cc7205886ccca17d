"""Value generators — create the model filled by a form."""

from __future__ import annotations

import copy
from typing import Any, Protocol


class ValueSource(Protocol):
    """Anything able to create and attach the value of a form."""

    def generate(self, form: Any) -> Any: ...

    def attach(self, entity: Any) -> None: ...


class ValueGenerator:
    """Create the form value from a prototype.

    - a class is instantiated without arguments
    - any other callable is called with the form
    - another object is shallow copied

    An attached value replaces the prototype. An attached object is
    returned as is, so the form fills it in place.

    Usage::

        ValueGenerator(Person).generate(form)                 # Person()
        ValueGenerator(lambda form: {"id": 1}).generate(form)  # {"id": 1}
        ValueGenerator({"tags": []}).generate(form)             # a copy
    """

    __slots__ = ("_attached", "_value")

    def __init__(self, value: Any = dict) -> None:
        self._value = value
        self._attached = False

    def attach(self, entity: Any) -> None:
        self._value = entity
        self._attached = True

    def generate(self, form: Any) -> Any:
        if isinstance(self._value, type):
            return self._value()
        if callable(self._value):
            return self._value(form)
        if self._attached:
            return self._value
        return copy.copy(self._value)

    def __repr__(self) -> str:
        return f"ValueGenerator({self._value!r})"
