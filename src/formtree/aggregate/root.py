"""Root form — the top of a form tree, with its submit buttons.

``FormBuilder.build_root()`` wraps the built form into a ``RootForm``.
The root receives the whole request payload: the buttons read it before
the form does, and are written back by ``http_value()``.

Usage::

    builder = FormBuilder()
    builder.string("title").required().setter()
    builder.button("save")
    builder.button("delete", "yes")

    root = builder.build_root()
    root.submit({"title": "Hello", "save": "ok"})

    root.valid                  # True
    root.submit_button().name   # "save"
    root.value()                # {"title": "Hello"}
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from dataclasses import replace
from typing import TYPE_CHECKING, Any, Self

from formtree.element import ChildAggregate
from formtree.errors import InvalidOperation
from formtree.path import FieldFinder

if TYPE_CHECKING:
    from formtree.aggregate.form import Form
    from formtree.button import SubmitButton
    from formtree.child.child import Child
    from formtree.http.fields import HttpFieldPath
    from formtree.validation.error import FormError
    from formtree.view import FormView

logger = logging.getLogger("formtree.aggregate")


class RootForm(FieldFinder, ChildAggregate):
    """The root of a form tree. Cannot be embedded into another form.

    Args:
        form: The form to wrap.
        buttons: The submit buttons. When several buttons are clicked,
            the first one declared is the submit button.
    """

    def __init__(self, form: Form, buttons: Iterable[SubmitButton] = ()) -> None:
        self._form = form
        self._buttons = {button.name: button for button in buttons}
        self._submit_button: SubmitButton | None = None
        form.set_root(self)

    @property
    def form(self) -> Form:
        return self._form

    @property
    def buttons(self) -> dict[str, SubmitButton]:
        return dict(self._buttons)

    def submit_button(self) -> SubmitButton | None:
        """The button clicked on the last submit, ``None`` if none was."""
        return self._submit_button

    def button(self, name: str) -> SubmitButton:
        """Get a button by name.

        Raises:
            KeyError: If no button is named *name*.
        """
        try:
            return self._buttons[name]
        except KeyError:
            msg = f"The button {name!r} is not found"
            raise KeyError(msg) from None

    # -- Element ---------------------------------------------------------------

    def submit(self, data: Any) -> Self:
        self._submit_to_buttons(data)
        self._form.submit(data)
        return self

    def patch(self, data: Any) -> Self:
        self._submit_to_buttons(data)
        self._form.patch(data)
        return self

    def import_(self, entity: Any) -> Self:
        self._form.import_(entity)
        return self

    def attach(self, entity: Any) -> Self:
        self._form.attach(entity)
        return self

    def value(self) -> Any:
        return self._form.value()

    def http_value(self) -> Any:
        """The form HTTP value, with the value of every button."""
        http = self._form.http_value()

        if not self._buttons:
            return http

        http = dict(http or {})
        for button in self._buttons.values():
            for name, value in button.to_http().items():
                http.setdefault(name, value)

        return http

    @property
    def valid(self) -> bool:
        return self._form.valid

    def error(self, field: HttpFieldPath | None = None) -> FormError:
        return self._form.error(field)

    def view(self, field: HttpFieldPath | None = None) -> FormView:
        return replace(
            self._form.view(field),
            buttons={name: button.view(field) for name, button in self._buttons.items()},
        )

    def set_container(self, container: Child) -> Self:
        msg = "Cannot wrap a root form into a container"
        raise InvalidOperation(msg)

    # -- Children --------------------------------------------------------------

    def __getitem__(self, name: Any) -> Child:
        return self._form[name]

    def __contains__(self, name: object) -> bool:
        return name in self._form

    def __iter__(self) -> Iterator[Child]:
        return iter(self._form)

    def __len__(self) -> int:
        return len(self._form)

    def __repr__(self) -> str:
        return f"RootForm({self._form!r}, buttons={list(self._buttons)!r})"

    # -- Internals -------------------------------------------------------------

    def _submit_to_buttons(self, data: Any) -> None:
        self._submit_button = None

        for button in self._buttons.values():
            if button.submit(data) and self._submit_button is None:
                self._submit_button = button

        if self._submit_button is not None:
            logger.debug("Form submitted with button %r", self._submit_button.name)
