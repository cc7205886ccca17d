"""Submit buttons of a root form.

A button is clicked when the submitted payload holds its name with its
value. A form declaring several buttons can tell which action was
requested::

    builder = FormBuilder()
    builder.string("title").setter()
    builder.button("save")
    builder.button("publish", "yes")

    root = builder.build_root()
    root.submit({"title": "Hello", "publish": "yes"})
    root.submit_button().name    # "publish"
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, Self

from formtree.view import ButtonView

if TYPE_CHECKING:
    from formtree.http.fields import HttpFieldPath


class SubmitButton:
    """A named submit button.

    Args:
        name: HTTP field name of the button.
        value: HTTP value sent when the button is clicked.
    """

    __slots__ = ("_clicked", "name", "value")

    def __init__(self, name: str, value: str = "ok") -> None:
        self.name = name
        self.value = value
        self._clicked = False

    @property
    def clicked(self) -> bool:
        """The last submitted payload was sent with this button."""
        return self._clicked

    def submit(self, data: Any) -> bool:
        """Read the button field of *data*. Returns ``clicked``."""
        submitted = data.get(self.name) if isinstance(data, Mapping) else None
        self._clicked = submitted is not None and str(submitted) == self.value
        return self._clicked

    def to_http(self) -> dict[str, str]:
        return {self.name: self.value}

    def view(self, field: HttpFieldPath | None = None) -> ButtonView:
        name = str(field.add(self.name)) if field is not None else self.name
        return ButtonView(name=name, value=self.value, clicked=self._clicked)

    def __repr__(self) -> str:
        return f"SubmitButton({self.name!r}, {self.value!r})"


class SubmitButtonBuilder:
    """Definition of a submit button.

    Args:
        name: HTTP field name of the button.
        button_class: Button class to build.
    """

    __slots__ = ("_button_class", "_name", "_value")

    def __init__(self, name: str, button_class: type[SubmitButton] = SubmitButton) -> None:
        self._name = name
        self._button_class = button_class
        self._value = "ok"

    @property
    def name(self) -> str:
        return self._name

    def value(self, value: str) -> Self:
        """The HTTP value identifying a click on the button."""
        self._value = value
        return self

    def build_button(self) -> SubmitButton:
        return self._button_class(self._name, self._value)
