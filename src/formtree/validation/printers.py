"""Error printers — render a ``FormError`` tree.

``FormError.print()`` walks the tree and calls the printer hooks; the
printer decides what to do with them:

- ``StringErrorPrinter``: indented multi-line text (used by ``str()``)
- ``ImplodeErrorPrinter``: every message joined by a separator
- ``FieldErrorPrinter``: ``{http field: [messages]}``, ready for a
  template re-rendering the form
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from formtree.http.fields import HttpFieldPath
    from formtree.validation.error import FormError


class ErrorPrinter(Protocol):
    """Hooks called by ``FormError.print()``."""

    def field(self, path: HttpFieldPath) -> None: ...

    def message(self, message: str) -> None: ...

    def code(self, code: str) -> None: ...

    def child(self, name: Any, error: FormError) -> None:
        """Print a child error, usually by calling ``error.print(self)``."""
        ...

    def output(self) -> Any: ...


class StringErrorPrinter:
    """Print errors as indented lines.

    Usage::

        error.print(StringErrorPrinter(line_separator="<br>", max_depth=1))
    """

    __slots__ = ("_depth", "_output", "indent", "line_separator", "max_depth", "name_separator")

    def __init__(
        self,
        *,
        line_separator: str = "\n",
        indent: str = "  ",
        name_separator: str = " : ",
        max_depth: int | None = None,
    ) -> None:
        self.line_separator = line_separator
        self.indent = indent
        self.name_separator = name_separator
        self.max_depth = max_depth
        self._depth = 0
        self._output = ""

    def field(self, path: HttpFieldPath) -> None:
        pass

    def message(self, message: str) -> None:
        self._output += message

    def code(self, code: str) -> None:
        pass

    def child(self, name: Any, error: FormError) -> None:
        if self.max_depth is not None and self._depth >= self.max_depth:
            return

        if self._output:
            self._output += self.line_separator

        self._output += f"{self.indent * self._depth}{name}{self.name_separator}"

        self._depth += 1
        error.print(self)
        self._depth -= 1

    def output(self) -> str:
        return self._output


class ImplodeErrorPrinter:
    """Join every message of the tree, ignoring names."""

    __slots__ = ("_depth", "_lines", "separator")

    def __init__(self, separator: str = "\n") -> None:
        self.separator = separator
        self._lines: list[str] = []
        self._depth = 0

    def field(self, path: HttpFieldPath) -> None:
        pass

    def message(self, message: str) -> None:
        self._lines.append(message)

    def code(self, code: str) -> None:
        pass

    def child(self, name: Any, error: FormError) -> None:
        self._depth += 1
        error.print(self)
        self._depth -= 1

    def output(self) -> str | None:
        if self._depth:
            return None
        return self.separator.join(self._lines)


class FieldErrorPrinter:
    """Collect messages by HTTP field name.

    The field name comes from the error field path when set (errors read
    through ``form.error()`` always carry one), or is built from the
    child names otherwise. Global messages of the printed error itself
    are stored under ``""``.

    Usage::

        errors = form.error().print(FieldErrorPrinter())
        # {"user[name]": ["This value should not be blank."]}
    """

    __slots__ = ("_errors", "_names")

    def __init__(self) -> None:
        self._errors: dict[str, list[str]] = {}
        self._names: list[str] = [""]

    def field(self, path: HttpFieldPath) -> None:
        self._names[-1] = str(path)

    def message(self, message: str) -> None:
        self._errors.setdefault(self._names[-1], []).append(message)

    def code(self, code: str) -> None:
        pass

    def child(self, name: Any, error: FormError) -> None:
        parent = self._names[-1]
        self._names.append(f"{parent}[{name}]" if parent else str(name))
        error.print(self)
        self._names.pop()

    def output(self) -> dict[str, list[str]]:
        return self._errors
