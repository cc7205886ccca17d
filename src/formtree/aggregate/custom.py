"""Custom forms — a form definition packaged as a class.

Usage::

    class LoginForm(CustomForm):
        def configure(self, builder: FormBuilder) -> None:
            builder.string("login").required().setter()
            builder.string("password").required().setter()

    form = LoginForm()
    form.submit({"login": "john", "password": "secret"})
    form.value()   # {"login": "john", "password": "secret"}

A custom form can be embedded like any other element::

    builder.add("credentials", LoginForm)
"""

from __future__ import annotations

from abc import abstractmethod
from collections.abc import Callable, Iterator
from dataclasses import replace
from typing import TYPE_CHECKING, Any, Self, TypeAlias

from formtree.aggregate.builder import FormBuilder
from formtree.builder import AbstractElementBuilder
from formtree.element import ChildAggregate
from formtree.path import FieldFinder

if TYPE_CHECKING:
    from formtree.aggregate.form import Form
    from formtree.child.child import Child
    from formtree.http.fields import HttpFieldPath
    from formtree.registry import Registry
    from formtree.transformers import Transformer
    from formtree.validation.error import FormError
    from formtree.validation.rules import Rule
    from formtree.validation.validator import ValueValidator
    from formtree.view import FormView

ConfigureHook: TypeAlias = Callable[["CustomForm", FormBuilder], Any]


class CustomForm(FieldFinder, ChildAggregate):
    """Base of custom forms. Subclasses declare the children in ``configure()``.

    The inner form is built on first use. Copies made by embedding share
    the definition of the prototype: rules should reach other fields
    through the validated element, not through ``self``.
    """

    def __init__(self, builder: FormBuilder | None = None) -> None:
        self._builder = builder or FormBuilder()
        self._form: Form | None = None
        self._pre_configure_hooks: list[ConfigureHook] = []
        self._post_configure_hooks: list[ConfigureHook] = []

    @abstractmethod
    def configure(self, builder: FormBuilder) -> None:
        """Declare the form children and options."""

    @property
    def inner_form(self) -> Form:
        if self._form is None:
            for hook in self._pre_configure_hooks:
                hook(self, self._builder)

            self.configure(self._builder)

            for hook in self._post_configure_hooks:
                hook(self, self._builder)

            self._form = self._builder.build_element()  # type: ignore[assignment]

        return self._form  # type: ignore[return-value]

    def set_hooks(self, pre_configure: list[ConfigureHook], post_configure: list[ConfigureHook]) -> None:
        self._pre_configure_hooks = list(pre_configure)
        self._post_configure_hooks = list(post_configure)

    # -- Element ---------------------------------------------------------------

    def submit(self, data: Any) -> Self:
        self.inner_form.submit(data)
        return self

    def patch(self, data: Any) -> Self:
        self.inner_form.patch(data)
        return self

    def import_(self, entity: Any) -> Self:
        self.inner_form.import_(entity)
        return self

    def attach(self, entity: Any) -> Self:
        self.inner_form.attach(entity)
        return self

    def value(self) -> Any:
        return self.inner_form.value()

    def http_value(self) -> Any:
        return self.inner_form.http_value()

    @property
    def valid(self) -> bool:
        return self.inner_form.valid

    def error(self, field: HttpFieldPath | None = None) -> FormError:
        return self.inner_form.error(field)

    def view(self, field: HttpFieldPath | None = None) -> FormView:
        return replace(self.inner_form.view(field), type=type(self).__name__)

    def set_container(self, container: Child) -> Self:
        # Configure the prototype once, copies share its definition
        _ = self.inner_form
        return super().set_container(container)

    def _rebind(self) -> None:
        container = self.container
        if container is not None:
            self._form = self.inner_form.set_container(container)

    # -- Children --------------------------------------------------------------

    def __getitem__(self, name: Any) -> Child:
        return self.inner_form[name]

    def __contains__(self, name: object) -> bool:
        return name in self.inner_form

    def __iter__(self) -> Iterator[Child]:
        return iter(self.inner_form)

    def __len__(self) -> int:
        return len(self.inner_form)

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class CustomFormBuilder(AbstractElementBuilder):
    """Builder of a custom form, usable as a child of another form.

    Element options are forwarded to the inner ``FormBuilder``.

    Args:
        factory: The custom form class, or a callable taking the builder.
        builder: Inner form builder.
    """

    def __init__(
        self,
        factory: type[CustomForm] | Callable[[FormBuilder], CustomForm],
        builder: FormBuilder | None = None,
        registry: Registry | None = None,
    ) -> None:
        builder = builder or FormBuilder(registry)
        super().__init__(builder.registry)
        self._factory = factory
        self._builder = builder
        self._pre_configure: list[ConfigureHook] = []
        self._post_configure: list[ConfigureHook] = []

    @property
    def form_builder(self) -> FormBuilder:
        return self._builder

    def pre_configure(self, hook: ConfigureHook) -> Self:
        """Call ``hook(form, builder)`` before ``configure()``."""
        self._pre_configure.append(hook)
        return self

    def post_configure(self, hook: ConfigureHook) -> Self:
        """Call ``hook(form, builder)`` after ``configure()``."""
        self._post_configure.append(hook)
        return self

    def value(self, value: Any) -> Self:
        self._builder.value(value)
        return self

    def satisfy(self, *rules: Rule | Callable[..., Any], append: bool = True) -> Self:
        self._builder.satisfy(*rules, append=append)
        return self

    def transformer(self, transformer: Transformer | Callable[..., Any], append: bool = True) -> Self:
        self._builder.transformer(transformer, append)
        return self

    def _transformer_errors_option(self, **options: Any) -> Self:
        self._builder._transformer_errors_option(**options)
        return self

    def build_element(self) -> CustomForm:
        form = self._factory(self._builder)
        form.set_hooks(self._pre_configure, self._post_configure)
        return form

    def _create_element(self, validator: ValueValidator, transformer: Transformer) -> CustomForm:
        return self.build_element()
