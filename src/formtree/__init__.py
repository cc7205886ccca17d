"""formtree — form definition, submission and data binding.

Declare a form once, then submit HTTP payloads to it, import models into
it, and read back typed values, HTTP values and structured errors.
Fields can depend on each other: they are submitted in dependency order,
so cross-field rules always see up-to-date values.

Basic usage::

    from formtree import FormBuilder
    from formtree.validation import equal_to_field

    builder = FormBuilder()
    builder.string("login").required().setter()
    builder.string("password").required().setter()
    builder.string("confirm").depends("password").satisfy(equal_to_field("password"))

    form = builder.build_element()
    form.submit({"login": "john", "password": "s3cr3t", "confirm": "s3cr3t"})

    if form.valid:
        save(form.value())
    else:
        errors = form.error().to_dict()

Flat form fields (``user[name]=...``) are decoded with
``formtree.http.nest()`` or ``formtree.http.parse_body()``;
multipart bodies need ``pip install formtree[multipart]``.
"""

__version__ = "0.1.0"
__all__ = [
    "ArrayElement",
    "Child",
    "ConfigurationError",
    "CustomForm",
    "DependencyTree",
    "Form",
    "FormBuilder",
    "FormConfig",
    "FormError",
    "FormTreeError",
    "InvalidOperation",
    "Registry",
    "RootForm",
    "SubmitButton",
    "TransformationError",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import formtree`` fast while providing a clean top-level API.
    """
    if name in ("Form", "FormBuilder", "ArrayElement", "CustomForm", "RootForm"):
        from formtree import aggregate as _aggregate

        return getattr(_aggregate, name)

    if name == "Child":
        from formtree.child.child import Child

        return Child

    if name == "DependencyTree":
        from formtree.collection.tree import DependencyTree

        return DependencyTree

    if name == "FormConfig":
        from formtree.config import FormConfig

        return FormConfig

    if name == "FormError":
        from formtree.validation.error import FormError

        return FormError

    if name == "SubmitButton":
        from formtree.button import SubmitButton

        return SubmitButton

    if name == "Registry":
        from formtree.registry import Registry

        return Registry

    if name in ("ConfigurationError", "FormTreeError", "InvalidOperation", "TransformationError"):
        from formtree import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
