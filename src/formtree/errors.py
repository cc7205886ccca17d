"""formtree exception hierarchy.

Only programmer errors raise. Invalid submitted data is never an
exception: it ends up in the element's ``FormError``.
"""


class FormTreeError(Exception):
    """Base for all formtree-specific errors."""


class ConfigurationError(FormTreeError):
    """Raised when a builder or registry is used incorrectly.

    Typically raised while building the form definition, before any
    data is submitted.
    """


class InvalidOperation(FormTreeError, TypeError):  # noqa: N818
    """Raised when writing through a read-only API.

    Containers expose their children with ``form["name"]``, but children
    can only be declared through a builder.
    """


class TransformationError(FormTreeError, ValueError):
    """An HTTP value cannot be converted to its Python representation.

    Raised by built-in coercions and transformers, and caught at the
    element boundary where it becomes a ``FormError``.
    """
