"""Value transformers — convert between HTTP values and model values.

A transformer has two directions:

- ``transform_from_http(value, element)``: on submit, before validation
- ``transform_to_http(value, element)``: when producing the HTTP value

Any exception raised by ``transform_from_http`` is caught by the element
and reported as a ``FormError`` (see ``TransformerErrorPolicy``).

Usage::

    def csv(value, element, from_http):
        if from_http:
            return value.split(",") if value else []
        return ",".join(value or [])

    builder.array("tags").transformer(csv)
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import Any, ClassVar, Protocol


class Transformer(Protocol):
    def transform_to_http(self, value: Any, element: Any) -> Any: ...

    def transform_from_http(self, value: Any, element: Any) -> Any: ...


class NullTransformer:
    """Return values unchanged. Shared through ``NullTransformer.instance()``."""

    __slots__ = ()

    _instance: ClassVar[NullTransformer | None] = None

    def transform_to_http(self, value: Any, element: Any) -> Any:
        return value

    def transform_from_http(self, value: Any, element: Any) -> Any:
        return value

    @classmethod
    def instance(cls) -> NullTransformer:
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance


class ClosureTransformer:
    """Transformer calling ``callback(value, element, from_http)``."""

    __slots__ = ("callback",)

    def __init__(self, callback: Callable[[Any, Any, bool], Any]) -> None:
        self.callback = callback

    def transform_to_http(self, value: Any, element: Any) -> Any:
        return self.callback(value, element, False)

    def transform_from_http(self, value: Any, element: Any) -> Any:
        return self.callback(value, element, True)


class TransformerAggregate:
    """Chain of transformers.

    ``transform_to_http`` applies them in order, ``transform_from_http``
    in reverse order, so the last added transformer is the closest to
    the HTTP value.
    """

    __slots__ = ("transformers",)

    def __init__(self, transformers: Iterable[Transformer] = ()) -> None:
        self.transformers = list(transformers)

    def transform_to_http(self, value: Any, element: Any) -> Any:
        for transformer in self.transformers:
            value = transformer.transform_to_http(value, element)
        return value

    def transform_from_http(self, value: Any, element: Any) -> Any:
        for transformer in reversed(self.transformers):
            value = transformer.transform_from_http(value, element)
        return value

    def prepend(self, transformer: Transformer) -> None:
        self.transformers.insert(0, transformer)

    def append(self, transformer: Transformer) -> None:
        self.transformers.append(transformer)


def as_transformer(value: Transformer | Callable[[Any, Any, bool], Any]) -> Transformer:
    """Normalise a transformer. A bare callable is wrapped with ``ClosureTransformer``."""
    if hasattr(value, "transform_from_http"):
        return value  # type: ignore[return-value]
    return ClosureTransformer(value)


def aggregate(transformers: list[Transformer]) -> Transformer:
    """Single transformer for a list: null, the only one, or an aggregate."""
    if not transformers:
        return NullTransformer.instance()
    if len(transformers) == 1:
        return transformers[0]
    return TransformerAggregate(transformers)
