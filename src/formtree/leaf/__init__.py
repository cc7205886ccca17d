"""Leaf elements and their builders."""

from formtree.leaf.builders import (
    AnyElementBuilder,
    BooleanElementBuilder,
    DateTimeElementBuilder,
    FloatElementBuilder,
    IntegerElementBuilder,
    LeafElementBuilder,
    StringElementBuilder,
)
from formtree.leaf.elements import (
    AnyElement,
    BooleanElement,
    DateTimeElement,
    FloatElement,
    IntegerElement,
    LeafElement,
    StringElement,
)

__all__ = [
    "AnyElement",
    "AnyElementBuilder",
    "BooleanElement",
    "BooleanElementBuilder",
    "DateTimeElement",
    "DateTimeElementBuilder",
    "FloatElement",
    "FloatElementBuilder",
    "IntegerElement",
    "IntegerElementBuilder",
    "LeafElement",
    "LeafElementBuilder",
    "StringElement",
    "StringElementBuilder",
]
