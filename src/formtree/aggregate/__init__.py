"""Containers — forms and arrays — and their builders."""

from formtree.aggregate.array import ArrayElement
from formtree.aggregate.builder import ArrayChildBuilder, ArrayElementBuilder, FormBuilder
from formtree.aggregate.custom import CustomForm, CustomFormBuilder
from formtree.aggregate.form import Form
from formtree.aggregate.root import RootForm
from formtree.aggregate.value import ValueGenerator, ValueSource

__all__ = [
    "ArrayChildBuilder",
    "ArrayElement",
    "ArrayElementBuilder",
    "CustomForm",
    "CustomFormBuilder",
    "Form",
    "FormBuilder",
    "RootForm",
    "ValueGenerator",
    "ValueSource",
]
