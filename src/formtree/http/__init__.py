"""HTTP side of forms — field strategies, value helpers, payload decoding."""

from formtree.http.fields import (
    ArrayOffsetHttpFields,
    HttpFieldPath,
    HttpFields,
    PrefixedHttpFields,
)
from formtree.http.payload import UploadedFile, flatten, from_multi_value, nest, parse_body
from formtree.http.value import is_empty, or_default

__all__ = [
    "ArrayOffsetHttpFields",
    "HttpFieldPath",
    "HttpFields",
    "PrefixedHttpFields",
    "UploadedFile",
    "flatten",
    "from_multi_value",
    "is_empty",
    "nest",
    "or_default",
    "parse_body",
]
