"""Tests for formtree.filters and formtree.transformers."""

import pytest

from formtree.filters import (
    ClosureFilter,
    EmptyArrayValuesFilter,
    HtmlFilter,
    TrimFilter,
    as_filter,
)
from formtree.leaf.elements import StringElement
from formtree.transformers import (
    ClosureTransformer,
    NullTransformer,
    TransformerAggregate,
    aggregate,
    as_transformer,
)


class Suffix:
    def __init__(self, suffix: str) -> None:
        self.suffix = suffix

    def transform_to_http(self, value, element):
        return value + self.suffix

    def transform_from_http(self, value, element):
        return value.removesuffix(self.suffix)


# ---------------------------------------------------------------------------
# Filters
# ---------------------------------------------------------------------------


class TestTrimFilter:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("  foo  ", "foo"),
            ("\tfoo\n", "foo"),
            (" foo ", "foo"),
            ("　foo bar　", "foo bar"),
            ("\x00foo\x1f", "foo"),
            ("   ", ""),
            ("", ""),
        ],
    )
    def test_trim(self, value: str, expected: str) -> None:
        assert TrimFilter().filter(value) == expected

    @pytest.mark.parametrize("value", [None, 42, ["  foo  "], {"a": " b "}])
    def test_non_string_unchanged(self, value: object) -> None:
        assert TrimFilter().filter(value) is value


class TestClosureFilter:
    def test_callback_receives_child(self) -> None:
        calls = []
        flt = ClosureFilter(lambda value, child: calls.append(child) or value.upper())

        assert flt.filter("foo", "child", None) == "FOO"
        assert calls == ["child"]

    def test_as_filter(self) -> None:
        trim = TrimFilter()

        assert as_filter(trim) is trim
        assert isinstance(as_filter(lambda value, child: value), ClosureFilter)


class TestEmptyArrayValuesFilter:
    def test_list(self) -> None:
        value = ["a", None, "", [], {}, "b", 0]

        assert EmptyArrayValuesFilter().filter(value) == {0: "a", 5: "b", 6: 0}

    def test_mapping(self) -> None:
        value = {"x": "a", "y": None, "z": {}}

        assert EmptyArrayValuesFilter().filter(value) == {"x": "a"}

    def test_scalar_unchanged(self) -> None:
        assert EmptyArrayValuesFilter().filter("foo") == "foo"
        assert EmptyArrayValuesFilter().filter(None) is None


class TestHtmlFilter:
    def test_escape(self) -> None:
        assert HtmlFilter().filter("<b>a & b</b>") == "&lt;b&gt;a &amp; b&lt;/b&gt;"

    def test_quote(self) -> None:
        assert HtmlFilter().filter('"a"') == '"a"'
        assert HtmlFilter(quote=True).filter('"a"') == "&quot;a&quot;"

    def test_nested(self) -> None:
        assert HtmlFilter().filter(["<a>", {"k": "<b>"}, 1]) == ["&lt;a&gt;", {"k": "&lt;b&gt;"}, 1]


# ---------------------------------------------------------------------------
# Transformers
# ---------------------------------------------------------------------------


class TestTransformers:
    def test_null_transformer(self) -> None:
        transformer = NullTransformer.instance()

        assert NullTransformer.instance() is transformer
        assert transformer.transform_from_http("a", None) == "a"
        assert transformer.transform_to_http("a", None) == "a"

    def test_closure_transformer_direction(self) -> None:
        calls = []
        transformer = ClosureTransformer(lambda value, element, from_http: calls.append(from_http) or value)

        transformer.transform_from_http("a", None)
        transformer.transform_to_http("a", None)

        assert calls == [True, False]

    def test_aggregate_order(self) -> None:
        transformer = TransformerAggregate([Suffix("-a"), Suffix("-b")])

        assert transformer.transform_to_http("x", None) == "x-a-b"
        assert transformer.transform_from_http("x-a-b", None) == "x"

    def test_aggregate_prepend_and_append(self) -> None:
        transformer = TransformerAggregate([Suffix("-b")])
        transformer.prepend(Suffix("-a"))
        transformer.append(Suffix("-c"))

        assert transformer.transform_to_http("x", None) == "x-a-b-c"

    def test_aggregate_helper(self) -> None:
        single = Suffix("-a")

        assert aggregate([]) is NullTransformer.instance()
        assert aggregate([single]) is single
        assert isinstance(aggregate([single, Suffix("-b")]), TransformerAggregate)

    def test_as_transformer(self) -> None:
        single = Suffix("-a")

        assert as_transformer(single) is single
        assert isinstance(as_transformer(lambda value, element, from_http: value), ClosureTransformer)

    def test_element_receives_transformer(self) -> None:
        element = StringElement(None, Suffix("-a"))
        element.submit("foo-a")

        assert element.value() == "foo"
        assert element.http_value() == "foo-a"
