"""Tests for formtree.validation — rules, validators and field comparisons."""

import pytest

from formtree import FormBuilder
from formtree.errors import TransformationError
from formtree.validation import (
    ConstraintValueValidator,
    NullValueValidator,
    Rule,
    TransformerErrorPolicy,
    Violation,
    as_rule,
    count,
    email,
    equal_to_field,
    from_rules,
    greater_than_field,
    greater_than_or_equal_field,
    length,
    less_than_or_equal_field,
    matches,
    max_value,
    min_value,
    one_of,
    required,
    satisfy,
    url,
)

# ---------------------------------------------------------------------------
# Individual rule tests
# ---------------------------------------------------------------------------


class TestRule:
    def test_true_and_none_are_valid(self) -> None:
        assert Rule("r", lambda value, element: True)("x") is None
        assert Rule("r", lambda value, element: None)("x") is None

    def test_false_uses_formatted_message(self) -> None:
        rule = Rule("r", lambda value, element: False, "CODE", "Limit is {limit}.", {"limit": 3})

        assert rule("x") == Violation("Limit is 3.", "CODE")

    def test_string_result(self) -> None:
        rule = Rule("r", lambda value, element: "custom", "CODE")

        assert rule("x") == Violation("custom", "CODE")

    def test_tuple_result(self) -> None:
        rule = Rule("r", lambda value, element: ("custom", "OTHER"), "CODE")

        assert rule("x") == Violation("custom", "OTHER")

    def test_as_rule(self) -> None:
        rule = required()

        assert as_rule(rule) is rule
        assert as_rule(lambda value, element: True).name == "satisfy"


class TestRequired:
    @pytest.mark.parametrize("value", [None, "", False, [], {}, ()])
    def test_blank(self, value: object) -> None:
        assert required()(value) == Violation("This value should not be blank.", "IS_BLANK_ERROR")

    @pytest.mark.parametrize("value", ["a", 0, True, ["a"], {"a": 1}])
    def test_valid(self, value: object) -> None:
        assert required()(value) is None

    def test_custom_message(self) -> None:
        assert required("my message")(None).message == "my message"


class TestLength:
    def test_too_short(self) -> None:
        violation = length(min=3)("ab")

        assert violation == Violation(
            "This value is too short. It should have 3 characters or more.",
            "TOO_SHORT_ERROR",
        )

    def test_too_long(self) -> None:
        violation = length(max=3)("abcd")

        assert violation == Violation(
            "This value is too long. It should have 3 characters or less.",
            "TOO_LONG_ERROR",
        )

    def test_within_limits(self) -> None:
        assert length(min=2, max=3)("abc") is None

    def test_empty_is_valid(self) -> None:
        assert length(min=3)("") is None
        assert length(min=3)(None) is None

    def test_options(self) -> None:
        assert dict(length(min=1, max=2).options) == {"min": 1, "max": 2}


class TestMatches:
    def test_match(self) -> None:
        assert matches(r"[a-z]+")("abc") is None

    def test_no_match(self) -> None:
        assert matches(r"[a-z]+")("123").code == "REGEX_FAILED_ERROR"

    def test_options(self) -> None:
        assert matches(r"[a-z]+").options["pattern"] == "[a-z]+"


class TestEmail:
    def test_valid(self) -> None:
        assert email()("user@example.com") is None

    def test_invalid(self) -> None:
        assert email()("userexample.com") is not None

    def test_empty(self) -> None:
        assert email()("") is None


class TestUrl:
    def test_valid(self) -> None:
        assert url()("https://example.com/path?q=1") is None

    def test_no_scheme(self) -> None:
        assert url()("example.com") is not None


class TestOneOf:
    def test_scalar(self) -> None:
        rule = one_of("a", "b")

        assert rule("a") is None
        assert rule("c") == Violation(
            "The value you selected is not a valid choice.",
            "NO_SUCH_CHOICE_ERROR",
        )

    def test_collections(self) -> None:
        rule = one_of("a", "b")

        assert rule(["a", "b"]) is None
        assert rule({0: "a", 1: "c"}) is not None

    def test_empty_is_valid(self) -> None:
        assert one_of("a")(None) is None


class TestNumbers:
    def test_min_value(self) -> None:
        assert min_value(2)(2) is None
        assert min_value(2)(1) == Violation(
            "This value should be greater than or equal to 2.",
            "TOO_LOW_ERROR",
        )

    def test_max_value(self) -> None:
        assert max_value(2)(2) is None
        assert max_value(2)(3).message == "This value should be less than or equal to 2."

    def test_empty_is_valid(self) -> None:
        assert min_value(2)(None) is None


class TestCount:
    def test_too_few(self) -> None:
        assert count(min=2)(["a"]) == Violation(
            "This collection should contain 2 elements or more.",
            "TOO_FEW_ERROR",
        )

    def test_too_many(self) -> None:
        assert count(max=1)({0: "a", 1: "b"}) == Violation(
            "This collection should contain 1 elements or less.",
            "TOO_MANY_ERROR",
        )

    def test_none_counts_as_empty(self) -> None:
        assert count(min=1)(None) is not None
        assert count(max=1)(None) is None


class TestSatisfy:
    def test_default_message(self) -> None:
        rule = satisfy(lambda value, element: value == "ok")

        assert rule("ok") is None
        assert rule("ko") == Violation("This value is not valid.", "CUSTOM_ERROR")

    def test_message_and_code(self) -> None:
        rule = satisfy(lambda value, element: False, "my message", "MY_CODE")

        assert rule("x") == Violation("my message", "MY_CODE")

    def test_receives_element(self) -> None:
        seen = []
        satisfy(lambda value, element: seen.append(element))("x", "element")

        assert seen == ["element"]


# ---------------------------------------------------------------------------
# Validators
# ---------------------------------------------------------------------------


class TestValidators:
    def test_first_violation_wins(self) -> None:
        validator = ConstraintValueValidator([required(), length(min=5)])

        assert validator.validate("", None).code == "IS_BLANK_ERROR"
        assert validator.validate("abc", None).code == "TOO_SHORT_ERROR"
        assert validator.validate("abcdef", None).is_empty

    def test_wraps_callables(self) -> None:
        validator = ConstraintValueValidator([lambda value, element: value == "ok"])

        assert validator.has_constraints()
        assert validator.rules[0].name == "satisfy"

    def test_null_validator(self) -> None:
        validator = NullValueValidator.instance()

        assert NullValueValidator.instance() is validator
        assert not validator.has_constraints()
        assert validator.validate(None, None).is_empty

    def test_from_rules(self) -> None:
        assert from_rules([]) is NullValueValidator.instance()
        assert isinstance(from_rules([], TransformerErrorPolicy(ignore=True)), NullValueValidator)
        assert isinstance(from_rules([required()]), ConstraintValueValidator)

    def test_transformer_exception(self) -> None:
        error = NullValueValidator.instance().on_transformer_exception(
            TransformationError("bad value"), "x", None
        )

        assert error.message == "bad value"
        assert error.code == "TRANSFORM_ERROR"

    def test_transformer_error_policy(self) -> None:
        exc = ValueError("bad value")

        assert TransformerErrorPolicy(message="other").error(exc, "x", None).message == "other"
        assert TransformerErrorPolicy(code="MY_CODE").error(exc, "x", None).code == "MY_CODE"
        assert TransformerErrorPolicy(ignore=True).error(exc, "x", None).is_empty

        policy = TransformerErrorPolicy(callback=lambda value, exc, element: value != "skip")
        assert policy.error(exc, "skip", None).is_empty
        assert not policy.error(exc, "x", None).is_empty


# ---------------------------------------------------------------------------
# Field comparison rules
# ---------------------------------------------------------------------------


def _range_form(rule):
    builder = FormBuilder()
    builder.integer("min")
    builder.integer("max").depends("min").satisfy(rule)
    return builder.build_element()


class TestFieldRules:
    def test_equal_to_field(self) -> None:
        builder = FormBuilder()
        builder.string("password")
        builder.string("confirm").depends("password").satisfy(equal_to_field("password"))
        form = builder.build_element()

        assert form.submit({"password": "a", "confirm": "a"}).valid
        assert not form.submit({"password": "a", "confirm": "b"}).valid
        assert form.error().to_dict() == {"confirm": "This value should be equal to password."}
        assert form.error().children["confirm"].code == "NOT_EQUAL_ERROR"

    def test_empty_values_pass(self) -> None:
        form = _range_form(greater_than_field("min"))

        assert form.submit({"min": "", "max": "1"}).valid
        assert form.submit({"min": "5", "max": ""}).valid

    @pytest.mark.parametrize(
        ("rule", "data", "valid"),
        [
            (greater_than_field("min"), {"min": "1", "max": "2"}, True),
            (greater_than_field("min"), {"min": "2", "max": "2"}, False),
            (greater_than_or_equal_field("min"), {"min": "2", "max": "2"}, True),
            (less_than_or_equal_field("min"), {"min": "2", "max": "3"}, False),
        ],
    )
    def test_comparisons(self, rule: Rule, data: dict, valid: bool) -> None:
        assert _range_form(rule).submit(data).valid is valid

    def test_absolute_path(self) -> None:
        builder = FormBuilder()
        builder.string("password")
        builder.embedded("confirm", lambda confirm: confirm.string("value").satisfy(
            equal_to_field("/password")
        ))
        builder["confirm"].depends("password")
        form = builder.build_element()

        assert form.submit({"password": "a", "confirm": {"value": "a"}}).valid
        assert not form.submit({"password": "a", "confirm": {"value": "b"}}).valid

    def test_custom_message(self) -> None:
        form = _range_form(greater_than_field("min", "Must exceed {field}."))
        form.submit({"min": "3", "max": "1"})

        assert form.error().to_dict() == {"max": "Must exceed min."}

    def test_incomparable_values_fail(self) -> None:
        builder = FormBuilder()
        builder.string("a")
        builder.integer("b").depends("a").satisfy(greater_than_field("a"))
        form = builder.build_element()

        assert not form.submit({"a": "x", "b": "1"}).valid
