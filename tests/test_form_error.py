"""Tests for formtree.validation.error and formtree.validation.printers."""

import pytest

from formtree import FormBuilder, FormError
from formtree.http.fields import HttpFieldPath
from formtree.validation.printers import FieldErrorPrinter, ImplodeErrorPrinter, StringErrorPrinter


def _nested() -> FormError:
    return FormError(
        "global",
        children={
            "a": FormError.single("x"),
            "b": FormError.aggregate({"c": FormError.single("y")}),
        },
    )


def _user_form():
    builder = FormBuilder()
    builder.string("login").required()
    builder.embedded("user", lambda user: user.string("name").required())
    return builder.build_element()


# ---------------------------------------------------------------------------
# FormError
# ---------------------------------------------------------------------------


class TestFormError:
    def test_null(self) -> None:
        error = FormError.null()

        assert error.is_empty
        assert error.message is None
        assert error.to_dict() == {}
        assert FormError.null() is error

    def test_single(self) -> None:
        error = FormError.single("my error", "MY_CODE")

        assert not error.is_empty
        assert error.message == "my error"
        assert error.code == "MY_CODE"

    def test_code_only_is_not_empty(self) -> None:
        assert not FormError(code="MY_CODE").is_empty

    def test_aggregate_of_empty_children_is_empty(self) -> None:
        assert FormError.aggregate({"a": FormError.null()}).is_empty

    def test_aggregate(self) -> None:
        error = FormError.aggregate({"a": FormError.single("x")})

        assert not error.is_empty
        assert error.message is None
        assert error.children["a"].message == "x"

    def test_frozen(self) -> None:
        with pytest.raises(AttributeError):
            FormError.single("x").message = "y"  # type: ignore[misc]

    def test_to_dict(self) -> None:
        assert _nested().to_dict() == {0: "global", "a": "x", "b": {"c": "y"}}

    def test_to_dict_reduces_child_with_message(self) -> None:
        error = FormError.aggregate({
            "a": FormError("x", children={"b": FormError.single("y")}),
        })

        assert error.to_dict() == {"a": "x"}

    def test_with_field(self) -> None:
        error = FormError.aggregate({"a": FormError.single("x")}).with_field(HttpFieldPath.named("user"))

        assert error.field == HttpFieldPath.named("user")
        assert error.children["a"].field == HttpFieldPath.named("user")

    def test_with_field_prefixes_children_fields(self) -> None:
        child = FormError.single("x").with_field(HttpFieldPath.named("name"))
        error = FormError.aggregate({"name": child}).with_field(HttpFieldPath.named("user"))

        assert str(error.children["name"].field) == "user[name]"

    def test_with_field_keeps_prefixed_children(self) -> None:
        child = FormError.single("x").with_field(HttpFieldPath.prefixed("address_").add("city"))
        error = FormError.aggregate({"city": child}).with_field(HttpFieldPath.named("person"))

        assert str(error.children["city"].field) == "person[address_city]"

    def test_form_errors_carry_fields(self) -> None:
        form = _user_form()
        form.submit({"user": {}})

        assert str(form.error().children["user"].children["name"].field) == "user[name]"
        assert str(form.error().children["login"].field) == "login"

    def test_str(self) -> None:
        assert str(_nested()) == "global\na : x\nb : \n  c : y"

    def test_str_empty(self) -> None:
        assert str(FormError.null()) == ""


# ---------------------------------------------------------------------------
# Printers
# ---------------------------------------------------------------------------


class TestStringErrorPrinter:
    def test_children_only(self) -> None:
        error = FormError.aggregate({"a": FormError.single("x"), "b": FormError.single("y")})

        assert error.print(StringErrorPrinter()) == "a : x\nb : y"

    def test_options(self) -> None:
        printer = StringErrorPrinter(line_separator="<br>", indent="--", name_separator=": ")

        assert _nested().print(printer) == "global<br>a: x<br>b: <br>--c: y"

    def test_max_depth(self) -> None:
        assert _nested().print(StringErrorPrinter(max_depth=1)) == "global\na : x\nb : "

    def test_max_depth_zero(self) -> None:
        assert _nested().print(StringErrorPrinter(max_depth=0)) == "global"


class TestImplodeErrorPrinter:
    def test_join_messages(self) -> None:
        assert _nested().print(ImplodeErrorPrinter()) == "global\nx\ny"

    def test_separator(self) -> None:
        assert _nested().print(ImplodeErrorPrinter(", ")) == "global, x, y"

    def test_empty(self) -> None:
        assert FormError.null().print(ImplodeErrorPrinter()) == ""


class TestFieldErrorPrinter:
    def test_names_from_children(self) -> None:
        assert _nested().print(FieldErrorPrinter()) == {
            "": ["global"],
            "a": ["x"],
            "b[c]": ["y"],
        }

    def test_names_from_form_fields(self) -> None:
        form = _user_form()
        form.submit({"login": "", "user": {"name": ""}})

        assert form.error().print(FieldErrorPrinter()) == {
            "login": ["This value should not be blank."],
            "user[name]": ["This value should not be blank."],
        }

    def test_prefixed_embedded_form(self) -> None:
        builder = FormBuilder()
        builder.embedded("address", lambda address: address.string("city").required()).prefix()
        form = builder.build_element()

        form.submit({})

        assert form.error().print(FieldErrorPrinter()) == {
            "address_city": ["This value should not be blank."],
        }
