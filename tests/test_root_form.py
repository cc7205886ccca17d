"""Tests for formtree.aggregate.root and formtree.button — root forms and submit buttons."""

import gc
import weakref

import pytest

from formtree import FormBuilder, InvalidOperation, RootForm, SubmitButton
from formtree.button import SubmitButtonBuilder
from formtree.child.child import Child
from formtree.http.fields import HttpFieldPath
from formtree.path import FieldPath
from formtree.registry import Registry
from formtree.validation import satisfy
from formtree.view import ButtonView


def _article_root() -> RootForm:
    builder = FormBuilder()
    builder.string("title").required().setter()
    builder.string("body").setter()
    builder.button("save")
    builder.button("publish", "yes")
    return builder.build_root()


# ---------------------------------------------------------------------------
# Buttons
# ---------------------------------------------------------------------------


class TestSubmitButton:
    def test_clicked_with_its_value(self) -> None:
        button = SubmitButton("save")

        assert button.submit({"save": "ok"}) is True
        assert button.clicked

    def test_other_value_is_not_a_click(self) -> None:
        button = SubmitButton("save", "yes")

        assert button.submit({"save": "ok"}) is False
        assert not button.clicked

    def test_missing_field_is_not_a_click(self) -> None:
        button = SubmitButton("save")
        button.submit({"save": "ok"})

        assert button.submit({"title": "Hello"}) is False
        assert not button.clicked

    def test_non_mapping_payload(self) -> None:
        button = SubmitButton("save")

        assert button.submit(None) is False
        assert button.submit("save") is False

    def test_value_is_compared_as_string(self) -> None:
        button = SubmitButton("page", "2")

        assert button.submit({"page": 2}) is True

    def test_to_http(self) -> None:
        assert SubmitButton("publish", "yes").to_http() == {"publish": "yes"}

    def test_view(self) -> None:
        button = SubmitButton("save")
        button.submit({"save": "ok"})

        assert button.view() == ButtonView(name="save", value="ok", clicked=True)
        assert button.view(HttpFieldPath("article")).name == "article[save]"


class TestSubmitButtonBuilder:
    def test_default_value(self) -> None:
        button = SubmitButtonBuilder("save").build_button()

        assert button.name == "save"
        assert button.value == "ok"

    def test_custom_value(self) -> None:
        assert SubmitButtonBuilder("publish").value("yes").build_button().value == "yes"

    def test_button_class(self) -> None:
        class ImageButton(SubmitButton):
            pass

        button = SubmitButtonBuilder("send", ImageButton).build_button()

        assert type(button) is ImageButton


# ---------------------------------------------------------------------------
# Root form
# ---------------------------------------------------------------------------


class TestRootForm:
    def test_build_root(self) -> None:
        root = _article_root()

        assert isinstance(root, RootForm)
        assert list(root.buttons) == ["save", "publish"]
        assert root.button("publish").value == "yes"
        assert "title" in root
        assert len(root) == 2
        assert root["title"] is root.form["title"]

    def test_submit_delegates_to_the_form(self) -> None:
        root = _article_root()
        root.submit({"title": "Hello", "body": "World", "save": "ok"})

        assert root.valid
        assert root.value() == {"title": "Hello", "body": "World"}
        assert root.form.value() == {"title": "Hello", "body": "World"}

    def test_submit_button(self) -> None:
        root = _article_root()
        root.submit({"title": "Hello", "publish": "yes"})

        assert root.submit_button() is root.button("publish")
        assert root.button("publish").clicked
        assert not root.button("save").clicked

    def test_first_declared_button_wins(self) -> None:
        root = _article_root()
        root.submit({"title": "Hello", "publish": "yes", "save": "ok"})

        assert root.submit_button() is root.button("save")

    def test_no_button_clicked(self) -> None:
        root = _article_root()
        root.submit({"title": "Hello", "publish": "no"})

        assert root.submit_button() is None

    def test_submit_button_is_reset(self) -> None:
        root = _article_root()
        root.submit({"title": "Hello", "save": "ok"})
        root.submit({"title": "Hello"})

        assert root.submit_button() is None
        assert not root.button("save").clicked

    def test_patch(self) -> None:
        root = _article_root()
        root.import_({"title": "Hello", "body": "World"})
        root.patch({"body": "Changed", "publish": "yes"})

        assert root.submit_button() is root.button("publish")
        assert root.value() == {"title": "Hello", "body": "Changed"}

    def test_invalid_form_keeps_the_button(self) -> None:
        root = _article_root()
        root.submit({"save": "ok"})

        assert not root.valid
        assert root.submit_button() is root.button("save")
        assert root.error().children["title"].message is not None

    def test_unknown_button(self) -> None:
        with pytest.raises(KeyError, match="is not found"):
            _article_root().button("delete")

    def test_http_value_includes_buttons(self) -> None:
        root = _article_root()
        root.import_({"title": "Hello", "body": "World"})

        assert root.http_value() == {"title": "Hello", "body": "World", "save": "ok", "publish": "yes"}

    def test_form_field_wins_over_button(self) -> None:
        builder = FormBuilder()
        builder.string("action").setter()
        builder.button("action", "send")
        root = builder.build_root()
        root.import_({"action": "draft"})

        assert root.http_value() == {"action": "draft"}

    def test_without_buttons(self) -> None:
        builder = FormBuilder()
        builder.string("title").setter()
        root = builder.build_root()
        root.import_({"title": "Hello"})

        assert root.http_value() == root.form.http_value()
        assert root.view().buttons == {}

    def test_view_has_buttons(self) -> None:
        root = _article_root()
        root.submit({"title": "Hello", "publish": "yes"})
        view = root.view()

        assert view["title"].value == "Hello"
        assert view.buttons["publish"] == ButtonView(name="publish", value="yes", clicked=True)
        assert view.buttons["save"].clicked is False

    def test_cannot_be_embedded(self) -> None:
        root = _article_root()

        with pytest.raises(InvalidOperation, match="root form"):
            root.set_container(Child("article", root))

    def test_children_are_read_only(self) -> None:
        with pytest.raises(InvalidOperation):
            _article_root()["title"] = "Hello"


# ---------------------------------------------------------------------------
# Tree
# ---------------------------------------------------------------------------


class TestRootOfTree:
    def test_form_root_is_the_root_form(self) -> None:
        root = _article_root()

        assert root.form.root() is root
        assert root["title"].element.root() is root

    def test_form_without_root_form(self) -> None:
        builder = FormBuilder()
        builder.string("title")
        form = builder.build_element()

        assert form.root() is form
        assert form["title"].element.root() is form

    def test_rule_reads_the_clicked_button(self) -> None:
        def needs_body_to_publish(value, element) -> bool:
            return bool(value) or not element.root().button("publish").clicked

        builder = FormBuilder()
        builder.string("title").setter()
        builder.string("body").setter().satisfy(satisfy(needs_body_to_publish))
        builder.button("save")
        builder.button("publish", "yes")
        root = builder.build_root()

        root.submit({"title": "Hello", "save": "ok"})
        assert root.valid

        root.submit({"title": "Hello", "publish": "yes"})
        assert not root.valid
        assert root.error().children["body"].message == "This value is not valid."

    def test_absolute_path_starts_at_root_form(self) -> None:
        root = _article_root()
        root.submit({"title": "Hello", "body": "World"})

        assert FieldPath.parse("/title").resolve(root["body"].element) is root["title"].element
        assert root.find_field("body") is root["body"].element
        assert root.find_field_value("title") == "Hello"

    def test_custom_button_builder(self) -> None:
        class ImageButton(SubmitButton):
            pass

        registry = Registry()
        registry.register_button(lambda name: SubmitButtonBuilder(name, ImageButton))
        builder = FormBuilder(registry)
        builder.button("send")

        assert type(builder.build_root().button("send")) is ImageButton

    def test_root_form_released_without_collector(self) -> None:
        root = _article_root()
        root.submit({"title": "Hello", "save": "ok"})
        form_ref = weakref.ref(root.form)
        root_ref = weakref.ref(root)

        gc.disable()
        try:
            del root
            assert root_ref() is None
            assert form_ref() is None
        finally:
            gc.enable()
