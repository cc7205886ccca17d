"""Tests for weak back-references — dropping a form releases its tree."""

import gc
import weakref

from formtree import FormBuilder


def _form():
    builder = FormBuilder()
    builder.string("name").required()
    builder.string("confirm").depends("name")
    builder.embedded("address", lambda address: address.string("city"))
    builder.array("tags").form(lambda tag: tag.string("label"))
    return builder.build_element()


class TestWeakReferences:
    def test_form_is_released(self) -> None:
        form = _form()
        form.submit({"name": "John", "address": {"city": "Paris"}, "tags": [{"label": "a"}]})
        ref = weakref.ref(form)

        del form
        gc.collect()

        assert ref() is None

    def test_form_released_without_collector(self) -> None:
        form = _form()
        form.submit({"name": "John", "tags": [{"label": "a"}]})
        ref = weakref.ref(form)

        gc.disable()
        try:
            del form
            assert ref() is None
        finally:
            gc.enable()

    def test_child_outlives_its_parent(self) -> None:
        form = _form()
        child = form["name"]

        assert child.parent is form

        del form
        gc.collect()

        assert child.parent is None
        assert child.element.root() is child.element

    def test_element_outlives_its_container(self) -> None:
        form = _form()
        tags = form["tags"].element

        del form
        gc.collect()

        assert tags.container is None

    def test_definition_is_reusable(self) -> None:
        builder = FormBuilder()
        builder.string("name").setter()

        first = builder.build_element()
        second = builder.build_element()
        first.submit({"name": "a"})
        second.submit({"name": "b"})

        assert first.value() == {"name": "a"}
        assert second.value() == {"name": "b"}
