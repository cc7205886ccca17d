"""Tests for formtree.access — reading and writing the model of a form."""

from dataclasses import dataclass, field

import pytest

from formtree import FormBuilder
from formtree.access import (
    EXTRACTION,
    HYDRATION,
    Getter,
    MappingAccessor,
    RecordAccessor,
    Setter,
    accessor_for,
)
from formtree.child.child import Child
from formtree.leaf.elements import StringElement


@dataclass
class Address:
    city: str | None = None


@dataclass
class User:
    name: str | None = None
    address: Address = field(default_factory=Address)


def _child(name: str = "name") -> Child:
    return Child(name, StringElement())


# ---------------------------------------------------------------------------
# Accessors
# ---------------------------------------------------------------------------


class TestMappingAccessor:
    def test_get(self) -> None:
        accessor = MappingAccessor()
        data = {"name": "John", "address": {"city": "Paris"}}

        assert accessor.get(data, "name") == "John"
        assert accessor.get(data, "address.city") == "Paris"
        assert accessor.get(data, "missing") is None
        assert accessor.get(data, "name.first") is None

    def test_set(self) -> None:
        accessor = MappingAccessor()
        data: dict = {}

        accessor.set(data, "name", "John")
        accessor.set(data, "address.city", "Paris")

        assert data == {"name": "John", "address": {"city": "Paris"}}

    def test_set_keeps_existing_dict(self) -> None:
        data = {"address": {"zip": "75001"}}

        MappingAccessor().set(data, "address.city", "Paris")

        assert data == {"address": {"zip": "75001", "city": "Paris"}}


class TestRecordAccessor:
    def test_get(self) -> None:
        accessor = RecordAccessor()
        user = User("John", Address("Paris"))

        assert accessor.get(user, "name") == "John"
        assert accessor.get(user, "address.city") == "Paris"
        assert accessor.get(user, "missing") is None
        assert accessor.get(User(address=None), "address.city") is None  # type: ignore[arg-type]

    def test_set(self) -> None:
        accessor = RecordAccessor()
        user = User()

        accessor.set(user, "name", "John")
        accessor.set(user, "address.city", "Paris")

        assert user == User("John", Address("Paris"))

    def test_set_missing_parent(self) -> None:
        with pytest.raises(AttributeError):
            RecordAccessor().set(User(), "missing.city", "Paris")


class TestAccessorFor:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (None, MappingAccessor),
            ({}, MappingAccessor),
            (dict, MappingAccessor),
            (User, RecordAccessor),
            (User(), RecordAccessor),
        ],
    )
    def test_accessor_for(self, value: object, expected: type) -> None:
        assert isinstance(accessor_for(value), expected)


# ---------------------------------------------------------------------------
# Getter and setter
# ---------------------------------------------------------------------------


class TestGetter:
    def test_defaults_to_child_name(self) -> None:
        assert Getter().extract({"name": "John"}, _child()) == "John"

    def test_property_name(self) -> None:
        assert Getter("address.city").extract(User(address=Address("Paris")), _child()) == "Paris"

    def test_none_source(self) -> None:
        assert Getter().extract(None, _child()) is None

    def test_transformer(self) -> None:
        getter = Getter("name", lambda value, child: f"{child.name}={value}")

        assert getter.extract({"name": "John"}, _child()) == "name=John"

    def test_callable_as_first_argument_is_the_transformer(self) -> None:
        getter = Getter(lambda value, child: value.upper())

        assert getter.property_name is None
        assert getter.extract({"name": "john"}, _child()) == "JOHN"

    def test_custom_accessor(self) -> None:
        calls = []

        def custom(target, value, mode, accessor):
            calls.append(mode)
            return target["first"] + " " + target["last"]

        getter = Getter(None, None, custom)

        assert getter.extract({"first": "John", "last": "Smith"}, _child()) == "John Smith"
        assert calls == [EXTRACTION]

    def test_uses_parent_accessor(self) -> None:
        builder = FormBuilder().accessor(RecordAccessor())
        builder.string("name").getter()
        form = builder.build_element()

        form.import_(User("John"))

        assert form["name"].element.value() == "John"


class TestSetter:
    def test_defaults_to_child_name(self) -> None:
        target: dict = {}
        Setter().hydrate(target, "John", _child())

        assert target == {"name": "John"}

    def test_property_name(self) -> None:
        user = User()
        Setter("address.city").hydrate(user, "Paris", _child())

        assert user.address.city == "Paris"

    def test_transformer(self) -> None:
        target: dict = {}
        Setter(lambda value, child: value or "anonymous").hydrate(target, None, _child())

        assert target == {"name": "anonymous"}

    def test_custom_accessor(self) -> None:
        def custom(target, value, mode, accessor):
            assert mode == HYDRATION
            target["first"], target["last"] = value.split(" ")

        target: dict = {}
        Setter(None, None, custom).hydrate(target, "John Smith", _child())

        assert target == {"first": "John", "last": "Smith"}

    def test_dotted_setter_in_form(self) -> None:
        builder = FormBuilder().generates(User)
        builder.string("city").getter("address.city").setter("address.city")
        form = builder.build_element()

        form.import_(User(address=Address("Lyon")))
        assert form.http_value() == {"city": "Lyon"}

        form.submit({"city": "Paris"})
        assert form.value().address.city == "Paris"
