"""
Tests for watched and read-only attributes.
"""

import pytest

from htform.exceptions import HTFormError, ReadonlyAttributeError
from htform.watched import ERROR_ATTRIBUTE_IS_READONLY, AttributeType, WatchedAttributes


@pytest.fixture
def calls():
    return []


@pytest.fixture
def attributes():
    return WatchedAttributes()


class TestRegistry:
    def test_chainable(self, attributes):
        result = attributes.set_watched("foo", print).set_readonly("bar").remove_attribute("baz")
        assert result is attributes

    def test_classification(self, attributes):
        attributes.set_watched("foo", print)
        attributes.set_readonly("bar")

        assert attributes.get_type("foo") is AttributeType.WATCHED
        assert attributes.get_type("bar") is AttributeType.READONLY
        assert attributes.get_type("baz") is None

        assert attributes.is_watched("foo") and not attributes.is_readonly("foo")
        assert attributes.is_readonly("bar") and not attributes.is_watched("bar")
        assert attributes.is_handled("foo") and attributes.is_handled("bar")
        assert not attributes.is_handled("baz")

    def test_case_insensitive(self, attributes):
        attributes.set_readonly("ID")

        assert attributes.is_readonly("id")
        assert attributes.is_readonly("Id")
        assert attributes.get_readonly() == ["id"]

    def test_reregister_overwrites(self, attributes):
        attributes.set_watched("foo", print)
        attributes.set_readonly("FOO")

        assert attributes.is_readonly("foo")
        assert attributes.get_watched() == []

    def test_remove(self, attributes):
        attributes.set_readonly("foo")
        attributes.remove_attribute("FOO")
        attributes.remove_attribute("unknown")

        assert attributes.get_type("foo") is None

    def test_insertion_order(self, attributes):
        attributes.set_readonly("zeta")
        attributes.set_watched("beta", print)
        attributes.set_readonly("alpha")
        attributes.set_watched("gamma", print)

        assert attributes.get_readonly() == ["zeta", "alpha"]
        assert attributes.get_watched() == ["beta", "gamma"]
        assert attributes.get_names_by_type(AttributeType.READONLY) == ["zeta", "alpha"]


class TestReadonly:
    def test_readonly_error(self, attributes):
        attributes.set_readonly("foo")

        with pytest.raises(ReadonlyAttributeError) as exc_info:
            attributes.handle_changed("foo", "bla")

        assert exc_info.value.code == ERROR_ATTRIBUTE_IS_READONLY == 102701
        assert exc_info.value.attribute == "foo"
        assert "read-only" in str(exc_info.value)

    def test_error_hierarchy(self, attributes):
        attributes.set_readonly("foo")

        with pytest.raises(HTFormError):
            attributes.handle_changed("foo", "new", "old")
        with pytest.raises(ValueError):
            attributes.handle_changed("foo", "new", "old")

    def test_same_value_does_not_raise(self, attributes):
        attributes.set_readonly("id")

        attributes.handle_changed("id", "same", "same")
        attributes.handle_changed("id", None, None)

    def test_case_insensitive_readonly(self, attributes):
        attributes.set_readonly("id")

        with pytest.raises(ReadonlyAttributeError):
            attributes.handle_changed("Id", "new", "old")

    def test_readonly_skips_change_callback(self, attributes, calls):
        attributes.set_readonly("id")
        attributes.set_change_callback(lambda *args: calls.append(args))

        with pytest.raises(ReadonlyAttributeError):
            attributes.handle_changed("id", "new", "old")

        assert calls == []


class TestWatched:
    def test_watched_changed(self, attributes, calls):
        attributes.set_watched("foo", calls.append)

        attributes.handle_changed("foo", "new")

        assert calls == ["new"]

    def test_watched_unchanged(self, attributes, calls):
        attributes.set_watched("foo", calls.append)

        attributes.handle_changed("foo", None, None)

        assert calls == []

    def test_watched_changed_to_none(self, attributes, calls):
        attributes.set_watched("foo", calls.append)

        attributes.handle_changed("foo", None, "")

        assert calls == [None]

    def test_empty_string_is_a_change(self, attributes, calls):
        attributes.set_watched("color", calls.append)

        attributes.handle_changed("color", "", None)

        assert calls == [""]

    def test_callback_gets_new_value_only(self, attributes):
        received = []
        attributes.set_watched("foo", lambda *args: received.append(args))

        attributes.handle_changed("foo", "new", "old")

        assert received == [("new",)]


class TestChangeCallback:
    def test_order(self, attributes, calls):
        attributes.set_watched("foo", lambda value: calls.append(("watched", value)))
        attributes.set_change_callback(lambda *args: calls.append(("owner", *args)))

        attributes.handle_changed("foo", "new", "old")

        assert calls == [("watched", "new"), ("owner", "foo", "old", "new")]

    def test_unclassified_attribute(self, attributes, calls):
        attributes.set_change_callback(lambda *args: calls.append(args))

        attributes.handle_changed("title", "new")

        assert calls == [("title", None, "new")]

    def test_no_change_no_callback(self, attributes, calls):
        attributes.set_change_callback(lambda *args: calls.append(args))

        attributes.handle_changed("title", "same", "same")

        assert calls == []

    def test_replaces_previous(self, attributes, calls):
        attributes.set_change_callback(lambda *args: calls.append("first"))
        attributes.set_change_callback(lambda *args: calls.append("second"))

        attributes.handle_changed("title", "new")

        assert calls == ["second"]

    def test_reentrant_dispatch_is_synchronous(self, attributes, calls):
        def on_foo(value):
            calls.append(("foo", value))
            attributes.handle_changed("bar", value, None)

        attributes.set_watched("foo", on_foo)
        attributes.set_watched("bar", lambda value: calls.append(("bar", value)))
        attributes.set_change_callback(lambda name, old, new: calls.append(("owner", name)))

        attributes.handle_changed("foo", "x")

        assert calls == [("foo", "x"), ("bar", "x"), ("owner", "bar"), ("owner", "foo")]
