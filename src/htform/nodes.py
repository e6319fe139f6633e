"""
Element tree: attribute-bearing elements and the containers that name them.

Usage:
    from htform.nodes import Form, Group, Element

    form = Form(id="signup")
    address = form.append_child(Group("address"))
    street = address.append_child(Element("street"))

    street.get_name()                                 # "address[street]"
    form.set_value({"address": {"street": "Main"}})
    street.get_value()                                # "Main"

    form.set_attribute("id", "other")                 # ReadonlyAttributeError
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from typing import Any, TypeVar

from .config import HTFormConfig, get_config
from .exceptions import UnknownElementError
from .names import ElementName, generate_name, parse_name, reduce_name
from .watched import WatchedAttributes

logger = logging.getLogger(__name__)

N = TypeVar("N", bound="Element")

_NOT_FOUND = object()


class HTMLElement:
    """
    Base for anything carrying HTML attributes.

    Attribute names are case-insensitive. Once constructed, every
    mutation goes through the element's ``WatchedAttributes`` before
    it is stored, so a read-only attribute can never change.
    """

    def __init__(self, attributes: Mapping[str, Any] | None = None):
        self._attributes: dict[str, str] = {}
        self.init_done = False

        self.watched_attributes = WatchedAttributes()
        self.watched_attributes.set_change_callback(self.on_attribute_changed)
        self.init_watched_attributes(self.watched_attributes)

        self.merge_attributes(attributes)
        self.init_done = True

    def init_watched_attributes(self, attributes: WatchedAttributes) -> None:
        """Register the watched and read-only attributes of this element."""

    def on_attribute_changed(self, name: str, old_value: str | None, new_value: str | None) -> None:
        logger.debug(f"{self!r}: attribute '{name}' changed {old_value!r} -> {new_value!r}")

    def set_attribute(self, name: str, value: Any = None) -> HTMLElement:
        """Set an attribute. A ``None`` value sets a boolean property (``disabled="disabled"``)."""
        name = name.lower()
        str_value = name if value is None else str(value)

        if self.init_done:
            self.watched_attributes.handle_changed(name, str_value, self._attributes.get(name))

        self._attributes[name] = str_value
        return self

    def remove_attribute(self, name: str) -> HTMLElement:
        name = name.lower()
        if name not in self._attributes:
            return self

        if self.init_done:
            self.watched_attributes.handle_changed(name, None, self._attributes[name])

        del self._attributes[name]
        return self

    def get_attribute(self, name: str) -> str | None:
        return self._attributes.get(name.lower())

    def has_attribute(self, name: str) -> bool:
        return name.lower() in self._attributes

    def get_attributes(self) -> dict[str, str]:
        return dict(self._attributes)

    def merge_attributes(self, attributes: Mapping[str, Any] | None) -> HTMLElement:
        for name, value in (attributes or {}).items():
            self.set_attribute(name, value)
        return self

    def set_attributes(self, attributes: Mapping[str, Any]) -> HTMLElement:
        """Replace all attributes, removing the ones not present in ``attributes``."""
        wanted = {name.lower() for name in attributes}
        for name in [n for n in self._attributes if n not in wanted]:
            self.remove_attribute(name)
        return self.merge_attributes(attributes)

    def set_property_enabled(self, name: str, enabled: bool) -> HTMLElement:
        if enabled:
            return self.set_attribute(name)
        return self.remove_attribute(name)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._attributes.get('name')!r})"


class Element(HTMLElement):
    """A named form element holding a single value."""

    def __init__(
        self,
        name: str | None = None,
        attributes: Mapping[str, Any] | None = None,
        value: Any = None,
    ):
        self.container: Container | None = None
        self._value = value
        self.error: str | None = None
        super().__init__(attributes)

        if name is not None:
            self.set_name(name)

    def init_watched_attributes(self, attributes: WatchedAttributes) -> None:
        attributes.set_watched("name", self.on_name_changed)

    def on_name_changed(self, new_name: str | None) -> None:
        """Called before a new name is stored; ``get_name()`` still returns the old one."""

    def get_name(self) -> str | None:
        return self.get_attribute("name")

    def set_name(self, name: str | None) -> Element:
        if name is None:
            self.remove_attribute("name")
        else:
            self.set_attribute("name", name)
        return self

    def get_id(self) -> str | None:
        return self.get_attribute("id")

    def set_id(self, id_: str | None) -> Element:
        if id_ is None:
            self.remove_attribute("id")
        else:
            self.set_attribute("id", id_)
        return self

    def get_element_name(self) -> ElementName | None:
        name = self.get_name()
        return parse_name(name) if name is not None else None

    def get_name_path(self) -> list[str]:
        parsed = self.get_element_name()
        return parsed.get_name_path() if parsed is not None else []

    def get_value(self) -> Any:
        return self._value

    def set_value(self, value: Any) -> Element:
        self._value = value
        return self

    def set_error(self, error: str | None) -> Element:
        self.error = error
        return self

    def get_container(self) -> Container | None:
        return self.container


class Container(Element):
    """
    Element holding child elements.

    When ``prepends_name`` is true and the container is named, children
    are renamed to ``container[child]`` so their values nest under it.
    """

    prepends_name = False

    def __init__(
        self,
        name: str | None = None,
        attributes: Mapping[str, Any] | None = None,
    ):
        self._children: list[Element] = []
        super().__init__(name, attributes)

    def __iter__(self) -> Iterator[Element]:
        return iter(list(self._children))

    def __len__(self) -> int:
        return len(self._children)

    def get_elements(self) -> list[Element]:
        return list(self._children)

    def append_child(self, child: N) -> N:
        if child.container is not None:
            child.container.remove_child(child)

        child.container = self
        if self.prepends_name:
            child.set_name(generate_name(child.get_name(), self))

        self._children.append(child)
        logger.debug(f"{self!r}: appended {child!r}")
        return child

    def remove_child(self, child: N) -> N:
        if child not in self._children:
            raise UnknownElementError(child.get_name() or repr(child))

        self._children.remove(child)
        child.container = None
        if self.prepends_name:
            child.set_name(self.strip_container_name(child.get_name()))
        return child

    def strip_container_name(self, name: str | None, prefix: str | None = None) -> str | None:
        """Undo ``generate_name`` for a child name prefixed with this container's name."""
        prefix = self.get_name() if prefix is None else prefix
        if name is None or not prefix or not self.prepends_name:
            return name

        prefix_path = parse_name(prefix).get_name_path()
        path = parse_name(name).get_name_path()
        if len(path) <= len(prefix_path) or path[: len(prefix_path)] != prefix_path:
            return name

        # Bare "container[]" leaves no name of its own
        if path[len(prefix_path) :] == [""]:
            return None

        for level in prefix_path:
            name = reduce_name(name, level)
        return name

    def on_name_changed(self, new_name: str | None) -> None:
        if not self.prepends_name:
            return

        old_name = self.get_name()
        new_prefix = parse_name(new_name) if new_name is not None else None

        for child in self._children:
            base = self.strip_container_name(child.get_name(), old_name)
            child.set_name(generate_name(base, new_prefix))

        logger.debug(f"{self!r}: renamed {len(self._children)} children for {new_name!r}")

    def get_element_by_name(self, name: str) -> Element:
        for child in self.iter_elements():
            if child.get_name() == name:
                return child
        raise UnknownElementError(name)

    def iter_elements(self) -> Iterator[Element]:
        """Depth-first iteration over all descendants."""
        for child in self._children:
            yield child
            if isinstance(child, Container):
                yield from child.iter_elements()

    def set_value(self, value: Any) -> Container:
        """
        Populate children from submitted data.

        ``value`` is the nested mapping of the whole submission: each
        child looks up its value along its full name path.
        """
        if not isinstance(value, Mapping):
            return self

        for child in self._children:
            if isinstance(child, Container):
                child.set_value(value)
                continue

            parsed = child.get_element_name()
            if parsed is None:
                continue

            key = parsed.get_name_path()[0]
            found = _search_value(parsed, value[key]) if key in value else _NOT_FOUND

            if found is _NOT_FOUND:
                logger.debug(f"{child!r}: no value found")
                continue

            child.set_value(found)

        return self

    def get_value(self) -> dict[str, Any]:
        """Nested mapping of all descendant values, keyed by full name path."""
        values: dict[str, Any] = {}
        for name, value in self.get_values().items():
            _assign(values, parse_name(name).get_name_path(), value)
        return values

    def get_values(self) -> dict[str, Any]:
        """Flat mapping of full element name to value."""
        return {
            name: child.get_value()
            for child in self.iter_elements()
            if not isinstance(child, Container) and (name := child.get_name()) is not None
        }


class Group(Container):
    """Container whose name prefixes the names of its children."""

    prepends_name = True


class Fieldset(Container):
    """Visual grouping only: never named, children keep their own names."""

    def get_name(self) -> str | None:
        return None

    def set_name(self, name: str | None) -> Fieldset:
        return self


class Form(Container):
    """
    Top-level container.

    The attributes listed in the config's ``readonly_form_attributes``
    (``id`` and ``method`` by default) are fixed once the form exists.
    """

    def __init__(
        self,
        id: str | None = None,
        method: str = "post",
        attributes: Mapping[str, Any] | None = None,
        config: HTFormConfig | None = None,
    ):
        self.config = config or get_config()
        attrs = {"method": method.lower(), **(attributes or {})}
        if id is not None:
            attrs["id"] = id
        super().__init__(None, attrs)

    def init_watched_attributes(self, attributes: WatchedAttributes) -> None:
        super().init_watched_attributes(attributes)
        for name in self.config.readonly_form_attributes:
            attributes.set_readonly(name)


def _search_value(name: ElementName, value: Any) -> Any:
    """Descend into ``value`` along the sub-levels of ``name``."""
    if not isinstance(value, Mapping) or not name.has_sub_levels():
        return value

    reduced = name.reduce()
    key = reduced.get_name_path()[0]
    if key in value:
        return _search_value(reduced, value[key])

    return _NOT_FOUND


def _assign(target: dict[str, Any], path: list[str], value: Any) -> None:
    *parents, last = path
    for key in parents:
        node = target.get(key)
        if not isinstance(node, dict):
            node = target[key] = {}
        target = node
    target[last] = value
