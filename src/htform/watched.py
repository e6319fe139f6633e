"""
Watched and read-only attributes of an HTML element.

An element owns one registry and routes every attribute mutation
through ``handle_changed`` before committing it:

    attrs = WatchedAttributes()
    attrs.set_readonly("id").set_watched("name", on_name)
    attrs.set_change_callback(on_any_change)

    attrs.handle_changed("name", "new", "old")  # on_name, then on_any_change
    attrs.handle_changed("id", "x", "y")        # ReadonlyAttributeError
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, ClassVar

from .exceptions import ReadonlyAttributeError

logger = logging.getLogger(__name__)

WatchedCallback = Callable[[str | None], None]
ChangeCallback = Callable[[str, str | None, str | None], None]

ERROR_ATTRIBUTE_IS_READONLY = ReadonlyAttributeError.code


class AttributeType(Enum):
    WATCHED = 1
    READONLY = 2


@dataclass(frozen=True, slots=True)
class Watched:
    callback: WatchedCallback | None = None

    type: ClassVar[AttributeType] = AttributeType.WATCHED


@dataclass(frozen=True, slots=True)
class Readonly:
    type: ClassVar[AttributeType] = AttributeType.READONLY


class WatchedAttributes:
    """Per-element registry of watched and read-only attribute names."""

    def __init__(self) -> None:
        self._attributes: dict[str, Watched | Readonly] = {}
        self._change_callback: ChangeCallback | None = None

    def set_watched(self, name: str, callback: WatchedCallback) -> WatchedAttributes:
        """The callback gets the new value (``str | None``) only."""
        return self._set(name, Watched(callback))

    def set_readonly(self, name: str) -> WatchedAttributes:
        return self._set(name, Readonly())

    def remove_attribute(self, name: str) -> WatchedAttributes:
        self._attributes.pop(name.lower(), None)
        return self

    def _set(self, name: str, entry: Watched | Readonly) -> WatchedAttributes:
        name = name.lower()
        # Overwrites in place, keeping the original insertion position
        self._attributes[name] = entry
        logger.debug(f"attribute '{name}' registered as {entry.type.name.lower()}")
        return self

    def get_type(self, name: str) -> AttributeType | None:
        entry = self._attributes.get(name.lower())
        return entry.type if entry is not None else None

    def is_watched(self, name: str) -> bool:
        return self.get_type(name) is AttributeType.WATCHED

    def is_readonly(self, name: str) -> bool:
        return self.get_type(name) is AttributeType.READONLY

    def is_handled(self, name: str) -> bool:
        return self.is_watched(name) or self.is_readonly(name)

    def get_watched(self) -> list[str]:
        return self.get_names_by_type(AttributeType.WATCHED)

    def get_readonly(self) -> list[str]:
        return self.get_names_by_type(AttributeType.READONLY)

    def get_names_by_type(self, type_: AttributeType) -> list[str]:
        return [name for name, entry in self._attributes.items() if entry.type is type_]

    def set_change_callback(self, callback: ChangeCallback) -> WatchedAttributes:
        """
        Set the callback triggered on every accepted change, handled or not.

        It is called as ``callback(name, old_value, new_value)``.
        """
        self._change_callback = callback
        return self

    def handle_changed(
        self,
        name: str,
        new_value: str | None = None,
        old_value: str | None = None,
    ) -> None:
        """
        Dispatch an attribute change before the owner commits it.

        Raises ``ReadonlyAttributeError`` if the attribute is read-only and
        the value differs; the owner must then leave its value untouched.
        """
        if new_value == old_value:
            return

        entry = self._attributes.get(name.lower())

        if isinstance(entry, Readonly):
            raise ReadonlyAttributeError(name)

        if isinstance(entry, Watched) and entry.callback is not None:
            entry.callback(new_value)

        if self._change_callback is not None:
            self._change_callback(name, old_value, new_value)
