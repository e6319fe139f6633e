"""
Bracketed element names, as used by HTML form submissions.

Usage:
    from htform.names import parse_name, reduce_name, generate_name

    name = parse_name("address[street][line1]")
    name.container_name   # "address"
    name.sub_levels       # ("street", "line1")
    name.get_name_path()  # ["address", "street", "line1"]
    name.reduce().name    # "street[line1]"

    reduce_name("address[street]", "address")  # "street"
    generate_name("street", group)             # "address[street]"
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Protocol, runtime_checkable


@runtime_checkable
class NamedContainer(Protocol):
    """Anything that can act as a name prefix for nested elements."""

    def get_name(self) -> str | None: ...


@dataclass(frozen=True, slots=True)
class ElementName:
    """
    Parsed form of an element name.

    Immutable: compares and hashes by the raw name, and every
    transformation returns a fresh instance.
    """

    name: str
    container_name: str | None = field(init=False, compare=False, default=None)
    sub_levels: tuple[str, ...] = field(init=False, compare=False, default=())

    def __post_init__(self) -> None:
        if "[" not in self.name:
            return

        tokens = self.name.split("[")
        object.__setattr__(self, "container_name", tokens[0])
        object.__setattr__(self, "sub_levels", tuple(_strip_bracket(t) for t in tokens[1:]))

    def get_name(self) -> str:
        return self.name

    def get_container_name(self) -> str | None:
        return self.container_name

    def get_sub_levels(self) -> list[str]:
        return list(self.sub_levels)

    def has_container(self) -> bool:
        return self.container_name is not None

    def has_sub_levels(self) -> bool:
        return bool(self.sub_levels)

    def count_sub_levels(self) -> int:
        return len(self.sub_levels)

    def get_name_path(self) -> list[str]:
        """
        Keys to descend into a nested values mapping.

        - foo > ["foo"]
        - foo[bar] > ["foo", "bar"]
        - foo[bar][sub] > ["foo", "bar", "sub"]
        """
        if self.container_name is None:
            return [self.name]
        return [self.container_name, *self.sub_levels]

    @property
    def name_path(self) -> list[str]:
        return self.get_name_path()

    def reduce(self) -> ElementName:
        """
        Strip one nesting level from the name.

        - foo > foo
        - foo[bar] > bar
        - foo[bar][sub] > bar[sub]
        """
        if self.container_name is None:
            return ElementName(self.name)

        base, *rest = self.sub_levels
        if rest:
            base += "[" + "][".join(rest) + "]"

        # Re-parsed, so malformed levels behave like top-level input
        return ElementName(base)

    def __str__(self) -> str:
        return self.name


def _strip_bracket(token: str) -> str:
    return token[:-1] if token.endswith("]") else token


def parse_name(name: str) -> ElementName:
    """Parse a bracketed element name. Never fails."""
    return ElementName(name)


def get_container_name(name: str) -> str | None:
    """
    Container part of an element name, if any.

    - foo > None
    - foo[bar] > foo
    - foo[bar][sub] > foo
    """
    return parse_name(name).container_name


def reduce_name(name: str, container_name: str | None = None) -> str:
    """
    Strip the container prefix from an element name.

    With a container name, only names nested under exactly that
    container are reduced; any other name is returned unchanged.
    """
    parsed = parse_name(name)

    if not parsed.has_container():
        return name

    if container_name is not None and parsed.container_name != container_name:
        return name

    return parsed.reduce().name


def generate_name(name: str | None, container: NamedContainer | None = None) -> str | None:
    """
    Full submission name of an element nested in a container.

    The container's name path is followed by the element's own:
    ``prefix[sub]`` + ``foo`` > ``prefix[sub][foo]``,
    ``c`` + ``a[b]`` > ``c[a][b]``.
    """
    if name is None:
        return None

    if container is None:
        return name

    prefix = container.get_name()
    if not prefix:
        return name

    return join_name_path([*parse_name(prefix).get_name_path(), *parse_name(name).get_name_path()])


def join_name_path(path: Iterable[str | int]) -> str | None:
    """
    Build an element name from a name path, the inverse of
    ``ElementName.get_name_path()``.
    """
    parts = [str(p) for p in path]
    if not parts:
        return None

    base, *levels = parts
    if not levels:
        return base
    return base + "[" + "][".join(levels) + "]"
