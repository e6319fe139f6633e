"""
Pydantic validation for element trees.

Usage:
    from pydantic import BaseModel
    from htform.forms import validate_form, nest_form_data

    class Address(BaseModel):
        street: str = Field(min_length=3)

    class Signup(BaseModel):
        address: Address

    form.set_value(nest_form_data({"address[street]": "Main"}))
    data = validate_form(form, Signup)  # None if invalid, errors set on elements
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from .exceptions import UnknownElementError
from .names import join_name_path, parse_name
from .nodes import Container

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)


def parse_form_errors(error: ValidationError) -> dict[str, str]:
    """Convert Pydantic ValidationError to element name -> message dict."""
    errors = {}
    for err in error.errors():
        name = join_name_path(err["loc"])
        if name is not None:
            errors[name] = err["msg"]
    return errors


def nest_form_data(data: Mapping[str, Any]) -> dict[str, Any]:
    """
    Turn flat submitted keys into nested values.

    ``{"user[name]": "Bob", "tags[]": "a"}`` >
    ``{"user": {"name": "Bob"}, "tags": ["a"]}``
    """
    nested: dict[str, Any] = {}
    for key, value in data.items():
        *parents, last = parse_name(key).get_name_path()

        target = nested
        for level in parents:
            node = target.get(level)
            if not isinstance(node, dict):
                node = target[level] = {}
            target = node

        if last == "" and parents:
            items = value if isinstance(value, list) else [value]
            target.setdefault("", [])
            target[""].extend(items)
        else:
            target[last] = value

    return {k: _lift_lists(v) if isinstance(v, dict) else v for k, v in nested.items()}


def _lift_lists(node: dict[str, Any]) -> dict[str, Any] | list[Any]:
    if set(node) == {""} and isinstance(node[""], list):
        return node[""]
    return {k: _lift_lists(v) if isinstance(v, dict) else v for k, v in node.items()}


def validate_form(form: Container, model: type[T]) -> T | None:
    """
    Validate the form's values against a Pydantic model.

    On failure the messages are set on the matching elements and
    ``None`` is returned.
    """
    for element in form.iter_elements():
        element.set_error(None)

    try:
        return model.model_validate(form.get_value())
    except ValidationError as e:
        errors = parse_form_errors(e)

    for name, message in errors.items():
        try:
            form.get_element_by_name(name).set_error(message)
        except UnknownElementError:
            logger.warning(f"validation error for unknown element {name}: {message}")

    return None
