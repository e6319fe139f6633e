"""
htform - HTML form element trees with bracketed names and guarded attributes.

Element names follow the form submission convention (``foo[bar][sub]``)
and map onto nested values; element attributes can be watched or made
read-only.
"""

from .exceptions import HTFormError, ReadonlyAttributeError, UnknownElementError
from .names import (
    ElementName,
    generate_name,
    get_container_name,
    join_name_path,
    parse_name,
    reduce_name,
)
from .watched import ERROR_ATTRIBUTE_IS_READONLY, AttributeType, WatchedAttributes
from .nodes import Container, Element, Fieldset, Form, Group, HTMLElement
from .forms import nest_form_data, parse_form_errors, validate_form

__all__ = [
    # Names
    "ElementName",
    "parse_name",
    "get_container_name",
    "reduce_name",
    "generate_name",
    "join_name_path",
    # Attributes
    "WatchedAttributes",
    "AttributeType",
    "ERROR_ATTRIBUTE_IS_READONLY",
    # Element tree
    "HTMLElement",
    "Element",
    "Container",
    "Group",
    "Fieldset",
    "Form",
    # Validation
    "nest_form_data",
    "parse_form_errors",
    "validate_form",
    # Errors
    "HTFormError",
    "ReadonlyAttributeError",
    "UnknownElementError",
]

