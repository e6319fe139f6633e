"""Exceptions raised by htform."""

from __future__ import annotations


class HTFormError(Exception):
    """Base error, carrying a stable numeric code callers can match on."""

    code: int = 0

    def __init__(self, message: str, code: int | None = None):
        super().__init__(message)
        if code is not None:
            self.code = code


class ReadonlyAttributeError(HTFormError, ValueError):
    code = 102701

    def __init__(self, attribute: str):
        self.attribute = attribute.lower()
        super().__init__(f"The attribute [{self.attribute}] is read-only.")


class UnknownElementError(HTFormError, KeyError):
    code = 102801

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Unknown element: {name}")

    def __str__(self) -> str:
        return str(self.args[0])
