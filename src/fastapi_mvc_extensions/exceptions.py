"""MvcException hierarchy for argument, resolution and matching failures."""

from __future__ import annotations

from typing import Any


class MvcException(Exception):
    """Base for all package exceptions."""


class ArgumentError(MvcException, ValueError):
    """Invalid argument passed to a constructor or method."""

    def __init__(self, detail: str, *, param_name: str | None = None) -> None:
        super().__init__(detail)
        self.detail = detail
        self.param_name = param_name


class ResolutionError(MvcException, LookupError):
    """A service or constructor dependency could not be resolved."""

    def __init__(self, detail: str, *, service_type: Any = None) -> None:
        super().__init__(detail)
        self.detail = detail
        self.service_type = service_type


class ActionNotMatched(MvcException):
    """Action constraints rejected the request (404)."""

    def __init__(
        self, detail: str = "No matching action", *, status_code: int = 404
    ) -> None:
        super().__init__(detail)
        self.detail = detail
        self.status_code = status_code


def argument_cannot_be_null_or_empty(param_name: str) -> ArgumentError:
    return ArgumentError(
        "Value cannot be null or empty.", param_name=param_name
    )
