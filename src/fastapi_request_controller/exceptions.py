"""ControllerException hierarchy for argument and lifecycle errors."""

from __future__ import annotations


class ControllerException(Exception):
    """Base for all controller exceptions."""


class ArgumentError(ControllerException, ValueError):
    """An argument passed to a controller operation is invalid."""

    def __init__(self, detail: str, *, param_name: str | None = None) -> None:
        message = detail
        if param_name:
            message = f"{detail}\r\nParameter name: {param_name}"
        super().__init__(message)
        self.detail = detail
        self.param_name = param_name


class ArgumentNullError(ArgumentError):
    """A required argument was ``None``."""

    def __init__(
        self, param_name: str, detail: str = "Value cannot be null."
    ) -> None:
        super().__init__(detail, param_name=param_name)


class InvalidOperationError(ControllerException, RuntimeError):
    """Operation is not valid for the current state of the object."""

    def __init__(self, detail: str) -> None:
        super().__init__(detail)
        self.detail = detail
