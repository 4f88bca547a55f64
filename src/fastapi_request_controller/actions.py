"""Controller: action-dispatching ControllerBase with temp data persistence."""

from __future__ import annotations

import inspect
import logging
from collections.abc import Callable
from typing import Any, ClassVar, TypeVar

from fastapi import HTTPException

from fastapi_request_controller.context import ControllerContext
from fastapi_request_controller.controller import ControllerBase
from fastapi_request_controller.exceptions import InvalidOperationError
from fastapi_request_controller.temp_data import (
    InMemoryTempDataProvider,
    TempDataProvider,
)
from fastapi_request_controller.value_providers import ValueProviderFactoryCollection

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Any])


def action(func: F | None = None, *, name: str | None = None) -> Any:
    """Mark a controller method as a routable action.

    Usable bare (``@action``) or with an explicit name
    (``@action(name="list")``). Names match case-insensitively.
    """

    def decorate(f: F) -> F:
        f._action_name = name or f.__name__  # type: ignore[attr-defined]
        return f

    if func is not None:
        return decorate(func)
    return decorate


class Controller(ControllerBase):
    """Controller that dispatches to the method named by the ``action`` route value.

    Action parameters are bound by name from ``value_provider``; unmatched
    parameters take their default, else ``None``. Temp data is loaded from
    ``temp_data_provider`` before the action and saved after it, except for
    child actions, which share their parent's temp data.
    """

    temp_data_provider: ClassVar[TempDataProvider] = InMemoryTempDataProvider()

    def __init__(
        self,
        *,
        temp_data_provider: TempDataProvider | None = None,
        value_provider_factories: ValueProviderFactoryCollection | None = None,
        validate_request: bool = True,
    ) -> None:
        super().__init__(
            value_provider_factories=value_provider_factories,
            validate_request=validate_request,
        )
        if temp_data_provider is not None:
            self.temp_data_provider = temp_data_provider  # type: ignore[misc]

    @classmethod
    def action_methods(cls) -> dict[str, str]:
        """Map lower-cased action names to attribute names."""
        actions: dict[str, str] = {}
        for klass in reversed(cls.__mro__):
            for attr, value in vars(klass).items():
                action_name = getattr(value, "_action_name", None)
                if action_name is not None:
                    actions[action_name.lower()] = attr
        return actions

    async def execute_core(self) -> Any:
        context = self._require_context()
        self._load_temp_data()
        try:
            action_name = context.route_data.get_required_string("action")
            attr = self.action_methods().get(action_name.lower())
            if attr is None:
                return self.handle_unknown_action(action_name)
            logger.debug(
                "Invoking action %s.%s", type(self).__qualname__, action_name
            )
            return await self.invoke_action(getattr(self, attr))
        finally:
            self._save_temp_data()

    async def invoke_action(self, method: Callable[..., Any]) -> Any:
        result = method(**self.bind_parameters(method))
        if inspect.isawaitable(result):
            result = await result
        return result

    def bind_parameters(self, method: Callable[..., Any]) -> dict[str, Any]:
        arguments: dict[str, Any] = {}
        for parameter in inspect.signature(method).parameters.values():
            if parameter.kind in (
                inspect.Parameter.VAR_POSITIONAL,
                inspect.Parameter.VAR_KEYWORD,
            ):
                continue
            found = self.value_provider.get_value(parameter.name)
            if found is not None:
                arguments[parameter.name] = found.raw_value
            elif parameter.default is not inspect.Parameter.empty:
                arguments[parameter.name] = parameter.default
            else:
                arguments[parameter.name] = None
        return arguments

    def handle_unknown_action(self, action_name: str) -> Any:
        raise HTTPException(
            status_code=404,
            detail=(
                f"A public action method '{action_name}' was not found on "
                f"controller '{type(self).__qualname__}'."
            ),
        )

    def _require_context(self) -> ControllerContext:
        if self.controller_context is None:
            raise InvalidOperationError(
                f"Controller '{type(self).__qualname__}' has not been "
                "initialized with a request context."
            )
        return self.controller_context

    def _load_temp_data(self) -> None:
        context = self._require_context()
        if not context.is_child_action:
            self.temp_data.load(context, self.temp_data_provider)

    def _save_temp_data(self) -> None:
        context = self._require_context()
        if not context.is_child_action:
            self.temp_data.save(context, self.temp_data_provider)
